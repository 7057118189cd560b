"""NPC 플레이어 기억 테스트"""

from npcsim.core.npc.memory import (
    DialogueHistoryEntry,
    NPCMemory,
    adjust_relationship,
    append_history,
    promote_topics,
    record_quest_completed,
    record_quest_given,
)
from npcsim.services.memory_store import MemoryStore


def _make_memory(**kwargs) -> NPCMemory:
    defaults = {"npc_id": "npc-001"}
    defaults.update(kwargs)
    return NPCMemory(**defaults)


class TestRelationship:
    def test_bounds(self):
        memory = _make_memory(relationship=9)
        adjust_relationship(memory, 5)
        assert memory.relationship == 10
        adjust_relationship(memory, -30)
        assert memory.relationship == -10

    def test_small_change_no_event(self):
        memory = _make_memory()
        assert adjust_relationship(memory, 1) is None
        assert memory.player_actions == []

    def test_significant_change_recorded(self):
        memory = _make_memory()
        event = adjust_relationship(memory, -2, timestamp=90)
        assert event.description == "Said something that greatly displeased the NPC"
        assert event.impact == -2
        assert event.timestamp == 90
        assert memory.player_actions == [event]


class TestHistory:
    def test_cap_keeps_newest(self):
        memory = _make_memory()
        for i in range(15):
            append_history(memory, DialogueHistoryEntry("response", f"line {i}"), cap=10)
        assert len(memory.conversation_history) == 10
        assert memory.conversation_history[0].npc_response == "line 5"
        assert memory.conversation_history[-1].npc_response == "line 14"


class TestQuests:
    def test_quest_given_once(self):
        memory = _make_memory()
        assert record_quest_given(memory, "q1")
        assert not record_quest_given(memory, "q1")
        assert memory.quests_given == ["q1"]
        assert memory.player_actions[0].description == "Gave a quest to the player"

    def test_quest_completed_bonus(self):
        memory = _make_memory(relationship=8)
        assert record_quest_completed(memory, "q1")
        assert memory.relationship == 10
        assert memory.player_actions[-1].impact == 3
        assert not record_quest_completed(memory, "q1")


class TestTopics:
    def test_familiarity_capped_at_five(self):
        memory = _make_memory()
        for _ in range(7):
            promote_topics(memory, ["wolves"])
        assert memory.known_topics == {"wolves": 5}


class TestMemoryStore:
    def test_lazy_creation(self):
        store = MemoryStore()
        assert store.get("npc-1") is None
        memory = store.get_or_create("npc-1")
        assert store.get_or_create("npc-1") is memory
        assert "npc-1" in store
        assert len(store) == 1
        assert store.all() == [memory]
