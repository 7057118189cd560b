"""SimulationContext 틱 통합 테스트"""

import random
from itertools import combinations

import pytest

from npcsim.core.clock import GameClock
from npcsim.core.dialogue.quests import QuestInfo
from npcsim.core.event_types import EventTypes
from npcsim.core.npc.models import NPCData
from npcsim.engine.simulation import ClockRewindError, SimulationContext
from npcsim.services.npc_registry import InMemoryNPCRegistry

HOUR = 60
DAY = 24 * HOUR


def _town():
    return [
        NPCData("npc-hilda", "Hilda", occupation="innkeeper", faction="commoners", location="tavern"),
        NPCData("npc-oswin", "Oswin", occupation="merchant", faction="merchants guild", location="shop"),
        NPCData("npc-greta", "Greta", occupation="farmer", faction="commoners", location="farm"),
        NPCData("npc-rolf", "Rolf", occupation="beggar", location="town_streets"),
    ]


def _make_context(seed: int = 3) -> SimulationContext:
    return SimulationContext(
        InMemoryNPCRegistry(),
        clock=GameClock(),
        rng=random.Random(seed),
        visibility=lambda a, b, loc: True,
    )


class TestPopulate:
    def test_populate_registers_and_schedules(self):
        sim = _make_context()
        assert sim.populate(_town()) == 4
        for npc in sim.registry.get_all_npcs():
            assert npc.schedule is not None
            assert sim.scheduler.is_managed(npc.npc_id)

    def test_forced_locations(self):
        sim = _make_context()
        sim.populate(_town(), forced_locations={"npc-hilda": {12: "temple"}})
        slot = sim.scheduler.get_current_activity("npc-hilda", 12 * HOUR)
        assert slot.location == "temple"

    def test_manage_existing(self):
        registry = InMemoryNPCRegistry(_town())
        sim = SimulationContext(registry, clock=GameClock(), rng=random.Random(1))
        assert sim.manage_existing() == 4
        assert len(sim.scheduler.managed_npc_ids) == 4


class TestAdvance:
    def test_market_meeting_creates_relationships(self):
        """14시 시장: 상인은 가게, 농부와 거지는 시장에서 만난다."""
        sim = _make_context()
        sim.populate(_town())

        tick = sim.advance(14 * HOUR)

        greta = sim.registry.get_npc("npc-greta")
        assert greta.location == "market_square"
        assert tick.relationships_created >= 1
        assert greta.get_relationship("npc-rolf") is not None
        assert sim.current_time == 14 * HOUR

    def test_late_first_meeting_keeps_initial_value(self):
        """9일째 시장에서 처음 만난 기록은 그 틱에 감쇠되지 않는다"""
        sim = _make_context()
        sim.populate(_town())

        t = 9 * DAY + 14 * HOUR
        tick = sim.advance(t)

        assert tick.relationships_created >= 1
        assert tick.relationships_decayed == 0
        record = sim.registry.get_npc("npc-greta").get_relationship("npc-rolf")
        assert record.last_interaction_time == t

    def test_clock_cannot_move_back(self):
        sim = _make_context()
        sim.populate(_town())
        sim.advance(10 * HOUR)
        with pytest.raises(ClockRewindError):
            sim.advance(9 * HOUR)
        assert sim.current_time == 10 * HOUR
        sim.advance(10 * HOUR)

    def test_tick_event_emitted(self):
        sim = _make_context()
        sim.populate(_town())
        sim.advance(8 * HOUR)
        ticks = sim.event_bus.recent(EventTypes.TICK_PROCESSED)
        assert ticks[0].data["time"] == 8 * HOUR

    def test_full_week_keeps_invariants(self):
        sim = _make_context(seed=11)
        sim.populate(_town())
        for t in range(0, 7 * DAY, 15):
            sim.advance(t)

        for npc in sim.registry.get_all_npcs():
            for record in npc.relationships:
                assert -100 <= record.value <= 100
        ids = [npc.npc_id for npc in sim.registry.get_all_npcs()]
        for a_id, b_id in combinations(ids, 2):
            times = sorted(
                r.timestamp for r in sim.interactions.get_interactions_between_npcs(a_id, b_id)
            )
            assert all(b - a >= 60 for a, b in zip(times, times[1:]))

    def test_dialogue_uses_simulation_time(self):
        sim = _make_context()
        sim.populate(_town())
        sim.advance(9 * HOUR)
        hilda = sim.registry.get_npc("npc-hilda")
        sim.dialogue.start_conversation(hilda)
        assert sim.dialogue.get_npc_memory("npc-hilda").last_interaction_time == 9 * HOUR


# ── 퀘스트 대화 ──


WOLVES = QuestInfo(
    quest_id="q-wolves",
    title="The Mill Wolves",
    description="Wolves are taking sheep near the old mill.",
    objectives=["clear the wolf den"],
    rewards=["20 gold coins"],
)


class _Catalog:
    def __init__(self, *quests: QuestInfo) -> None:
        self._quests = {q.quest_id: q for q in quests}

    def get_quest(self, quest_id):
        return self._quests.get(quest_id)

    def next_quest_for(self, npc_id):
        return next(iter(self._quests.values()), None)


class _Tracker:
    def __init__(self, *quest_ids: str) -> None:
        self._ids = set(quest_ids)

    def has_quest(self, quest_id: str) -> bool:
        return quest_id in self._ids


def _quest_context(catalog=None, tracker=None) -> SimulationContext:
    sim = SimulationContext(
        InMemoryNPCRegistry(),
        clock=GameClock(),
        rng=random.Random(3),
        quest_catalog=catalog,
        quest_tracker=tracker,
    )
    sim.populate(_town())
    return sim


class TestQuestCompletion:
    def test_completion_node_added_and_playable(self):
        sim = _quest_context(catalog=_Catalog(WOLVES))
        hilda = sim.registry.get_npc("npc-hilda")
        sim.dialogue.start_conversation(hilda)
        sim.dialogue.end_conversation("npc-hilda")

        node_id = sim.record_quest_completed("npc-hilda", "q-wolves")
        assert node_id == "quest-completion-q-wolves"
        node = hilda.dialogue[-1]
        assert node.tags == ["quest_completion", "q-wolves"]
        assert "The Mill Wolves" in node.text

        result = sim.dialogue.start_conversation(hilda, start_node_id=node_id)
        assert [r.text for r in result.available_responses] == [
            "You're welcome.",
            "What about my reward?",
        ]
        done = sim.dialogue.select_response(hilda, "quest-thanks-q-wolves")
        assert done.conversation_ended is True
        # +3 완료 보너스, +1 감사 응답
        assert sim.dialogue.get_npc_memory("npc-hilda").relationship == 4

    def test_second_completion_adds_nothing(self):
        sim = _quest_context()
        hilda = sim.registry.get_npc("npc-hilda")
        sim.dialogue.start_conversation(hilda)
        assert sim.record_quest_completed("npc-hilda", "q-wolves") is not None
        assert sim.record_quest_completed("npc-hilda", "q-wolves") is None
        assert len(hilda.dialogue) == 1
        assert "your quest" in hilda.dialogue[0].text

    def test_unknown_npc(self):
        sim = _quest_context()
        assert sim.record_quest_completed("ghost", "q-wolves") is None


class TestQuestOffer:
    def test_offer_nodes_added_and_accept_flow(self):
        sim = _quest_context(catalog=_Catalog(WOLVES))
        quest = sim.offer_quest("npc-oswin")
        assert quest is WOLVES

        oswin = sim.registry.get_npc("npc-oswin")
        assert len(oswin.dialogue) == 4
        sim.dialogue.start_conversation(oswin, start_node_id="quest-offer-q-wolves")
        details = sim.dialogue.select_response(oswin, "more-info-q-wolves")
        assert "In return, I'll give you 20 gold coins." in details.text

        accepted = sim.dialogue.select_response(oswin, "details-accept-q-wolves")
        assert accepted.quest_accepted == "q-wolves"
        assert sim.dialogue.get_npc_memory("npc-oswin").quests_given == ["q-wolves"]

    def test_offer_twice_keeps_graph(self):
        sim = _quest_context(catalog=_Catalog(WOLVES))
        sim.offer_quest("npc-oswin")
        sim.offer_quest("npc-oswin")
        assert len(sim.registry.get_npc("npc-oswin").dialogue) == 4

    def test_no_catalog(self):
        sim = _quest_context()
        assert sim.offer_quest("npc-oswin") is None
        assert sim.registry.get_npc("npc-oswin").dialogue == []

    def test_active_quest_not_offered_again(self):
        sim = _quest_context(catalog=_Catalog(WOLVES), tracker=_Tracker("q-wolves"))
        assert sim.offer_quest("npc-oswin") is None
        assert sim.registry.get_npc("npc-oswin").dialogue == []
