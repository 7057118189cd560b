"""NPC의 플레이어 기억

NPC 1명이 플레이어에 대해 기억하는 내용.
관계 수치는 -10 ~ +10, 대화 기록은 FIFO 상한 유지.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# ── 상수 ────────────────────────────────────────────────────

MEMORY_RELATIONSHIP_MIN = -10
MEMORY_RELATIONSHIP_MAX = 10
MAX_TOPIC_FAMILIARITY = 5
SIGNIFICANT_CHANGE = 2  # 이 이상 변동 시 기억 이벤트 기록
DEFAULT_HISTORY_CAP = 10

QUEST_GIVEN_IMPACT = 1
QUEST_COMPLETED_IMPACT = 3


@dataclass
class MemoryEvent:
    """플레이어 행동에 대한 기억 1건"""

    event_type: str  # "conversation" | "quest"
    description: str
    impact: int
    timestamp: int = 0


@dataclass
class DialogueHistoryEntry:
    """대화 기록 1건 (대화 종료 후에도 남음)"""

    context: str  # "greeting" | "response"
    npc_response: str
    player_statement: str = ""
    timestamp: int = 0


@dataclass
class NPCMemory:
    """NPC의 플레이어 기억"""

    npc_id: str
    interaction_count: int = 0
    relationship: int = 0  # -10 ~ +10
    known_topics: Dict[str, int] = field(default_factory=dict)  # topic → 친숙도 0~5
    quests_given: List[str] = field(default_factory=list)
    quests_completed: List[str] = field(default_factory=list)
    conversation_history: List[DialogueHistoryEntry] = field(default_factory=list)
    player_actions: List[MemoryEvent] = field(default_factory=list)
    last_interaction_time: Optional[int] = None


def clamp_memory_relationship(value: int) -> int:
    """-10 ~ +10 클램프."""
    return max(MEMORY_RELATIONSHIP_MIN, min(MEMORY_RELATIONSHIP_MAX, value))


def adjust_relationship(
    memory: NPCMemory, change: int, timestamp: int = 0
) -> Optional[MemoryEvent]:
    """관계 변동 적용. |change| ≥ 2면 기억 이벤트를 남기고 반환."""
    memory.relationship = clamp_memory_relationship(memory.relationship + change)
    if abs(change) < SIGNIFICANT_CHANGE:
        return None

    if change > 0:
        description = "Said something that greatly pleased the NPC"
    else:
        description = "Said something that greatly displeased the NPC"
    event = MemoryEvent("conversation", description, change, timestamp)
    memory.player_actions.append(event)
    return event


def append_history(
    memory: NPCMemory, entry: DialogueHistoryEntry, cap: int = DEFAULT_HISTORY_CAP
) -> None:
    """대화 기록 추가 후 오래된 것부터 잘라 cap 유지"""
    memory.conversation_history.append(entry)
    if len(memory.conversation_history) > cap:
        memory.conversation_history = memory.conversation_history[-cap:]


def record_quest_given(memory: NPCMemory, quest_id: str, timestamp: int = 0) -> bool:
    """퀘스트 수락 기록. 이미 있으면 False."""
    if quest_id in memory.quests_given:
        return False
    memory.quests_given.append(quest_id)
    memory.player_actions.append(
        MemoryEvent("quest", "Gave a quest to the player", QUEST_GIVEN_IMPACT, timestamp)
    )
    return True


def record_quest_completed(memory: NPCMemory, quest_id: str, timestamp: int = 0) -> bool:
    """퀘스트 완료 기록 + 관계 +3. 이미 있으면 False."""
    if quest_id in memory.quests_completed:
        return False
    memory.quests_completed.append(quest_id)
    memory.player_actions.append(
        MemoryEvent(
            "quest", "Completed a quest for the NPC", QUEST_COMPLETED_IMPACT, timestamp
        )
    )
    memory.relationship = clamp_memory_relationship(memory.relationship + QUEST_COMPLETED_IMPACT)
    return True


def promote_topics(memory: NPCMemory, topics: List[str]) -> None:
    """대화에서 알게 된 주제 친숙도 +1 (최대 5)"""
    for topic in topics:
        current = memory.known_topics.get(topic, 0)
        memory.known_topics[topic] = min(MAX_TOPIC_FAMILIARITY, current + 1)
