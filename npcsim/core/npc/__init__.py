"""NPC Core 도메인 패키지

공개 API:
- 도메인 모델: NPCData, PlayerState
- 기억: NPCMemory, MemoryEvent, DialogueHistoryEntry 및 갱신 함수
"""

from npcsim.core.npc.models import (
    NPCData,
    PlayerState,
)
from npcsim.core.npc.memory import (
    DEFAULT_HISTORY_CAP,
    MAX_TOPIC_FAMILIARITY,
    MEMORY_RELATIONSHIP_MAX,
    MEMORY_RELATIONSHIP_MIN,
    DialogueHistoryEntry,
    MemoryEvent,
    NPCMemory,
    adjust_relationship,
    append_history,
    clamp_memory_relationship,
    promote_topics,
    record_quest_completed,
    record_quest_given,
)

__all__ = [
    # models
    "NPCData",
    "PlayerState",
    # memory
    "DEFAULT_HISTORY_CAP",
    "MAX_TOPIC_FAMILIARITY",
    "MEMORY_RELATIONSHIP_MAX",
    "MEMORY_RELATIONSHIP_MIN",
    "DialogueHistoryEntry",
    "MemoryEvent",
    "NPCMemory",
    "adjust_relationship",
    "append_history",
    "clamp_memory_relationship",
    "promote_topics",
    "record_quest_completed",
    "record_quest_given",
]
