"""관계 도메인 모델

DB 무관 순수 데이터 클래스.
관계는 방향성이 있다: A가 B에 대해 가진 기록과 B가 A에 대해 가진 기록은 별개.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RelationshipType(str, Enum):
    """관계 단계 7단계 (수치에서 파생)"""

    ENEMY = "enemy"
    DISLIKED = "disliked"
    UNFRIENDLY = "unfriendly"
    NEUTRAL = "neutral"
    FRIENDLY = "friendly"
    FRIEND = "friend"
    CLOSE_FRIEND = "close_friend"


@dataclass
class RelationshipRecord:
    """한 NPC가 다른 NPC에 대해 가진 관계 1건"""

    other_npc_id: str
    value: int = 0  # -100 ~ +100
    type: RelationshipType = RelationshipType.NEUTRAL
    last_interaction_time: int = 0
    last_decay_time: Optional[int] = None  # 감쇠 기준 시각 (중복 감쇠 방지)


# ── 수치 범위 ────────────────────────────────────────────────

RELATIONSHIP_MIN = -100
RELATIONSHIP_MAX = 100
INITIAL_RELATIONSHIP_LIMIT = 75  # 초기 관계 생성 시 ±75
