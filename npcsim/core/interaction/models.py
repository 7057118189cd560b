"""NPC 간 상호작용 도메인 모델"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class InteractionType(str, Enum):
    CONVERSATION = "conversation"
    TRADE = "trade"
    CONFLICT = "conflict"
    COLLABORATION = "collaboration"


@dataclass
class InteractionResult:
    """NPC 두 명 사이에 일어난 상호작용 1건"""

    interaction_id: str
    npc1_id: str
    npc2_id: str
    type: InteractionType
    description: str
    relationship_change: int
    timestamp: int
    location: str
    is_visible: bool


# ── 유형별 관계 변동 범위 (양끝 포함) ───────────────────────

DELTA_RANGES: Dict[InteractionType, Tuple[int, int]] = {
    InteractionType.CONVERSATION: (-2, 2),
    InteractionType.TRADE: (1, 7),
    InteractionType.CONFLICT: (-15, -6),
    InteractionType.COLLABORATION: (5, 14),
}

# ── 선택 규칙 상수 ───────────────────────────────────────────

SCORE_JITTER_MAX = 50.0  # 후보 점수 무작위 성분 0 ~ 50
CONFLICT_THRESHOLD = -20  # 미만이면 conflict 후보
COLLABORATION_THRESHOLD = 20  # 초과면 collaboration 후보
BIAS_THRESHOLD = 50  # |관계| 이상이면 편향 선택
BIAS_CHANCE = 0.7
RECIPROCAL_JITTER = 2  # 역방향 변동 ±2

UNAVAILABLE_KEYWORDS = ("sleep", "busy")
