"""상호작용 짝짓기/유형 선택 규칙

무작위 요소는 roll_* 함수로 분리 (테스트에서 patch).
"""

import random
from typing import Dict, List, Optional, Tuple

from npcsim.core.interaction.models import (
    BIAS_CHANCE,
    BIAS_THRESHOLD,
    COLLABORATION_THRESHOLD,
    CONFLICT_THRESHOLD,
    DELTA_RANGES,
    RECIPROCAL_JITTER,
    SCORE_JITTER_MAX,
    UNAVAILABLE_KEYWORDS,
    InteractionType,
)
from npcsim.core.relationship.compatibility import are_trade_compatible


PairKey = Tuple[str, str]


def pair_key(npc1_id: str, npc2_id: str) -> PairKey:
    """순서 무관 쌍 키"""
    a, b = sorted((npc1_id, npc2_id))
    return (a, b)


def is_available(activity: Optional[str]) -> bool:
    """활동에 sleep/busy가 포함되면 상호작용 불가 (대소문자 무시)"""
    lowered = (activity or "").lower()
    return not any(keyword in lowered for keyword in UNAVAILABLE_KEYWORDS)


def is_on_cooldown(
    last_times: Dict[PairKey, int], npc1_id: str, npc2_id: str, current_time: int, cooldown: int
) -> bool:
    last = last_times.get(pair_key(npc1_id, npc2_id))
    return last is not None and current_time - last < cooldown


def candidate_types(
    occupation1: Optional[str], occupation2: Optional[str], relationship: int
) -> List[InteractionType]:
    """가능한 상호작용 유형. conversation은 항상 포함."""
    types = [InteractionType.CONVERSATION]
    if are_trade_compatible(occupation1, occupation2):
        types.append(InteractionType.TRADE)
    if relationship < CONFLICT_THRESHOLD:
        types.append(InteractionType.CONFLICT)
    if relationship > COLLABORATION_THRESHOLD:
        types.append(InteractionType.COLLABORATION)
    return types


# ── 무작위 요소 ─────────────────────────────────────────────

def roll_anchor_index(size: int, rng: Optional[random.Random] = None) -> int:
    return (rng or random).randrange(size)


def roll_score_jitter(rng: Optional[random.Random] = None) -> float:
    return (rng or random).uniform(0, SCORE_JITTER_MAX)


def roll_bias(rng: Optional[random.Random] = None) -> float:
    return (rng or random).random()


def roll_type_choice(
    types: List[InteractionType], rng: Optional[random.Random] = None
) -> InteractionType:
    return (rng or random).choice(types)


def roll_relationship_delta(
    interaction_type: InteractionType, rng: Optional[random.Random] = None
) -> int:
    low, high = DELTA_RANGES[interaction_type]
    return (rng or random).randint(low, high)


def roll_reciprocal_delta(change: int, rng: Optional[random.Random] = None) -> int:
    """역방향 변동 = change ± 2"""
    return change + (rng or random).randint(-RECIPROCAL_JITTER, RECIPROCAL_JITTER)


def roll_visibility(chance: float, rng: Optional[random.Random] = None) -> bool:
    return (rng or random).random() < chance


# ── 선택 ─────────────────────────────────────────────────────

def select_interaction_type(
    types: List[InteractionType], relationship: int, rng: Optional[random.Random] = None
) -> InteractionType:
    """관계가 극단이면 70% 편향, 아니면 후보 중 균등 선택.

    ≤ -50: conflict 70% / conversation 30%
    ≥ +50: collaboration 70% / conversation 30%
    """
    if relationship <= -BIAS_THRESHOLD:
        if roll_bias(rng) < BIAS_CHANCE:
            return InteractionType.CONFLICT
        return InteractionType.CONVERSATION
    if relationship >= BIAS_THRESHOLD:
        if roll_bias(rng) < BIAS_CHANCE:
            return InteractionType.COLLABORATION
        return InteractionType.CONVERSATION
    return roll_type_choice(types, rng)


def fallback_description(npc1_name: str, npc2_name: str, interaction_type: InteractionType) -> str:
    return f"{npc1_name} and {npc2_name} are having a {interaction_type.value}."
