"""NPC 쌍 초기 관계 계산"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from npcsim.core.relationship.calculations import clamp_to
from npcsim.core.relationship.compatibility import (
    OCCUPATION_BONUS,
    are_occupations_compatible,
    faction_modifier,
    roll_base_value,
    roll_reciprocal_jitter,
)
from npcsim.core.relationship.models import INITIAL_RELATIONSHIP_LIMIT


@dataclass
class PairProfile:
    """초기 관계 계산에 필요한 NPC 속성"""

    occupation: Optional[str] = None
    faction: Optional[str] = None


def compute_initial_value(
    a: PairProfile, b: PairProfile, base: int
) -> int:
    """base + 직업 궁합 + 세력 보정 → ±75 클램프"""
    value = base
    if are_occupations_compatible(a.occupation, b.occupation):
        value += OCCUPATION_BONUS
    value += faction_modifier(a.faction, b.faction)
    return clamp_to(value, INITIAL_RELATIONSHIP_LIMIT)


def compute_initial_pair(
    a: PairProfile, b: PairProfile, rng: Optional[random.Random] = None
) -> Tuple[int, int]:
    """(a→b, b→a) 초기값.

    역방향 값은 정방향 값에 별도 편차를 더해 다시 클램프한다.
    """
    forward = compute_initial_value(a, b, roll_base_value(rng))
    reverse = clamp_to(forward + roll_reciprocal_jitter(rng), INITIAL_RELATIONSHIP_LIMIT)
    return forward, reverse
