"""NPC 상호작용 Core 패키지 — 공개 API"""

from npcsim.core.interaction.models import (
    DELTA_RANGES,
    InteractionResult,
    InteractionType,
)
from npcsim.core.interaction.selection import (
    PairKey,
    candidate_types,
    fallback_description,
    is_available,
    is_on_cooldown,
    pair_key,
    roll_anchor_index,
    roll_bias,
    roll_reciprocal_delta,
    roll_relationship_delta,
    roll_score_jitter,
    roll_type_choice,
    roll_visibility,
    select_interaction_type,
)

__all__ = [
    "DELTA_RANGES",
    "InteractionResult",
    "InteractionType",
    "PairKey",
    "candidate_types",
    "fallback_description",
    "is_available",
    "is_on_cooldown",
    "pair_key",
    "roll_anchor_index",
    "roll_bias",
    "roll_reciprocal_delta",
    "roll_relationship_delta",
    "roll_score_jitter",
    "roll_type_choice",
    "roll_visibility",
    "select_interaction_type",
]
