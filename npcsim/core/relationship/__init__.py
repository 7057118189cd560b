"""관계 시스템 Core 패키지 — 공개 API"""

from npcsim.core.relationship.models import (
    INITIAL_RELATIONSHIP_LIMIT,
    RELATIONSHIP_MAX,
    RELATIONSHIP_MIN,
    RelationshipRecord,
    RelationshipType,
)
from npcsim.core.relationship.calculations import (
    apply_decay,
    apply_delta,
    clamp_relationship,
    clamp_to,
    derive_relationship_type,
    describe_relationship,
)
from npcsim.core.relationship.compatibility import (
    FRIENDLY_FACTIONS,
    HOSTILE_FACTIONS,
    OCCUPATION_COMPATIBILITY,
    TRADE_COMPATIBILITY,
    are_factions_friendly,
    are_factions_hostile,
    are_occupations_compatible,
    are_trade_compatible,
    faction_modifier,
    roll_base_value,
    roll_reciprocal_jitter,
)
from npcsim.core.relationship.initialization import (
    PairProfile,
    compute_initial_pair,
    compute_initial_value,
)

__all__ = [
    "INITIAL_RELATIONSHIP_LIMIT",
    "RELATIONSHIP_MAX",
    "RELATIONSHIP_MIN",
    "RelationshipRecord",
    "RelationshipType",
    "apply_decay",
    "apply_delta",
    "clamp_relationship",
    "clamp_to",
    "derive_relationship_type",
    "describe_relationship",
    "FRIENDLY_FACTIONS",
    "HOSTILE_FACTIONS",
    "OCCUPATION_COMPATIBILITY",
    "TRADE_COMPATIBILITY",
    "are_factions_friendly",
    "are_factions_hostile",
    "are_occupations_compatible",
    "are_trade_compatible",
    "faction_modifier",
    "roll_base_value",
    "roll_reciprocal_jitter",
    "PairProfile",
    "compute_initial_pair",
    "compute_initial_value",
]
