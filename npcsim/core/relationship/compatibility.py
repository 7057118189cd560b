"""직업/세력 궁합 테이블

모든 조회는 소문자·공백 제거 후 양방향으로 검사한다.
"""

import random
from typing import Dict, List, Optional

# ── 직업 궁합 (초기 관계 +20) ────────────────────────────────

OCCUPATION_COMPATIBILITY: Dict[str, List[str]] = {
    "merchant": ["blacksmith", "farmer", "tailor", "jeweler", "innkeeper"],
    "blacksmith": ["merchant", "guard", "adventurer"],
    "guard": ["guard", "captain", "noble"],
    "noble": ["noble", "advisor", "servant"],
    "farmer": ["farmer", "merchant", "miller"],
    "innkeeper": ["merchant", "cook", "bard"],
    "priest": ["acolyte", "noble", "healer"],
}

# ── 거래 궁합 (상호작용 trade 후보) ──────────────────────────

TRADE_COMPATIBILITY: Dict[str, List[str]] = {
    "merchant": ["blacksmith", "farmer", "tailor", "jeweler", "merchant"],
    "blacksmith": ["merchant", "miner", "adventurer", "guard"],
    "farmer": ["merchant", "innkeeper", "baker"],
    "innkeeper": ["farmer", "merchant", "brewer", "hunter"],
    "guard": ["blacksmith", "merchant", "armorer"],
    "priest": ["merchant", "noble", "pilgrim"],
    "noble": ["merchant", "priest", "artist"],
}

# ── 세력 관계 ───────────────────────────────────────────────

FRIENDLY_FACTIONS: Dict[str, List[str]] = {
    "town guard": ["merchants guild", "nobility"],
    "merchants guild": ["town guard", "travelers"],
    "nobility": ["town guard", "temple"],
    "temple": ["nobility", "commoners"],
    "commoners": ["temple", "travelers"],
    "travelers": ["merchants guild", "commoners"],
}

HOSTILE_FACTIONS: Dict[str, List[str]] = {
    "town guard": ["bandits", "thieves guild"],
    "bandits": ["town guard", "merchants guild", "nobility"],
    "thieves guild": ["town guard", "nobility"],
    "nobility": ["bandits", "thieves guild"],
    "cultists": ["temple", "town guard"],
}

# ── 초기 관계 보정치 ─────────────────────────────────────────

OCCUPATION_BONUS = 20
SAME_FACTION_BONUS = 15
FRIENDLY_FACTION_BONUS = 5
HOSTILE_FACTION_PENALTY = -25


def _normalize(value: Optional[str]) -> str:
    return (value or "").lower().strip()


def _symmetric_lookup(table: Dict[str, List[str]], a: Optional[str], b: Optional[str]) -> bool:
    key_a, key_b = _normalize(a), _normalize(b)
    if not key_a or not key_b:
        return False
    return key_b in table.get(key_a, []) or key_a in table.get(key_b, [])


def are_occupations_compatible(a: Optional[str], b: Optional[str]) -> bool:
    return _symmetric_lookup(OCCUPATION_COMPATIBILITY, a, b)


def are_trade_compatible(a: Optional[str], b: Optional[str]) -> bool:
    return _symmetric_lookup(TRADE_COMPATIBILITY, a, b)


def are_factions_friendly(a: Optional[str], b: Optional[str]) -> bool:
    return _symmetric_lookup(FRIENDLY_FACTIONS, a, b)


def are_factions_hostile(a: Optional[str], b: Optional[str]) -> bool:
    return _symmetric_lookup(HOSTILE_FACTIONS, a, b)


def faction_modifier(a: Optional[str], b: Optional[str]) -> int:
    """같은 세력 +15, 우호 +5, 적대 -25, 그 외 0. 세력 없음이면 0."""
    key_a, key_b = _normalize(a), _normalize(b)
    if not key_a or not key_b:
        return 0
    if key_a == key_b:
        return SAME_FACTION_BONUS
    if are_factions_friendly(key_a, key_b):
        return FRIENDLY_FACTION_BONUS
    if are_factions_hostile(key_a, key_b):
        return HOSTILE_FACTION_PENALTY
    return 0


def roll_base_value(rng: Optional[random.Random] = None) -> int:
    """초기 관계 기본값 (-10 ~ 29)"""
    return (rng or random).randint(-10, 29)


def roll_reciprocal_jitter(rng: Optional[random.Random] = None) -> int:
    """역방향 기록 편차 (-5 ~ +5)"""
    return (rng or random).randint(-5, 5)
