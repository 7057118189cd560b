"""초기 관계 생성 테스트 (직업/세력 보정)"""

from unittest.mock import patch

from npcsim.core.relationship.calculations import derive_relationship_type
from npcsim.core.relationship.compatibility import (
    are_factions_friendly,
    are_factions_hostile,
    are_occupations_compatible,
    are_trade_compatible,
    faction_modifier,
)
from npcsim.core.relationship.initialization import (
    PairProfile,
    compute_initial_pair,
    compute_initial_value,
)
from npcsim.core.relationship.models import RelationshipType


# ── 궁합 조회 ──


class TestCompatibility:
    def test_occupation_symmetric(self):
        assert are_occupations_compatible("merchant", "blacksmith")
        assert are_occupations_compatible("blacksmith", "merchant")

    def test_occupation_normalized(self):
        assert are_occupations_compatible(" Merchant ", "FARMER")

    def test_occupation_missing(self):
        assert not are_occupations_compatible(None, "merchant")
        assert not are_occupations_compatible("", "")

    def test_trade_one_sided_table_entry(self):
        """miner는 blacksmith 목록에만 있어도 양방향 성립."""
        assert are_trade_compatible("miner", "blacksmith")

    def test_faction_tables(self):
        assert are_factions_friendly("town guard", "merchants guild")
        assert are_factions_hostile("bandits", "town guard")
        assert not are_factions_friendly("bandits", "town guard")


class TestFactionModifier:
    def test_same_faction(self):
        assert faction_modifier("Temple", "temple") == 15

    def test_friendly(self):
        assert faction_modifier("nobility", "temple") == 5

    def test_hostile(self):
        assert faction_modifier("cultists", "temple") == -25

    def test_unrelated(self):
        assert faction_modifier("travelers", "nobility") == 0

    def test_missing(self):
        assert faction_modifier(None, "temple") == 0


# ── 초기값 ──


class TestInitialValue:
    def test_merchant_blacksmith_no_faction(self):
        """base 10 + 직업 궁합 20 = 30 → friend."""
        value = compute_initial_value(
            PairProfile("merchant", None), PairProfile("blacksmith", None), base=10
        )
        assert value == 30
        assert derive_relationship_type(value) == RelationshipType.FRIEND

    def test_clamped_to_initial_limit(self):
        value = compute_initial_value(
            PairProfile("merchant", "temple"), PairProfile("blacksmith", "temple"), base=60
        )
        assert value == 75

    def test_hostile_factions_lower_bound(self):
        value = compute_initial_value(
            PairProfile("beggar", "bandits"), PairProfile("noble", "nobility"), base=-60
        )
        assert value == -75

    @patch("npcsim.core.relationship.initialization.roll_reciprocal_jitter", return_value=4)
    @patch("npcsim.core.relationship.initialization.roll_base_value", return_value=10)
    def test_pair_reverse_jitter(self, _base, _jitter):
        forward, reverse = compute_initial_pair(
            PairProfile("merchant"), PairProfile("blacksmith")
        )
        assert forward == 30
        assert reverse == 34

    @patch("npcsim.core.relationship.initialization.roll_reciprocal_jitter", return_value=5)
    @patch("npcsim.core.relationship.initialization.roll_base_value", return_value=29)
    def test_pair_reverse_clamped(self, _base, _jitter):
        forward, reverse = compute_initial_pair(
            PairProfile("merchant", "temple"), PairProfile("blacksmith", "temple")
        )
        assert forward == 64
        assert reverse == 69
