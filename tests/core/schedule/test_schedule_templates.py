"""직업별 일과 템플릿 테스트"""

import random
from unittest.mock import patch

from npcsim.core.schedule.intervals import has_overlap
from npcsim.core.schedule.templates import (
    MARKET_ID,
    SCHEDULE_TEMPLATES,
    create_default_schedule,
    get_schedule_for_occupation,
)


def _covers_whole_day(entries) -> bool:
    ordered = sorted(entries, key=lambda e: e.start_hour)
    if ordered[0].start_hour != 0 or ordered[-1].end_hour != 24:
        return False
    return all(a.end_hour == b.start_hour for a, b in zip(ordered, ordered[1:]))


# ── 템플릿 형태 ──


class TestTemplateShape:
    def test_every_template_covers_day_without_overlap(self):
        """모든 템플릿: 0~24시 빈틈·겹침 없음."""
        rng = random.Random(3)
        for occupation in SCHEDULE_TEMPLATES:
            schedule = get_schedule_for_occupation(occupation, "loc", rng)
            assert _covers_whole_day(schedule.base_entries), occupation
            assert not has_overlap(schedule.base_entries), occupation

    def test_default_schedule(self):
        schedule = create_default_schedule("cottage")
        assert _covers_whole_day(schedule.base_entries)
        assert {e.location_id for e in schedule.base_entries} == {"cottage"}
        assert schedule.weekly_overrides == {}

    def test_templates_return_base_entries_only(self):
        """entries는 비어 있고 Scheduler가 다시 계산한다."""
        schedule = get_schedule_for_occupation("merchant", "shop")
        assert schedule.base_entries
        assert schedule.entries == []


# ── 직업 매칭 ──


class TestOccupationLookup:
    def test_case_and_whitespace_insensitive(self):
        schedule = get_schedule_for_occupation("  BlackSmith ", "forge")
        assert schedule.base_entries[1].activity == "Lighting the forge"

    def test_unknown_occupation_gets_default(self):
        schedule = get_schedule_for_occupation("astrologer", "tower")
        assert schedule.base_entries == create_default_schedule("tower").base_entries

    def test_missing_occupation_gets_default(self):
        schedule = get_schedule_for_occupation(None, "tower")
        assert schedule.base_entries[0].activity == "Sleeping"

    def test_merchant_home_derived_from_primary(self):
        schedule = get_schedule_for_occupation("merchant", "shop")
        locations = {e.location_id for e in schedule.base_entries}
        assert locations == {"shop", "shop_home"}

    def test_farmer_market_afternoon_and_market_day(self):
        schedule = get_schedule_for_occupation("farmer", "farm")
        market = [e for e in schedule.base_entries if e.location_id == MARKET_ID]
        assert len(market) == 1
        assert (market[0].start_hour, market[0].end_hour) == (13, 16)
        assert schedule.weekly_overrides == {2: MARKET_ID}

    def test_priest_weekly_override_is_primary(self):
        schedule = get_schedule_for_occupation("priest", "temple")
        assert schedule.weekly_overrides == {0: "temple"}


# ── 경비 교대 ──


class TestGuardShift:
    @patch("npcsim.core.schedule.templates.roll_guard_shift", return_value=True)
    def test_day_shift(self, _mock):
        schedule = get_schedule_for_occupation("guard", "gate")
        seven = next(e for e in schedule.base_entries if e.covers(7))
        assert seven.activity == "Patrolling"
        assert seven.location_id == "gate"

    @patch("npcsim.core.schedule.templates.roll_guard_shift", return_value=False)
    def test_night_shift(self, _mock):
        schedule = get_schedule_for_occupation("watchman", "gate")
        midnight = next(e for e in schedule.base_entries if e.covers(0))
        assert midnight.activity == "On duty - night patrol"
        assert midnight.location_id == "gate"
