"""현재 활동 해석 우선순위 테스트"""

from npcsim.core.clock import GameClock
from npcsim.core.schedule.models import (
    RESTING_ACTIVITY,
    WEEKLY_ACTIVITY,
    NPCSchedule,
    ScheduleEntry,
    SchedulePriority,
    SpecialAppointment,
)
from npcsim.core.schedule.resolution import find_active_appointment, resolve_activity

CLOCK = GameClock()
HOUR = CLOCK.minutes_per_hour
DAY = CLOCK.minutes_per_day


def _schedule(**kwargs) -> NPCSchedule:
    entries = [
        ScheduleEntry("home", 0, 8, "Sleeping"),
        ScheduleEntry("shop", 8, 18, "Working"),
    ]
    defaults = {"base_entries": list(entries), "entries": list(entries)}
    defaults.update(kwargs)
    return NPCSchedule(**defaults)


class TestFindActiveAppointment:
    def test_latest_starting_wins(self):
        early = SpecialAppointment("a", "docks", "Meeting", 0)
        late = SpecialAppointment("b", "temple", "Prayer", 5 * HOUR)
        assert find_active_appointment([late, early], 6 * HOUR) is late

    def test_expired_and_future_ignored(self):
        past = SpecialAppointment("a", "docks", "Meeting", 0, HOUR)
        future = SpecialAppointment("b", "temple", "Prayer", 10 * HOUR)
        assert find_active_appointment([past, future], 2 * HOUR) is None

    def test_end_time_exclusive(self):
        appt = SpecialAppointment("a", "docks", "Meeting", 0, HOUR)
        assert find_active_appointment([appt], HOUR) is None


class TestResolveActivity:
    def test_special_beats_everything(self):
        schedule = _schedule(weekly_overrides={0: "church"})
        appt = SpecialAppointment("a", "docks", "Meeting", 9 * HOUR, 11 * HOUR)
        slot = resolve_activity("shop", schedule, [appt], 10 * HOUR, CLOCK)
        assert slot.priority == SchedulePriority.SPECIAL
        assert slot.location == "docks"
        assert slot.appointment_id == "a"

    def test_weekly_override_whole_day(self):
        schedule = _schedule(weekly_overrides={1: "market_square"})
        slot = resolve_activity("shop", schedule, [], DAY + 3 * HOUR, CLOCK)
        assert slot.priority == SchedulePriority.WEEKLY
        assert slot.location == "market_square"
        assert slot.activity == WEEKLY_ACTIVITY
        assert (slot.start_time, slot.end_time) == (DAY, 2 * DAY)

    def test_hourly_entry_absolute_times(self):
        slot = resolve_activity("home", _schedule(), [], DAY + 9 * HOUR + 30, CLOCK)
        assert slot.priority == SchedulePriority.HOURLY
        assert slot.location == "shop"
        assert slot.start_time == DAY + 8 * HOUR
        assert slot.end_time == DAY + 18 * HOUR

    def test_gap_falls_back_to_resting(self):
        """18시 이후 일과 없음 → 현재 위치에서 Resting (그 시각 1시간)."""
        slot = resolve_activity("shop", _schedule(), [], 20 * HOUR + 15, CLOCK)
        assert slot.priority == SchedulePriority.DEFAULT
        assert slot.activity == RESTING_ACTIVITY
        assert slot.location == "shop"
        assert (slot.start_time, slot.end_time) == (20 * HOUR, 21 * HOUR)

    def test_no_schedule_resting(self):
        slot = resolve_activity("well", None, [], 5 * HOUR, CLOCK)
        assert slot.priority == SchedulePriority.DEFAULT
        assert slot.location == "well"

    def test_always_exactly_one_slot(self):
        schedule = _schedule(weekly_overrides={3: "fair"})
        for t in range(0, 7 * DAY, 37):
            slot = resolve_activity("home", schedule, [], t, CLOCK)
            assert slot is not None
            assert slot.start_time <= t < slot.end_time
