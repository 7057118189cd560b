"""현재 활동 해석

우선순위: SPECIAL > WEEKLY > HOURLY > DEFAULT.
어떤 시각에 대해서도 정확히 하나의 ActivitySlot을 반환한다.
"""

from typing import List, Optional

from npcsim.core.clock import GameClock
from npcsim.core.schedule.models import (
    RESTING_ACTIVITY,
    WEEKLY_ACTIVITY,
    ActivitySlot,
    NPCSchedule,
    SchedulePriority,
    SpecialAppointment,
)


def find_active_appointment(
    appointments: List[SpecialAppointment], current_time: int
) -> Optional[SpecialAppointment]:
    """현재 유효한 약속 중 가장 늦게 시작한 것"""
    active = [a for a in appointments if a.is_active(current_time)]
    if not active:
        return None
    return max(active, key=lambda a: a.start_time)


def resolve_activity(
    current_location: str,
    schedule: Optional[NPCSchedule],
    appointments: List[SpecialAppointment],
    current_time: int,
    clock: GameClock,
) -> ActivitySlot:
    appointment = find_active_appointment(appointments, current_time)
    if appointment is not None:
        return ActivitySlot(
            location=appointment.location,
            activity=appointment.activity,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            priority=SchedulePriority.SPECIAL,
            appointment_id=appointment.appointment_id,
        )

    day_start = clock.day_start(current_time)

    if schedule is not None:
        day = clock.day_of_week(current_time)
        if day in schedule.weekly_overrides:
            return ActivitySlot(
                location=schedule.weekly_overrides[day],
                activity=WEEKLY_ACTIVITY,
                start_time=day_start,
                end_time=day_start + clock.minutes_per_day,
                priority=SchedulePriority.WEEKLY,
            )

        entry = schedule.find_entry(clock.hour_of_day(current_time))
        if entry is not None:
            return ActivitySlot(
                location=entry.location_id,
                activity=entry.activity,
                start_time=day_start + entry.start_hour * clock.minutes_per_hour,
                end_time=day_start + entry.end_hour * clock.minutes_per_hour,
                priority=SchedulePriority.HOURLY,
            )

    hour_start = clock.hour_start(current_time)
    return ActivitySlot(
        location=current_location,
        activity=RESTING_ACTIVITY,
        start_time=hour_start,
        end_time=hour_start + clock.minutes_per_hour,
        priority=SchedulePriority.DEFAULT,
    )
