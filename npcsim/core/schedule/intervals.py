"""시간대 일과 구간 편집

강제 위치/특별 약속을 시간대 목록에 끼워 넣는(splice) 순수 함수.
입력 목록은 변경하지 않고 새 목록을 반환한다.
"""

from typing import Iterable, List, Tuple

from npcsim.core.clock import GameClock
from npcsim.core.schedule.models import (
    FORCED_ACTIVITY,
    NPCSchedule,
    ScheduleEntry,
    SpecialAppointment,
)


def splice_span(
    entries: List[ScheduleEntry],
    start_hour: int,
    end_hour: int,
    location_id: str,
    activity: str,
) -> List[ScheduleEntry]:
    """[start_hour, end_hour) 구간을 새 항목으로 덮어쓴다.

    겹치는 기존 항목은 앞/뒤 잔여 구간으로 쪼개고, 빈 잔여 구간은 버린다.
    결과는 시작 시각 순 정렬.
    """
    result: List[ScheduleEntry] = []
    for entry in entries:
        if entry.end_hour <= start_hour or entry.start_hour >= end_hour:
            result.append(
                ScheduleEntry(entry.location_id, entry.start_hour, entry.end_hour, entry.activity)
            )
            continue
        if entry.start_hour < start_hour:
            result.append(
                ScheduleEntry(entry.location_id, entry.start_hour, start_hour, entry.activity)
            )
        if entry.end_hour > end_hour:
            result.append(
                ScheduleEntry(entry.location_id, end_hour, entry.end_hour, entry.activity)
            )
    result.append(ScheduleEntry(location_id, start_hour, end_hour, activity))
    result.sort(key=lambda e: e.start_hour)
    return result


def splice_hour(
    entries: List[ScheduleEntry],
    hour: int,
    location_id: str,
    activity: str = FORCED_ACTIVITY,
) -> List[ScheduleEntry]:
    """한 시간짜리 강제 항목 삽입"""
    return splice_span(entries, hour, hour + 1, location_id, activity)


def merge_adjacent(entries: List[ScheduleEntry]) -> List[ScheduleEntry]:
    """맞닿아 있고 위치/활동이 같은 항목을 하나로 합친다"""
    merged: List[ScheduleEntry] = []
    for entry in sorted(entries, key=lambda e: e.start_hour):
        if merged:
            last = merged[-1]
            if (
                last.end_hour == entry.start_hour
                and last.location_id == entry.location_id
                and last.activity == entry.activity
            ):
                merged[-1] = ScheduleEntry(
                    last.location_id, last.start_hour, entry.end_hour, last.activity
                )
                continue
        merged.append(entry)
    return merged


def apply_forced_locations(
    entries: List[ScheduleEntry], forced_locations: dict
) -> List[ScheduleEntry]:
    """hour → location_id 강제 위치를 시간 순으로 끼워 넣는다"""
    result = list(entries)
    for hour in sorted(forced_locations):
        result = splice_hour(result, int(hour), forced_locations[hour])
    return merge_adjacent(result)


def appointment_hours(
    appointment: SpecialAppointment, clock: GameClock
) -> Tuple[int, int]:
    """약속이 시작되는 날 안에서 차지하는 [start_hour, end_hour).

    종료 시각이 없거나 다음 날로 넘어가면 그날 끝(hours_per_day)까지.
    최소 1시간.
    """
    start_hour = clock.hour_of_day(appointment.start_time)
    day_end = clock.day_start(appointment.start_time) + clock.minutes_per_day
    if appointment.end_time is None or appointment.end_time >= day_end:
        return start_hour, clock.hours_per_day

    offset = appointment.end_time - clock.day_start(appointment.start_time)
    end_hour = -(-offset // clock.minutes_per_hour)  # 올림
    return start_hour, min(clock.hours_per_day, max(end_hour, start_hour + 1))


def rebuild_entries(
    schedule: NPCSchedule,
    appointments: Iterable[SpecialAppointment],
    clock: GameClock,
) -> List[ScheduleEntry]:
    """base_entries 위에 약속을 시작 시각 순으로 덮어써 조회용 목록을 다시 만든다.

    항상 base에서 출발하므로 약속 추가/삭제를 반복해도 누적 오차가 없다.
    """
    entries = list(schedule.base_entries)
    for appointment in sorted(appointments, key=lambda a: a.start_time):
        start_hour, end_hour = appointment_hours(appointment, clock)
        entries = splice_span(
            entries, start_hour, end_hour, appointment.location, appointment.activity
        )
    return merge_adjacent(entries)


def has_overlap(entries: List[ScheduleEntry]) -> bool:
    """정렬 후 인접 항목끼리 겹치는지"""
    ordered = sorted(entries, key=lambda e: e.start_hour)
    return any(a.end_hour > b.start_hour for a, b in zip(ordered, ordered[1:]))
