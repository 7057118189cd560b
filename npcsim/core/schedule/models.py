"""스케줄 도메인 모델

DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional


class SchedulePriority(IntEnum):
    """일정 해석 우선순위. 값이 클수록 우선."""

    DEFAULT = 0  # 합성된 "Resting"
    HOURLY = 1  # 시간대별 일과
    WEEKLY = 2  # 요일 오버라이드
    SPECIAL = 3  # 특별 약속


@dataclass
class ScheduleEntry:
    """시간대별 일과 1칸 [start_hour, end_hour)"""

    location_id: str
    start_hour: int  # 0 ~ 23
    end_hour: int  # 1 ~ 24
    activity: str

    def covers(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


@dataclass
class SpecialAppointment:
    """1회성 특별 약속. 시간은 절대 분.

    end_time이 None이면 시작 이후 계속 유효하다.
    """

    appointment_id: str
    location: str
    activity: str
    start_time: int
    end_time: Optional[int] = None

    def is_active(self, current_time: int) -> bool:
        if current_time < self.start_time:
            return False
        return self.end_time is None or current_time < self.end_time


@dataclass
class NPCSchedule:
    """NPC 일과표

    base_entries: 템플릿 + 강제 위치까지 반영된 원본 일과.
    entries: base_entries 위에 특별 약속을 덮어쓴 결과 (조회용).
    약속 편집 시 entries는 항상 base_entries에서 다시 계산한다.
    """

    base_entries: List[ScheduleEntry] = field(default_factory=list)
    entries: List[ScheduleEntry] = field(default_factory=list)
    weekly_overrides: Dict[int, str] = field(default_factory=dict)  # 요일(0~6) → location_id

    def find_entry(self, hour: int) -> Optional[ScheduleEntry]:
        for entry in self.entries:
            if entry.covers(hour):
                return entry
        return None


@dataclass
class ActivitySlot:
    """get_current_activity 결과 — 항상 하나"""

    location: str
    activity: str
    start_time: int
    end_time: Optional[int]
    priority: SchedulePriority
    appointment_id: Optional[str] = None


@dataclass
class ScheduleUpdateResult:
    """update_locations에서 위치가 바뀐 NPC 1명"""

    npc_id: str
    npc_name: str
    old_location_id: str
    new_location_id: str
    activity: str
    changed: bool = True


# 활동 문자열
RESTING_ACTIVITY = "Resting"
WEEKLY_ACTIVITY = "Special weekly activity"
FORCED_ACTIVITY = "Special appointment"
