"""게임 시계 — 절대 분(minute) 단위 시간을 시/요일로 분해"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GameClock:
    """단조 증가하는 정수 시간(분)의 분해 규칙.

    hour_of_day = (t // MINUTES_PER_HOUR) % HOURS_PER_DAY
    day_of_week = (t // MINUTES_PER_DAY) % DAYS_PER_WEEK
    """

    minutes_per_hour: int = 60
    hours_per_day: int = 24
    days_per_week: int = 7

    @property
    def minutes_per_day(self) -> int:
        return self.minutes_per_hour * self.hours_per_day

    def hour_of_day(self, current_time: int) -> int:
        return (current_time // self.minutes_per_hour) % self.hours_per_day

    def day_of_week(self, current_time: int) -> int:
        return (current_time // self.minutes_per_day) % self.days_per_week

    def day_start(self, current_time: int) -> int:
        """current_time이 속한 날의 0시 (절대 분)"""
        return current_time - (current_time % self.minutes_per_day)

    def hour_start(self, current_time: int) -> int:
        """current_time이 속한 시각의 정각 (절대 분)"""
        return current_time - (current_time % self.minutes_per_hour)

    def days_between(self, earlier: int, later: int) -> int:
        """경과 일수 (내림)"""
        return max(0, later - earlier) // self.minutes_per_day

    @classmethod
    def from_settings(cls, settings) -> "GameClock":
        return cls(
            minutes_per_hour=settings.MINUTES_PER_HOUR,
            hours_per_day=settings.HOURS_PER_DAY,
            days_per_week=settings.DAYS_PER_WEEK,
        )
