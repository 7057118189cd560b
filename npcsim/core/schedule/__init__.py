"""스케줄 Core 패키지 — 공개 API"""

from npcsim.core.schedule.models import (
    FORCED_ACTIVITY,
    RESTING_ACTIVITY,
    WEEKLY_ACTIVITY,
    ActivitySlot,
    NPCSchedule,
    ScheduleEntry,
    SchedulePriority,
    ScheduleUpdateResult,
    SpecialAppointment,
)
from npcsim.core.schedule.templates import (
    SCHEDULE_TEMPLATES,
    create_default_schedule,
    get_schedule_for_occupation,
    roll_guard_shift,
)
from npcsim.core.schedule.intervals import (
    appointment_hours,
    apply_forced_locations,
    has_overlap,
    merge_adjacent,
    rebuild_entries,
    splice_hour,
    splice_span,
)
from npcsim.core.schedule.resolution import (
    find_active_appointment,
    resolve_activity,
)

__all__ = [
    # models
    "FORCED_ACTIVITY",
    "RESTING_ACTIVITY",
    "WEEKLY_ACTIVITY",
    "ActivitySlot",
    "NPCSchedule",
    "ScheduleEntry",
    "SchedulePriority",
    "ScheduleUpdateResult",
    "SpecialAppointment",
    # templates
    "SCHEDULE_TEMPLATES",
    "create_default_schedule",
    "get_schedule_for_occupation",
    "roll_guard_shift",
    # intervals
    "appointment_hours",
    "apply_forced_locations",
    "has_overlap",
    "merge_adjacent",
    "rebuild_entries",
    "splice_hour",
    "splice_span",
    # resolution
    "find_active_appointment",
    "resolve_activity",
]
