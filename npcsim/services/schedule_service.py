"""Schedule Service (Scheduler) — 일과 해석과 위치 일괄 갱신

시계는 외부(SimulationContext, API)가 구동한다. 내부 타이머 없음.
"""

import random
import uuid
from typing import Dict, List, Optional

from npcsim.config import settings
from npcsim.core.clock import GameClock
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData
from npcsim.core.schedule.intervals import apply_forced_locations, rebuild_entries
from npcsim.core.schedule.models import (
    WEEKLY_ACTIVITY,
    ActivitySlot,
    NPCSchedule,
    ScheduleUpdateResult,
    SpecialAppointment,
)
from npcsim.core.schedule.resolution import resolve_activity
from npcsim.core.schedule.templates import get_schedule_for_occupation
from npcsim.services.npc_registry import NPCRegistry

logger = get_logger(__name__)


class Scheduler:
    """NPC 일과 관리

    initialize_schedule로 등록된 NPC만 update_locations 대상이다.
    """

    def __init__(
        self,
        registry: NPCRegistry,
        event_bus: EventBus,
        clock: Optional[GameClock] = None,
        rng: Optional[random.Random] = None,
        debounce: Optional[int] = None,
    ) -> None:
        self._registry = registry
        self._bus = event_bus
        self._clock = clock or GameClock.from_settings(settings)
        self._rng = rng
        self._debounce = settings.SCHEDULE_UPDATE_DEBOUNCE if debounce is None else debounce
        self._managed: Dict[str, None] = {}  # 등록 순서 유지
        self._last_update_time: Optional[int] = None

    @property
    def clock(self) -> GameClock:
        return self._clock

    def is_managed(self, npc_id: str) -> bool:
        return npc_id in self._managed

    @property
    def managed_npc_ids(self) -> List[str]:
        return list(self._managed)

    # ── 초기화 ───────────────────────────────────────────────

    def initialize_schedule(
        self, npc: NPCData, forced_locations: Optional[Dict[int, str]] = None
    ) -> NPCSchedule:
        """일과가 없으면 직업 템플릿으로 생성, 강제 위치를 끼워 넣고 관리 대상에 등록"""
        schedule = npc.schedule
        if schedule is None:
            schedule = get_schedule_for_occupation(npc.occupation, npc.location, self._rng)
            logger.info(
                f"Schedule created: {npc.npc_id} ({npc.occupation or 'default'}) "
                f"{len(schedule.base_entries)} entries"
            )
        elif not schedule.base_entries and schedule.entries:
            schedule.base_entries = list(schedule.entries)

        if forced_locations:
            schedule.base_entries = apply_forced_locations(
                schedule.base_entries, forced_locations
            )
            logger.debug(f"Forced locations applied: {npc.npc_id} {forced_locations}")

        schedule.entries = rebuild_entries(schedule, npc.special_appointments, self._clock)
        npc.schedule = schedule
        self._managed[npc.npc_id] = None
        self._registry.update_npc(npc)
        return schedule

    # ── 위치 갱신 ───────────────────────────────────────────

    def update_locations(self, current_time: int) -> List[ScheduleUpdateResult]:
        """시각에 맞춰 관리 대상 NPC 위치 갱신. 마지막 갱신 후 debounce 미만이면 no-op."""
        if (
            self._last_update_time is not None
            and abs(current_time - self._last_update_time) < self._debounce
        ):
            logger.debug(f"update_locations skipped (debounce): t={current_time}")
            return []
        self._last_update_time = current_time
        self._bus.reset_chain()

        hour = self._clock.hour_of_day(current_time)
        day = self._clock.day_of_week(current_time)
        results: List[ScheduleUpdateResult] = []

        for npc_id in list(self._managed):
            npc = self._registry.get_npc(npc_id)
            if npc is None:
                logger.warning(f"Managed NPC missing from registry: {npc_id}")
                continue
            if npc.schedule is None:
                continue

            pruned = self._prune_expired_appointments(npc, current_time)

            new_location: Optional[str] = None
            activity = ""
            weekly = npc.schedule.weekly_overrides.get(day)
            if weekly is not None:
                if weekly != npc.location:
                    new_location, activity = weekly, WEEKLY_ACTIVITY
            else:
                entry = npc.schedule.find_entry(hour)
                if entry is not None and entry.location_id != npc.location:
                    new_location, activity = entry.location_id, entry.activity

            if new_location is None:
                if pruned:
                    self._registry.update_npc(npc)
                continue

            result = ScheduleUpdateResult(
                npc_id=npc.npc_id,
                npc_name=npc.name,
                old_location_id=npc.location,
                new_location_id=new_location,
                activity=activity,
            )
            npc.location = new_location
            npc.current_activity = activity
            self._registry.update_npc(npc)
            results.append(result)

            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.NPC_MOVED,
                    data={
                        "npc_id": npc.npc_id,
                        "old_location_id": result.old_location_id,
                        "new_location_id": result.new_location_id,
                        "time": current_time,
                    },
                    source="scheduler",
                    cause_id=npc.npc_id,
                )
            )

        if results:
            logger.info(f"NPC locations updated: {len(results)} moved (t={current_time})")
        return results

    # ── 조회 ─────────────────────────────────────────────────

    def get_current_activity(self, npc_id: str, current_time: int) -> Optional[ActivitySlot]:
        """SPECIAL > WEEKLY > HOURLY > DEFAULT. 알 수 없는 NPC면 None."""
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"get_current_activity: unknown NPC {npc_id}")
            return None
        return resolve_activity(
            npc.location,
            npc.schedule,
            npc.special_appointments,
            current_time,
            self._clock,
        )

    # ── 특별 약속 ───────────────────────────────────────────

    def add_special_appointment(
        self,
        npc_id: str,
        hour: int,
        location_id: str,
        activity: str,
        current_time: int = 0,
    ) -> bool:
        """current_time이 속한 날의 hour시 1시간짜리 약속 추가"""
        if not 0 <= hour < self._clock.hours_per_day:
            logger.warning(f"add_special_appointment: hour out of range {hour}")
            return False
        start = self._clock.day_start(current_time) + hour * self._clock.minutes_per_hour
        appointment = SpecialAppointment(
            appointment_id=str(uuid.uuid4()),
            location=location_id,
            activity=activity,
            start_time=start,
            end_time=start + self._clock.minutes_per_hour,
        )
        return self.create_special_appointment(npc_id, appointment)

    def create_special_appointment(self, npc_id: str, appointment: SpecialAppointment) -> bool:
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"create_special_appointment: unknown NPC {npc_id}")
            return False

        if not appointment.appointment_id:
            appointment.appointment_id = str(uuid.uuid4())

        npc.special_appointments.append(appointment)
        npc.special_appointments.sort(key=lambda a: a.start_time)

        if npc.schedule is None:
            # initialize_schedule이 약속까지 반영해 entries를 만든다
            self.initialize_schedule(npc)
        else:
            self._sync_entries(npc)
            self._registry.update_npc(npc)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.APPOINTMENT_ADDED,
                data={"npc_id": npc_id, "appointment_id": appointment.appointment_id},
                source="scheduler",
                cause_id=appointment.appointment_id,
            )
        )
        logger.info(
            f"Appointment added: {npc_id} {appointment.appointment_id} "
            f"@{appointment.location} t={appointment.start_time}"
        )
        return True

    def remove_special_appointment(self, npc_id: str, appointment_id: str) -> bool:
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"remove_special_appointment: unknown NPC {npc_id}")
            return False

        remaining = [a for a in npc.special_appointments if a.appointment_id != appointment_id]
        if len(remaining) == len(npc.special_appointments):
            return False

        npc.special_appointments = remaining
        self._sync_entries(npc)
        self._registry.update_npc(npc)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.APPOINTMENT_REMOVED,
                data={"npc_id": npc_id, "appointment_id": appointment_id},
                source="scheduler",
                cause_id=appointment_id,
            )
        )
        logger.info(f"Appointment removed: {npc_id} {appointment_id}")
        return True

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _sync_entries(self, npc: NPCData) -> None:
        """base_entries + 약속 → entries 재계산"""
        if npc.schedule is None:
            return
        npc.schedule.entries = rebuild_entries(
            npc.schedule, npc.special_appointments, self._clock
        )

    def _prune_expired_appointments(self, npc: NPCData, current_time: int) -> bool:
        """종료된 약속 제거 후 entries 재계산"""
        expired = [
            a for a in npc.special_appointments
            if a.end_time is not None and a.end_time <= current_time
        ]
        if not expired:
            return False
        npc.special_appointments = [a for a in npc.special_appointments if a not in expired]
        self._sync_entries(npc)
        logger.debug(f"Expired appointments pruned: {npc.npc_id} ({len(expired)})")
        return True
