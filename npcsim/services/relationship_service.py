"""Relationship Service (RelationshipGraph) — NPC 간 방향성 관계

관계 기록은 각 NPC가 소유한다 (npc.relationships).
모든 변경은 클램프 → 단계 재계산 → registry.update_npc 순서.
"""

import random
from itertools import combinations
from typing import List, Optional, Tuple

from npcsim.config import settings
from npcsim.core.clock import GameClock
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData
from npcsim.core.relationship.calculations import (
    apply_decay as decay_value,
    apply_delta,
    clamp_relationship,
    derive_relationship_type,
)
from npcsim.core.relationship.initialization import PairProfile, compute_initial_pair
from npcsim.core.relationship.models import RelationshipRecord
from npcsim.services.npc_registry import NPCRegistry

logger = get_logger(__name__)


class RelationshipGraph:
    """NPC 간 관계 조회/초기화/변동/감쇠"""

    def __init__(
        self,
        registry: NPCRegistry,
        event_bus: EventBus,
        clock: Optional[GameClock] = None,
        rng: Optional[random.Random] = None,
        decay_per_day: Optional[int] = None,
    ) -> None:
        self._registry = registry
        self._bus = event_bus
        self._clock = clock or GameClock.from_settings(settings)
        self._rng = rng
        self._decay_per_day = (
            settings.RELATIONSHIP_DECAY_PER_DAY if decay_per_day is None else decay_per_day
        )

    # ── 조회 ─────────────────────────────────────────────────

    def get_relationship(self, npc_id: str, other_npc_id: str) -> Optional[RelationshipRecord]:
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            return None
        return npc.get_relationship(other_npc_id)

    def get_relationship_value(self, npc_id: str, other_npc_id: str) -> int:
        """기록이 없으면 0"""
        record = self.get_relationship(npc_id, other_npc_id)
        return record.value if record is not None else 0

    def get_npc_relationships(self, npc_id: str) -> List[Tuple[RelationshipRecord, NPCData]]:
        """(기록, 상대 NPC) 목록. 없는 NPC를 가리키는 기록은 제외."""
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            return []
        joined = []
        for record in npc.relationships:
            other = self._registry.get_npc(record.other_npc_id)
            if other is not None:
                joined.append((record, other))
        return joined

    def has_any_relationship(self, npc_a: NPCData, npc_b: NPCData) -> bool:
        return (
            npc_a.get_relationship(npc_b.npc_id) is not None
            or npc_b.get_relationship(npc_a.npc_id) is not None
        )

    # ── 생성 ─────────────────────────────────────────────────

    def initialize_relationships(self, location_id: str, current_time: int = 0) -> int:
        """같은 장소 NPC 쌍 중 관계가 전혀 없는 쌍에 초기 관계 생성. 반환: 생성한 쌍 수.

        새 기록의 마지막 상호작용 시각은 current_time (감쇠 기준점).
        """
        npcs = self._registry.get_npcs_in_location(location_id)
        created = 0

        for npc_a, npc_b in combinations(npcs, 2):
            if self.has_any_relationship(npc_a, npc_b):
                continue

            forward, reverse = compute_initial_pair(
                PairProfile(npc_a.occupation, npc_a.faction),
                PairProfile(npc_b.occupation, npc_b.faction),
                self._rng,
            )
            npc_a.relationships.append(self._new_record(npc_b.npc_id, forward, current_time))
            npc_b.relationships.append(self._new_record(npc_a.npc_id, reverse, current_time))
            self._registry.update_npc(npc_a)
            self._registry.update_npc(npc_b)
            created += 1

            logger.debug(
                f"Initial relationship: {npc_a.npc_id}→{npc_b.npc_id}={forward}, "
                f"{npc_b.npc_id}→{npc_a.npc_id}={reverse}"
            )

        if created:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.RELATIONSHIPS_INITIALIZED,
                    data={"location_id": location_id, "pairs": created},
                    source="relationship_graph",
                    cause_id=location_id,
                )
            )
            logger.info(f"Relationships initialized at {location_id}: {created} pairs")
        return created

    # ── 변동 ─────────────────────────────────────────────────

    def adjust_relationship(
        self, npc_id: str, other_npc_id: str, delta: int, current_time: int
    ) -> Optional[RelationshipRecord]:
        """npc_id → other_npc_id 기록에 delta 적용. 기록이 없으면 0에서 시작."""
        npc = self._registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"adjust_relationship: unknown NPC {npc_id}")
            return None

        record = npc.get_relationship(other_npc_id)
        if record is None:
            record = self._new_record(other_npc_id, 0)
            npc.relationships.append(record)

        old_type = record.type
        old_value = record.value
        apply_delta(record, delta, current_time)
        record.last_decay_time = None
        self._registry.update_npc(npc)

        if record.type != old_type:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.RELATIONSHIP_CHANGED,
                    data={
                        "source_id": npc_id,
                        "target_id": other_npc_id,
                        "old_value": old_value,
                        "new_value": record.value,
                        "old_type": old_type.value,
                        "new_type": record.type.value,
                    },
                    source="relationship_graph",
                    cause_id=f"{npc_id}:{other_npc_id}",
                )
            )
        return record

    # ── 시간 감쇠 ───────────────────────────────────────────

    def apply_decay(self, current_time: int) -> int:
        """1일 이상 상호작용 없는 관계를 중립 방향으로 감쇠. 반환: 감쇠된 기록 수."""
        decayed = 0
        for npc in self._registry.get_all_npcs():
            changed = False
            for record in npc.relationships:
                anchor = max(record.last_interaction_time, record.last_decay_time or 0)
                days = self._clock.days_between(anchor, current_time)
                if days < 1:
                    continue
                record.last_decay_time = anchor + days * self._clock.minutes_per_day
                changed = True
                new_value = decay_value(record.value, days, self._decay_per_day)
                if new_value == record.value:
                    continue
                record.value = new_value
                record.type = derive_relationship_type(new_value)
                decayed += 1
            if changed:
                self._registry.update_npc(npc)

        if decayed:
            logger.info(f"Relationship decay: {decayed} records affected (t={current_time})")
        return decayed

    # ── 내부 헬퍼 ────────────────────────────────────────────

    @staticmethod
    def _new_record(other_npc_id: str, value: int, current_time: int = 0) -> RelationshipRecord:
        value = clamp_relationship(value)
        return RelationshipRecord(
            other_npc_id=other_npc_id,
            value=value,
            type=derive_relationship_type(value),
            last_interaction_time=current_time,
        )

