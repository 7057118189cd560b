"""Interaction Service (InteractionEngine) — 플레이어 없이 일어나는 NPC 간 상호작용

틱마다 같은 장소에 있는 한가한 NPC를 짝지어 상호작용을 만들고
양방향 관계 기록을 갱신한다. 반환은 보이는(is_visible) 상호작용만.
"""

import random
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from npcsim.config import settings
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.interaction.models import InteractionResult
from npcsim.core.interaction.selection import (
    PairKey,
    candidate_types,
    fallback_description,
    is_available,
    is_on_cooldown,
    pair_key,
    roll_anchor_index,
    roll_reciprocal_delta,
    roll_relationship_delta,
    roll_score_jitter,
    roll_visibility,
    select_interaction_type,
)
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData
from npcsim.core.relationship.models import RelationshipRecord
from npcsim.services.narrative_service import NarrativeService
from npcsim.services.npc_registry import NPCRegistry
from npcsim.services.relationship_service import RelationshipGraph
from npcsim.services.schedule_service import Scheduler

logger = get_logger(__name__)

# (npc1, npc2, location_id) → 플레이어에게 보이는가
VisibilityPredicate = Callable[[NPCData, NPCData, str], bool]

DEFAULT_RECENT_LIMIT = 5


class InteractionEngine:
    """NPC 간 상호작용 생성/기록"""

    def __init__(
        self,
        registry: NPCRegistry,
        scheduler: Scheduler,
        relationships: RelationshipGraph,
        event_bus: EventBus,
        narrative: Optional[NarrativeService] = None,
        rng: Optional[random.Random] = None,
        cooldown: Optional[int] = None,
        visibility: Optional[VisibilityPredicate] = None,
    ) -> None:
        self._registry = registry
        self._scheduler = scheduler
        self._relationships = relationships
        self._bus = event_bus
        self._narrative = narrative
        self._rng = rng
        self._cooldown = settings.INTERACTION_COOLDOWN if cooldown is None else cooldown
        self._visibility = visibility or self._default_visibility

        self._last_pair_times: Dict[PairKey, int] = {}  # pair_key → 마지막 상호작용 시각
        self._log: List[InteractionResult] = []

    def _default_visibility(self, npc1: NPCData, npc2: NPCData, location_id: str) -> bool:
        return roll_visibility(settings.INTERACTION_VISIBILITY_CHANCE, self._rng)

    # ── 틱 처리 ─────────────────────────────────────────────

    def process_interactions(
        self, current_time: int, location_id: Optional[str] = None
    ) -> List[InteractionResult]:
        """장소별로 짝짓기 라운드 실행. 보이는 상호작용만 반환."""
        self._bus.reset_chain()

        if location_id is not None:
            npcs = self._registry.get_npcs_in_location(location_id)
        else:
            npcs = self._registry.get_all_npcs()

        groups: Dict[str, List[NPCData]] = {}
        for npc in npcs:
            groups.setdefault(npc.location, []).append(npc)

        visible: List[InteractionResult] = []
        for loc, group in groups.items():
            if len(group) < 2:
                continue
            available = [n for n in group if is_available(self._activity_of(n, current_time))]
            if len(available) < 2:
                logger.debug(f"Interactions skipped at {loc}: {len(available)} available")
                continue

            for _ in range(len(available) // 2):
                if len(available) < 2:
                    break
                pair = self._pick_pair(available, current_time)
                if pair is None:
                    continue
                result = self._interact(pair[0], pair[1], loc, current_time)
                if result.is_visible:
                    visible.append(result)

        return visible

    def _activity_of(self, npc: NPCData, current_time: int) -> str:
        slot = self._scheduler.get_current_activity(npc.npc_id, current_time)
        return slot.activity if slot is not None else npc.current_activity

    def _pick_pair(
        self, available: List[NPCData], current_time: int
    ) -> Optional[Tuple[NPCData, NPCData]]:
        """무작위 기준 NPC를 뽑고 점수가 가장 높은 상대를 고른다. 둘 다 목록에서 제거."""
        anchor = available.pop(roll_anchor_index(len(available), self._rng))

        best: Optional[NPCData] = None
        best_score = float("-inf")
        for candidate in available:
            if is_on_cooldown(
                self._last_pair_times, anchor.npc_id, candidate.npc_id, current_time, self._cooldown
            ):
                continue
            score = roll_score_jitter(self._rng) + anchor.relationship_value(candidate.npc_id)
            if score > best_score:
                best, best_score = candidate, score

        if best is None:
            logger.debug(f"No partner for {anchor.npc_id} (cooldown)")
            return None
        available.remove(best)
        return anchor, best

    def _interact(
        self, npc1: NPCData, npc2: NPCData, location_id: str, current_time: int
    ) -> InteractionResult:
        relationship = npc1.relationship_value(npc2.npc_id)
        types = candidate_types(npc1.occupation, npc2.occupation, relationship)
        interaction_type = select_interaction_type(types, relationship, self._rng)
        change = roll_relationship_delta(interaction_type, self._rng)

        if self._narrative is not None:
            description = self._narrative.describe_interaction(
                npc1.name,
                npc1.occupation,
                npc2.name,
                npc2.occupation,
                location_id,
                interaction_type,
                relationship,
            )
        else:
            description = fallback_description(npc1.name, npc2.name, interaction_type)

        result = InteractionResult(
            interaction_id=str(uuid.uuid4()),
            npc1_id=npc1.npc_id,
            npc2_id=npc2.npc_id,
            type=interaction_type,
            description=description,
            relationship_change=change,
            timestamp=current_time,
            location=location_id,
            is_visible=self._visibility(npc1, npc2, location_id),
        )

        self._relationships.adjust_relationship(npc1.npc_id, npc2.npc_id, change, current_time)
        self._relationships.adjust_relationship(
            npc2.npc_id, npc1.npc_id, roll_reciprocal_delta(change, self._rng), current_time
        )
        self._last_pair_times[pair_key(npc1.npc_id, npc2.npc_id)] = current_time
        self._log.append(result)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.NPC_INTERACTION,
                data={
                    "interaction_id": result.interaction_id,
                    "npc1_id": npc1.npc_id,
                    "npc2_id": npc2.npc_id,
                    "type": interaction_type.value,
                    "location": location_id,
                    "is_visible": result.is_visible,
                },
                source="interaction_engine",
                cause_id=result.interaction_id,
            )
        )
        logger.info(
            f"Interaction: {npc1.npc_id}↔{npc2.npc_id} {interaction_type.value} "
            f"change={change} at {location_id} (t={current_time})"
        )
        return result

    # ── 조회 ─────────────────────────────────────────────────

    def get_recent_location_interactions(
        self, location_id: str, limit: int = DEFAULT_RECENT_LIMIT
    ) -> List[InteractionResult]:
        """보이는 상호작용만, 최신순"""
        matching = [r for r in reversed(self._log) if r.location == location_id and r.is_visible]
        return matching[:limit]

    def get_interactions_between_npcs(self, npc1_id: str, npc2_id: str) -> List[InteractionResult]:
        """두 NPC 사이 상호작용 전체, 최신순"""
        key = pair_key(npc1_id, npc2_id)
        return [r for r in reversed(self._log) if pair_key(r.npc1_id, r.npc2_id) == key]

    def get_npc_relationships(self, npc_id: str) -> List[Tuple[RelationshipRecord, NPCData]]:
        return self._relationships.get_npc_relationships(npc_id)

    def last_interaction_time(self, npc1_id: str, npc2_id: str) -> Optional[int]:
        return self._last_pair_times.get(pair_key(npc1_id, npc2_id))
