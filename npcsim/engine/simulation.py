"""SimulationContext — 시뮬레이션 구성 요소를 한 번 조립해 전달하는 컨텍스트

모듈 전역 매니저 대신 이 객체를 만들어 API/테스트에 넘긴다.
advance(current_time)가 한 틱: 위치 갱신 → 도착 장소 관계 초기화 →
NPC 상호작용 → 관계 감쇠.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from npcsim.config import settings
from npcsim.core.clock import GameClock
from npcsim.core.dialogue.quests import (
    QuestCatalog,
    QuestInfo,
    build_completion_node,
    build_offer_nodes,
    merge_nodes,
)
from npcsim.core.dialogue.requirements import QuestTracker, SkillChecker
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.interaction.models import InteractionResult
from npcsim.core.logging import get_logger
from npcsim.core.npc.models import NPCData, PlayerState
from npcsim.core.schedule.models import ScheduleUpdateResult
from npcsim.services.dialogue_service import DialogueEngine
from npcsim.services.interaction_service import InteractionEngine, VisibilityPredicate
from npcsim.services.memory_store import MemoryStore
from npcsim.services.narrative_service import NarrativeService
from npcsim.services.npc_registry import NPCRegistry
from npcsim.services.relationship_service import RelationshipGraph
from npcsim.services.schedule_service import Scheduler

logger = get_logger(__name__)


class ClockRewindError(ValueError):
    """시계는 되돌릴 수 없다"""

    def __init__(self, requested: int, current: int) -> None:
        super().__init__(f"Cannot move clock back from {current} to {requested}")
        self.requested = requested
        self.current = current


@dataclass
class TickResult:
    """advance 1회 결과"""

    current_time: int
    moves: List[ScheduleUpdateResult] = field(default_factory=list)
    interactions: List[InteractionResult] = field(default_factory=list)
    relationships_created: int = 0
    relationships_decayed: int = 0


class SimulationContext:
    """Scheduler / RelationshipGraph / InteractionEngine / DialogueEngine 묶음"""

    def __init__(
        self,
        registry: NPCRegistry,
        event_bus: Optional[EventBus] = None,
        narrative: Optional[NarrativeService] = None,
        player: Optional[PlayerState] = None,
        clock: Optional[GameClock] = None,
        rng: Optional[random.Random] = None,
        quest_tracker: Optional[QuestTracker] = None,
        quest_catalog: Optional[QuestCatalog] = None,
        skill_checker: Optional[SkillChecker] = None,
        visibility: Optional[VisibilityPredicate] = None,
    ) -> None:
        self.registry = registry
        self.event_bus = event_bus or EventBus()
        self.clock = clock or GameClock.from_settings(settings)
        self.current_time = 0
        self.quest_tracker = quest_tracker
        self.quest_catalog = quest_catalog

        self.scheduler = Scheduler(registry, self.event_bus, self.clock, rng)
        self.relationships = RelationshipGraph(registry, self.event_bus, self.clock, rng)
        self.interactions = InteractionEngine(
            registry,
            self.scheduler,
            self.relationships,
            self.event_bus,
            narrative=narrative,
            rng=rng,
            visibility=visibility,
        )
        self.memories = MemoryStore()
        self.dialogue = DialogueEngine(
            self.memories,
            self.event_bus,
            player or PlayerState(),
            quest_tracker=quest_tracker,
            skill_checker=skill_checker,
            rng=rng,
            time_source=lambda: self.current_time,
        )

    # ── 준비 ─────────────────────────────────────────────────

    def populate(
        self,
        npcs: Iterable[NPCData],
        forced_locations: Optional[Dict[str, Dict[int, str]]] = None,
    ) -> int:
        """NPC 등록 + 일과 초기화 + 장소별 초기 관계. 반환: 등록된 NPC 수."""
        forced_locations = forced_locations or {}
        count = 0
        for npc in npcs:
            if self.registry.get_npc(npc.npc_id) is None:
                self.registry.add_npc(npc)
            self.scheduler.initialize_schedule(npc, forced_locations.get(npc.npc_id))
            count += 1

        self.initialize_all_relationships()
        logger.info(f"Simulation populated: {count} NPCs")
        return count

    def manage_existing(self) -> int:
        """저장소에 이미 있는 NPC 전부를 일과 관리 대상으로 등록"""
        npcs = self.registry.get_all_npcs()
        for npc in npcs:
            self.scheduler.initialize_schedule(npc)
        return len(npcs)

    def initialize_all_relationships(self) -> int:
        locations = {npc.location for npc in self.registry.get_all_npcs()}
        return sum(
            self.relationships.initialize_relationships(loc, self.current_time)
            for loc in sorted(locations)
        )

    # ── 틱 ───────────────────────────────────────────────────

    def advance(self, current_time: int) -> TickResult:
        """시계를 current_time으로 옮기고 한 틱 처리

        Raises:
            ClockRewindError: current_time이 직전 틱보다 이름
        """
        if current_time < self.current_time:
            raise ClockRewindError(current_time, self.current_time)
        self.current_time = current_time
        self.event_bus.reset_chain()

        result = TickResult(current_time=current_time)
        result.moves = self.scheduler.update_locations(current_time)

        for location_id in sorted({m.new_location_id for m in result.moves}):
            result.relationships_created += self.relationships.initialize_relationships(
                location_id, current_time
            )

        result.interactions = self.interactions.process_interactions(current_time)
        result.relationships_decayed = self.relationships.apply_decay(current_time)

        self.event_bus.emit(
            GameEvent(
                event_type=EventTypes.TICK_PROCESSED,
                data={
                    "time": current_time,
                    "moves": len(result.moves),
                    "interactions": len(result.interactions),
                },
                source="simulation",
                cause_id=str(current_time),
            )
        )
        logger.debug(
            f"Tick t={current_time}: moves={len(result.moves)} "
            f"interactions={len(result.interactions)}"
        )
        return result

    # ── 퀘스트 대화 ─────────────────────────────────────────

    def record_quest_completed(self, npc_id: str, quest_id: str) -> Optional[str]:
        """퀘스트 완료 기록 + NPC 대화 그래프에 감사 노드 추가.

        반환: 감사 노드 ID. NPC가 없거나 이미 기록된 완료면 None.
        """
        npc = self.registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"record_quest_completed: unknown NPC {npc_id}")
            return None
        if not self.dialogue.record_quest_completed(npc_id, quest_id):
            return None

        quest = self.quest_catalog.get_quest(quest_id) if self.quest_catalog else None
        node = build_completion_node(quest_id, quest)
        merge_nodes(npc.dialogue, [node])
        self.registry.update_npc(npc)
        return node.node_id

    def offer_quest(self, npc_id: str) -> Optional[QuestInfo]:
        """카탈로그에서 NPC의 다음 퀘스트를 골라 제안 노드 묶음을 그래프에 추가.

        카탈로그가 없거나 제안할 퀘스트가 없으면 None.
        플레이어가 이미 진행 중인 퀘스트(quest_tracker 기준)는 다시 제안하지 않는다.
        """
        npc = self.registry.get_npc(npc_id)
        if npc is None:
            logger.warning(f"offer_quest: unknown NPC {npc_id}")
            return None
        if self.quest_catalog is None:
            logger.debug(f"offer_quest: no quest catalog for {npc_id}")
            return None

        quest = self.quest_catalog.next_quest_for(npc_id)
        if quest is None:
            return None
        if self.quest_tracker is not None and self.quest_tracker.has_quest(quest.quest_id):
            logger.debug(f"offer_quest: {quest.quest_id} already active")
            return None

        if merge_nodes(npc.dialogue, build_offer_nodes(quest)):
            self.registry.update_npc(npc)
        logger.info(f"Quest offered by {npc_id}: {quest.quest_id}")
        return quest
