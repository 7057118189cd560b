"""Dialogue Service (DialogueEngine) — 플레이어와 NPC의 분기 대화

NPC당 활성 대화는 최대 1개. 종료 경로(작별 응답, 다음 노드 없음,
외부 end_conversation)는 모두 _finalize 하나로 모이며 중복 호출해도 안전하다.
"""

import random
import uuid
from typing import Callable, Dict, List, Optional

from npcsim.config import settings
from npcsim.core.dialogue.errors import (
    ConversationNotFoundError,
    DialogueNodeNotFoundError,
    ResponseNotFoundError,
)
from npcsim.core.dialogue.models import (
    CONVERSATION_ENDED_TEXT,
    ConversationState,
    ConversationStatus,
    DialogueHistoryItem,
    DialogueNode,
    DialogueResponse,
    DialogueResult,
    SkillCheckResult,
)
from npcsim.core.dialogue.navigation import find_node, find_starting_node
from npcsim.core.dialogue.requirements import (
    QuestTracker,
    RequirementContext,
    SkillChecker,
    filter_available_responses,
)
from npcsim.core.dialogue.skill_check import perform_skill_check, resolve_branch
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.core.npc.memory import (
    DialogueHistoryEntry,
    NPCMemory,
    adjust_relationship,
    append_history,
    promote_topics,
    record_quest_completed as memory_record_quest_completed,
    record_quest_given,
)
from npcsim.core.npc.models import NPCData, PlayerState
from npcsim.services.memory_store import MemoryStore

logger = get_logger(__name__)


class DialogueEngine:
    """대화 상태 머신

    Args:
        memory_store: NPC별 플레이어 기억
        event_bus: dialogue_started / dialogue_ended / quest_* 발행
        player: 인벤토리 수량과 능력치를 제공하는 플레이어 상태
        quest_tracker: 선택. 없으면 quest 조건은 항상 거짓.
        skill_checker: 선택. 없으면 skill 조건은 항상 참.
        time_source: 기억 이벤트 타임스탬프용 현재 시각 공급자
    """

    def __init__(
        self,
        memory_store: MemoryStore,
        event_bus: EventBus,
        player: PlayerState,
        quest_tracker: Optional[QuestTracker] = None,
        skill_checker: Optional[SkillChecker] = None,
        rng: Optional[random.Random] = None,
        history_cap: Optional[int] = None,
        time_source: Optional[Callable[[], int]] = None,
    ) -> None:
        self._memories = memory_store
        self._bus = event_bus
        self._player = player
        self._quest_tracker = quest_tracker
        self._skill_checker = skill_checker
        self._rng = rng
        self._history_cap = (
            settings.CONVERSATION_HISTORY_CAP if history_cap is None else history_cap
        )
        self._now = time_source or (lambda: 0)

        self._active: Dict[str, ConversationState] = {}
        self._synthetic_nodes: Dict[str, DialogueNode] = {}  # 그래프 밖 합성 노드

    @property
    def player(self) -> PlayerState:
        return self._player

    # ── 시작 ─────────────────────────────────────────────────

    def start_conversation(
        self, npc: NPCData, start_node_id: Optional[str] = None
    ) -> DialogueResult:
        """대화 시작. 진행 중인 대화가 있으면 중단 처리 후 새로 시작한다.

        start_node_id를 주면 시작 노드 선택 규칙 대신 그 노드에서 시작한다
        (퀘스트 제안/완료 노드 등).

        Raises:
            DialogueNodeNotFoundError: start_node_id가 그래프에 없음
        """
        forced: Optional[DialogueNode] = None
        if start_node_id is not None:
            forced = find_node(npc.dialogue, start_node_id)
            if forced is None:
                raise DialogueNodeNotFoundError(start_node_id)

        if npc.npc_id in self._active:
            self.end_conversation(npc.npc_id)

        now = self._now()
        memory = self._memories.get_or_create(npc.npc_id)
        memory.interaction_count += 1
        memory.last_interaction_time = now

        node = forced or find_starting_node(
            npc.dialogue,
            first_interaction=memory.interaction_count == 1,
            relationship=memory.relationship,
            player_name=self._player.name,
        )
        if find_node(npc.dialogue, node.node_id) is None:
            self._synthetic_nodes[npc.npc_id] = node

        state = ConversationState(
            npc_id=npc.npc_id,
            current_node_id=node.node_id,
            conversation_id=str(uuid.uuid4()),
        )
        state.history.append(DialogueHistoryItem(node.node_id, node.text))
        if node.reveals_topic:
            state.topics_discovered.append(node.reveals_topic)
        self._active[npc.npc_id] = state

        append_history(
            memory,
            DialogueHistoryEntry(context="greeting", npc_response=node.text, timestamp=now),
            self._history_cap,
        )

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.DIALOGUE_STARTED,
                data={"npc_id": npc.npc_id, "node_id": node.node_id},
                source="dialogue_engine",
                cause_id=state.conversation_id,
            )
        )
        logger.info(
            f"Conversation started: {npc.npc_id} node={node.node_id} "
            f"(interaction #{memory.interaction_count})"
        )

        return DialogueResult(
            text=node.text,
            available_responses=self.filter_available_responses(npc, node.responses),
            skill_check=node.skill_check,
            conversation_ended=False,
            relationship_change=0,
        )

    # ── 응답 선택 ───────────────────────────────────────────

    def select_response(self, npc: NPCData, response_id: str) -> DialogueResult:
        """응답 선택 → 효과 적용 → 다음 노드 진행.

        Raises:
            ConversationNotFoundError: 활성 대화 없음
            DialogueNodeNotFoundError: 현재 노드가 그래프에 없음
            ResponseNotFoundError: 현재 노드에 없는(또는 노출되지 않은) 응답
        """
        state = self._active.get(npc.npc_id)
        if state is None:
            raise ConversationNotFoundError(npc.npc_id)

        node = self._lookup_node(npc, state.current_node_id)
        if node is None:
            raise DialogueNodeNotFoundError(state.current_node_id)

        response = node.find_response(response_id)
        if response is None or response not in self.filter_available_responses(
            npc, node.responses
        ):
            raise ResponseNotFoundError(response_id, node.node_id)

        now = self._now()
        memory = self._memories.get_or_create(npc.npc_id)

        last = state.history[-1]
        last.player_response_id = response.response_id
        last.player_response_text = response.text

        if response.relationship_effect:
            adjust_relationship(memory, response.relationship_effect, now)
            state.relationship_change += response.relationship_effect

        quest_accepted: Optional[str] = None
        quest_refused: Optional[str] = None
        if response.is_quest_accept and node.quest_id:
            quest_accepted = node.quest_id
            record_quest_given(memory, node.quest_id, now)
            self._emit_quest(EventTypes.QUEST_ACCEPTED, state, node.quest_id)
        if response.is_quest_refuse and node.quest_id:
            quest_refused = node.quest_id
            self._emit_quest(EventTypes.QUEST_REFUSED, state, node.quest_id)

        ended = response.is_goodbye
        next_node: Optional[DialogueNode] = None
        check_result: Optional[SkillCheckResult] = None

        if not ended:
            if node.skill_check is not None:
                check = node.skill_check
                check_result = perform_skill_check(
                    check,
                    self._player.ability_score(check.ability.value),
                    response.skill_check_modifier,
                    rng=self._rng,
                )
                state.skill_checks_attempted.append(check_result)
                next_id: Optional[str] = resolve_branch(check, check_result)
                logger.debug(
                    f"Skill check {check.check_type}: roll={check_result.roll} "
                    f"total={check_result.total} vs DC{check.difficulty_class} "
                    f"→ {next_id}"
                )
            else:
                next_id = response.next_node_id

            next_node = self._lookup_node(npc, next_id)
            if next_node is None:
                ended = True
            else:
                self._advance(state, memory, next_node, response, now)

        if ended:
            self._finalize(npc.npc_id, ConversationStatus.COMPLETED)

        return DialogueResult(
            text=next_node.text if next_node is not None else CONVERSATION_ENDED_TEXT,
            available_responses=(
                self.filter_available_responses(npc, next_node.responses)
                if next_node is not None
                else []
            ),
            skill_check=next_node.skill_check if next_node is not None else None,
            conversation_ended=ended,
            relationship_change=response.relationship_effect,
            quest_accepted=quest_accepted,
            quest_refused=quest_refused,
            skill_check_result=check_result,
        )

    def filter_available_responses(
        self, npc: NPCData, responses: List[DialogueResponse]
    ) -> List[DialogueResponse]:
        """조건을 모두 만족하는 응답만"""
        memory = self._memories.get(npc.npc_id)
        ctx = RequirementContext(
            inventory=self._player,
            ability_scores={k.lower(): v for k, v in self._player.ability_scores.items()},
            known_topics=dict(memory.known_topics) if memory is not None else {},
            quest_tracker=self._quest_tracker,
            skill_checker=self._skill_checker,
        )
        return filter_available_responses(responses, ctx)

    # ── 종료 ─────────────────────────────────────────────────

    def end_conversation(self, npc_id: str) -> bool:
        """외부 중단. 활성 대화가 없으면 False."""
        if npc_id not in self._active:
            return False
        self._finalize(npc_id, ConversationStatus.INTERRUPTED)
        return True

    def _finalize(self, npc_id: str, status: ConversationStatus) -> None:
        state = self._active.pop(npc_id, None)
        self._synthetic_nodes.pop(npc_id, None)
        if state is None:
            return

        state.status = status
        memory = self._memories.get(npc_id)
        if memory is not None and state.topics_discovered:
            promote_topics(memory, state.topics_discovered)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.DIALOGUE_ENDED,
                data={
                    "npc_id": npc_id,
                    "status": status.value,
                    "relationship_change": state.relationship_change,
                    "topics": list(state.topics_discovered),
                },
                source="dialogue_engine",
                cause_id=state.conversation_id,
            )
        )
        logger.info(
            f"Conversation ended: {npc_id} status={status.value} "
            f"change={state.relationship_change}"
        )

    # ── 퀘스트 ───────────────────────────────────────────────

    def record_quest_completed(self, npc_id: str, quest_id: str) -> bool:
        """퀘스트 완료 기록 (+3 관계). 기억이 없거나 이미 기록됐으면 False."""
        memory = self._memories.get(npc_id)
        if memory is None:
            logger.warning(f"record_quest_completed: no memory for NPC {npc_id}")
            return False
        recorded = memory_record_quest_completed(memory, quest_id, self._now())
        if recorded:
            logger.info(f"Quest completed for {npc_id}: {quest_id}")
        return recorded

    # ── 조회 ─────────────────────────────────────────────────

    def get_npc_memory(self, npc_id: str) -> Optional[NPCMemory]:
        return self._memories.get(npc_id)

    def get_dialogue_history(self, npc_id: str) -> List[DialogueHistoryEntry]:
        memory = self._memories.get(npc_id)
        return list(memory.conversation_history) if memory is not None else []

    def has_active_conversation(self, npc_id: str) -> bool:
        return npc_id in self._active

    def get_conversation(self, npc_id: str) -> Optional[ConversationState]:
        return self._active.get(npc_id)

    # ── 내부 헬퍼 ────────────────────────────────────────────

    def _lookup_node(self, npc: NPCData, node_id: Optional[str]) -> Optional[DialogueNode]:
        node = find_node(npc.dialogue, node_id)
        if node is not None:
            return node
        synthetic = self._synthetic_nodes.get(npc.npc_id)
        if synthetic is not None and synthetic.node_id == node_id:
            return synthetic
        return None

    def _advance(
        self,
        state: ConversationState,
        memory: NPCMemory,
        next_node: DialogueNode,
        response: DialogueResponse,
        now: int,
    ) -> None:
        state.current_node_id = next_node.node_id
        state.history.append(DialogueHistoryItem(next_node.node_id, next_node.text))
        if next_node.reveals_topic and next_node.reveals_topic not in state.topics_discovered:
            state.topics_discovered.append(next_node.reveals_topic)
        append_history(
            memory,
            DialogueHistoryEntry(
                context="response",
                npc_response=next_node.text,
                player_statement=response.text,
                timestamp=now,
            ),
            self._history_cap,
        )

    def _emit_quest(self, event_type: str, state: ConversationState, quest_id: str) -> None:
        self._bus.emit(
            GameEvent(
                event_type=event_type,
                data={"npc_id": state.npc_id, "quest_id": quest_id},
                source="dialogue_engine",
                cause_id=f"{state.conversation_id}:{quest_id}",
            )
        )
