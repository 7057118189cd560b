"""EventBus - 시뮬레이션 이벤트 통신

Scheduler / RelationshipGraph / InteractionEngine / DialogueEngine은
서로를 직접 부르지 않고 여기로 사실만 알린다 (ID 위주 payload).

- 전파 깊이 최대 MAX_DEPTH
- 한 체인 안에서 같은 (source, event_type, cause_id)는 한 번만
- 최근 이벤트는 HISTORY_SIZE개까지 보관 (조회용)
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Set

from npcsim.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5
HISTORY_SIZE = 200


@dataclass
class GameEvent:
    """이벤트 1건

    Args:
        event_type: EventTypes 상수 (예: "npc_moved")
        data: ID 위주의 가벼운 payload
        source: 발행 서비스 이름
        cause_id: 중복 판정 키. 같은 틱에 NPC마다 같은 이벤트를 내면 NPC ID를 넣는다.
    """

    event_type: str
    data: Dict[str, Any]
    source: str
    cause_id: str = ""

    _depth: int = field(default=0, repr=False)

    @property
    def chain_key(self) -> str:
        return f"{self.source}:{self.event_type}:{self.cause_id}"


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

        bus = EventBus()
        bus.subscribe(EventTypes.NPC_MOVED, on_moved)
        bus.emit(GameEvent(EventTypes.NPC_MOVED, {"npc_id": "npc_hilda"}, "scheduler", "npc_hilda"))
    """

    def __init__(self, history_size: int = HISTORY_SIZE) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth = 0
        self._emitted_in_chain: Set[str] = set()
        self._history: Deque[GameEvent] = deque(maxlen=history_size)

    # ── 구독 ─────────────────────────────────────────────────

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
        else:
            logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    # ── 발행 ─────────────────────────────────────────────────

    def emit(self, event: GameEvent) -> bool:
        """핸들러를 등록 순서대로 동기 호출. 차단되면 False.

        핸들러 예외는 기록만 하고 다음 핸들러로 넘어간다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): {event.chain_key} 무시됨"
            )
            return False
        if event.chain_key in self._emitted_in_chain:
            logger.warning(f"EventBus 중복 이벤트 차단: {event.chain_key}")
            return False

        self._emitted_in_chain.add(event.chain_key)
        event._depth = self._current_depth
        self._history.append(event)

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            return True

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
        return True

    def reset_chain(self) -> None:
        """틱/요청 시작 시 호출. 중복 추적만 초기화하고 기록은 유지."""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    # ── 조회 ─────────────────────────────────────────────────

    def recent(self, event_type: Optional[str] = None, limit: Optional[int] = None) -> List[GameEvent]:
        """최근 이벤트 (최신순)"""
        events = [e for e in reversed(self._history) if event_type is None or e.event_type == event_type]
        return events if limit is None else events[:limit]

    def clear(self) -> None:
        """구독/기록 전부 초기화 (테스트용)"""
        self._handlers.clear()
        self._history.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
