"""Memory Store — NPC별 플레이어 기억 보관

기억은 대화 엔진이 처음 필요로 할 때 만들어진다 (lazy).
"""

from typing import Dict, List, Optional

from npcsim.core.logging import get_logger
from npcsim.core.npc.memory import NPCMemory

logger = get_logger(__name__)


class MemoryStore:
    """npc_id → NPCMemory"""

    def __init__(self) -> None:
        self._memories: Dict[str, NPCMemory] = {}

    def get(self, npc_id: str) -> Optional[NPCMemory]:
        return self._memories.get(npc_id)

    def get_or_create(self, npc_id: str) -> NPCMemory:
        memory = self._memories.get(npc_id)
        if memory is None:
            memory = NPCMemory(npc_id=npc_id)
            self._memories[npc_id] = memory
            logger.debug(f"Memory created for NPC {npc_id}")
        return memory

    def all(self) -> List[NPCMemory]:
        return list(self._memories.values())

    def __contains__(self, npc_id: str) -> bool:
        return npc_id in self._memories

    def __len__(self) -> int:
        return len(self._memories)
