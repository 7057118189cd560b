"""NPC Core 도메인 모델

DB 무관 순수 데이터 클래스.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from npcsim.core.dialogue.models import DialogueNode
from npcsim.core.relationship.models import RelationshipRecord
from npcsim.core.schedule.models import NPCSchedule, SpecialAppointment


@dataclass
class NPCData:
    """시뮬레이션 대상 NPC

    relationships는 이 NPC가 소유한 방향성 관계 기록 목록이다.
    """

    npc_id: str
    name: str
    occupation: Optional[str] = None
    faction: Optional[str] = None

    # 위치/활동
    location: str = ""
    current_activity: str = ""

    # 일과
    schedule: Optional[NPCSchedule] = None
    special_appointments: List[SpecialAppointment] = field(default_factory=list)

    # 관계
    relationships: List[RelationshipRecord] = field(default_factory=list)

    # 대화 그래프
    dialogue: List[DialogueNode] = field(default_factory=list)

    def get_relationship(self, other_npc_id: str) -> Optional[RelationshipRecord]:
        for record in self.relationships:
            if record.other_npc_id == other_npc_id:
                return record
        return None

    def relationship_value(self, other_npc_id: str) -> int:
        """기록이 없으면 0 (중립)"""
        record = self.get_relationship(other_npc_id)
        return record.value if record is not None else 0


@dataclass
class PlayerState:
    """대화 조건 판정에 쓰는 플레이어 상태"""

    name: str = "traveler"
    ability_scores: Dict[str, int] = field(default_factory=dict)  # "charisma" → 14
    inventory: Dict[str, int] = field(default_factory=dict)  # item_id → 수량

    def get_item_quantity(self, item_id: str) -> int:
        return self.inventory.get(item_id, 0)

    def ability_score(self, ability: str) -> int:
        """미지정 능력치는 10 (수정치 0)"""
        return self.ability_scores.get(ability.lower(), 10)
