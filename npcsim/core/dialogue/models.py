"""대화 그래프 도메인 모델 (DB 무관)

대화 그래프(노드 + 응답 간선)는 정적 데이터이고,
ConversationState는 진행 중인 대화 1건의 가변 커서다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RequirementType(str, Enum):
    """응답 노출 조건 유형"""

    ITEM = "item"
    QUEST = "quest"
    SKILL = "skill"
    ABILITY = "ability"
    FACTION = "faction"
    TOPIC = "topic"


class ComparisonOperator(str, Enum):
    EQ = "="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="


class Ability(str, Enum):
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


class ConversationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    INTERRUPTED = "interrupted"


@dataclass
class DialogueRequirement:
    """응답 노출 조건 1개. operator 생략 시 >="""

    type: RequirementType
    target: str
    value: int = 1
    operator: ComparisonOperator = ComparisonOperator.GE


@dataclass
class DialogueSkillCheck:
    """노드에 붙는 기능 판정. critical 분기는 선택."""

    ability: Ability
    difficulty_class: int
    success_node_id: str
    failure_node_id: str
    check_type: str = "persuasion"  # persuasion | intimidation | deception | insight
    critical_success_node_id: Optional[str] = None
    critical_failure_node_id: Optional[str] = None


@dataclass
class DialogueResponse:
    """플레이어 선택지 (그래프 간선)"""

    response_id: str
    text: str
    next_node_id: Optional[str] = None
    requirements: list[DialogueRequirement] = field(default_factory=list)
    relationship_effect: int = 0
    is_goodbye: bool = False
    is_quest_accept: bool = False
    is_quest_refuse: bool = False
    skill_check_modifier: int = 0


@dataclass
class DialogueNode:
    """NPC 대사 1개 (그래프 노드)"""

    node_id: str
    text: str
    responses: list[DialogueResponse] = field(default_factory=list)
    skill_check: Optional[DialogueSkillCheck] = None
    tags: list[str] = field(default_factory=list)
    reveals_topic: Optional[str] = None
    quest_id: Optional[str] = None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def find_response(self, response_id: str) -> Optional[DialogueResponse]:
        for response in self.responses:
            if response.response_id == response_id:
                return response
        return None


@dataclass
class SkillCheckResult:
    """판정 1회 결과"""

    check_type: str
    ability: Ability
    difficulty_class: int
    roll: int
    total: int
    success: bool
    critical: bool = False


@dataclass
class DialogueHistoryItem:
    """대화 중 주고받은 한 턴"""

    node_id: str
    npc_text: str
    player_response_id: Optional[str] = None
    player_response_text: Optional[str] = None


@dataclass
class ConversationState:
    """진행 중 대화 상태 (인메모리). 종료 시 활성 목록에서 제거된다."""

    npc_id: str
    current_node_id: str
    history: list[DialogueHistoryItem] = field(default_factory=list)
    topics_discovered: list[str] = field(default_factory=list)
    skill_checks_attempted: list[SkillCheckResult] = field(default_factory=list)
    relationship_change: int = 0
    status: ConversationStatus = ConversationStatus.ACTIVE
    conversation_id: str = ""


@dataclass
class DialogueResult:
    """start_conversation / select_response 반환값"""

    text: str
    available_responses: list[DialogueResponse] = field(default_factory=list)
    skill_check: Optional[DialogueSkillCheck] = None
    conversation_ended: bool = False
    relationship_change: int = 0
    quest_accepted: Optional[str] = None
    quest_refused: Optional[str] = None
    skill_check_result: Optional[SkillCheckResult] = None


# --- 태그 ---
TAG_INTRODUCTION = "introduction"
TAG_GREETING = "greeting"
TAG_FRIENDLY = "friendly"
TAG_HOSTILE = "hostile"

CONVERSATION_ENDED_TEXT = "The conversation has ended."
