"""응답 노출 조건 판정

모든 조건이 참인 응답만 노출된다. 조건이 없으면 항상 노출.
"""

import operator
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol

from npcsim.core.dialogue.models import (
    ComparisonOperator,
    DialogueRequirement,
    DialogueResponse,
    RequirementType,
)


class InventoryCollaborator(Protocol):
    def get_item_quantity(self, item_id: str) -> int: ...


class QuestTracker(Protocol):
    def has_quest(self, quest_id: str) -> bool: ...


SkillChecker = Callable[[str], bool]

_OPERATORS: Dict[ComparisonOperator, Callable[[int, int], bool]] = {
    ComparisonOperator.EQ: operator.eq,
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.GE: operator.ge,
    ComparisonOperator.LE: operator.le,
}


def compare(actual: int, op: ComparisonOperator, expected: int) -> bool:
    return _OPERATORS[op](actual, expected)


@dataclass
class RequirementContext:
    """판정 시점의 플레이어/기억 상태 스냅샷"""

    inventory: Optional[InventoryCollaborator] = None
    ability_scores: Dict[str, int] = field(default_factory=dict)
    known_topics: Dict[str, int] = field(default_factory=dict)
    quest_tracker: Optional[QuestTracker] = None
    skill_checker: Optional[SkillChecker] = None


def _check_item(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    if ctx.inventory is None:
        return False
    return compare(ctx.inventory.get_item_quantity(req.target), req.operator, req.value)


def _check_quest(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    # 퀘스트 추적기가 없으면 보유 퀘스트 없음으로 간주
    if ctx.quest_tracker is None:
        return False
    return ctx.quest_tracker.has_quest(req.target)


def _check_skill(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    if ctx.skill_checker is None:
        return True
    return ctx.skill_checker(req.target)


def _check_ability(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    score = ctx.ability_scores.get(req.target.lower(), 0)
    return compare(score, req.operator, req.value)


def _check_faction(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    # 세력 평판 시스템 없음
    return True


def _check_topic(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    if req.target not in ctx.known_topics:
        return False
    return compare(ctx.known_topics[req.target], req.operator, req.value)


REQUIREMENT_CHECKERS: Dict[
    RequirementType, Callable[[DialogueRequirement, RequirementContext], bool]
] = {
    RequirementType.ITEM: _check_item,
    RequirementType.QUEST: _check_quest,
    RequirementType.SKILL: _check_skill,
    RequirementType.ABILITY: _check_ability,
    RequirementType.FACTION: _check_faction,
    RequirementType.TOPIC: _check_topic,
}


def check_requirement(req: DialogueRequirement, ctx: RequirementContext) -> bool:
    return REQUIREMENT_CHECKERS[req.type](req, ctx)


def filter_available_responses(
    responses: List[DialogueResponse], ctx: RequirementContext
) -> List[DialogueResponse]:
    return [
        r for r in responses
        if all(check_requirement(req, ctx) for req in r.requirements)
    ]
