"""대화 기능 판정

d20 + 능력 수정치 + 응답 수정치 ≥ DC 이면 성공.
주사위 눈 1 또는 20은 critical.
"""

import random
from typing import Optional

from npcsim.core.dialogue.models import DialogueSkillCheck, SkillCheckResult


def roll_d20(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randint(1, 20)


def ability_modifier(score: int) -> int:
    """(score - 10) / 2 내림"""
    return (score - 10) // 2


def perform_skill_check(
    check: DialogueSkillCheck,
    ability_score: int,
    response_modifier: int = 0,
    roll: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SkillCheckResult:
    """판정 실행. roll 미지정 시 roll_d20()."""
    if roll is None:
        roll = roll_d20(rng)
    total = roll + ability_modifier(ability_score) + response_modifier
    return SkillCheckResult(
        check_type=check.check_type,
        ability=check.ability,
        difficulty_class=check.difficulty_class,
        roll=roll,
        total=total,
        success=total >= check.difficulty_class,
        critical=roll in (1, 20),
    )


def resolve_branch(check: DialogueSkillCheck, result: SkillCheckResult) -> str:
    """판정 결과 → 다음 노드 ID. critical 노드가 없으면 일반 노드."""
    if result.success:
        if result.critical and check.critical_success_node_id:
            return check.critical_success_node_id
        return check.success_node_id
    if result.critical and check.critical_failure_node_id:
        return check.critical_failure_node_id
    return check.failure_node_id
