"""대화 그래프 JSON 로드

JSON 형식: 노드 객체 배열. 키는 snake_case.
    [{"node_id": "...", "text": "...", "tags": [...],
      "responses": [{"response_id": "...", "text": "...", "next_node_id": "...",
                     "requirements": [{"type": "item", "target": "rope", "value": 2}]}],
      "skill_check": {"ability": "charisma", "difficulty_class": 15, ...}}]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .models import (
    Ability,
    ComparisonOperator,
    DialogueNode,
    DialogueRequirement,
    DialogueResponse,
    DialogueSkillCheck,
    RequirementType,
)

logger = logging.getLogger(__name__)


def requirement_from_dict(raw: dict[str, Any]) -> DialogueRequirement:
    return DialogueRequirement(
        type=RequirementType(raw["type"]),
        target=raw["target"],
        value=int(raw.get("value", 1)),
        operator=ComparisonOperator(raw.get("operator", ">=")),
    )


def response_from_dict(raw: dict[str, Any]) -> DialogueResponse:
    return DialogueResponse(
        response_id=raw["response_id"],
        text=raw["text"],
        next_node_id=raw.get("next_node_id"),
        requirements=[requirement_from_dict(r) for r in raw.get("requirements", [])],
        relationship_effect=int(raw.get("relationship_effect", 0)),
        is_goodbye=bool(raw.get("is_goodbye", False)),
        is_quest_accept=bool(raw.get("is_quest_accept", False)),
        is_quest_refuse=bool(raw.get("is_quest_refuse", False)),
        skill_check_modifier=int(raw.get("skill_check_modifier", 0)),
    )


def skill_check_from_dict(raw: dict[str, Any]) -> DialogueSkillCheck:
    return DialogueSkillCheck(
        ability=Ability(raw["ability"]),
        difficulty_class=int(raw["difficulty_class"]),
        success_node_id=raw["success_node_id"],
        failure_node_id=raw["failure_node_id"],
        check_type=raw.get("check_type", "persuasion"),
        critical_success_node_id=raw.get("critical_success_node_id"),
        critical_failure_node_id=raw.get("critical_failure_node_id"),
    )


def node_from_dict(raw: dict[str, Any]) -> DialogueNode:
    skill_check = raw.get("skill_check")
    return DialogueNode(
        node_id=raw["node_id"],
        text=raw["text"],
        responses=[response_from_dict(r) for r in raw.get("responses", [])],
        skill_check=skill_check_from_dict(skill_check) if skill_check else None,
        tags=list(raw.get("tags", [])),
        reveals_topic=raw.get("reveals_topic"),
        quest_id=raw.get("quest_id"),
    )


def node_to_dict(node: DialogueNode) -> dict[str, Any]:
    """DB JSON 컬럼 저장용 역변환"""
    data: dict[str, Any] = {
        "node_id": node.node_id,
        "text": node.text,
        "tags": list(node.tags),
        "reveals_topic": node.reveals_topic,
        "quest_id": node.quest_id,
        "responses": [
            {
                "response_id": r.response_id,
                "text": r.text,
                "next_node_id": r.next_node_id,
                "requirements": [
                    {
                        "type": req.type.value,
                        "target": req.target,
                        "value": req.value,
                        "operator": req.operator.value,
                    }
                    for req in r.requirements
                ],
                "relationship_effect": r.relationship_effect,
                "is_goodbye": r.is_goodbye,
                "is_quest_accept": r.is_quest_accept,
                "is_quest_refuse": r.is_quest_refuse,
                "skill_check_modifier": r.skill_check_modifier,
            }
            for r in node.responses
        ],
    }
    if node.skill_check is not None:
        sc = node.skill_check
        data["skill_check"] = {
            "ability": sc.ability.value,
            "difficulty_class": sc.difficulty_class,
            "success_node_id": sc.success_node_id,
            "failure_node_id": sc.failure_node_id,
            "check_type": sc.check_type,
            "critical_success_node_id": sc.critical_success_node_id,
            "critical_failure_node_id": sc.critical_failure_node_id,
        }
    return data


def parse_dialogue_graph(raw_list: list[dict[str, Any]]) -> list[DialogueNode]:
    """dict 배열 → 노드 목록. 잘못된 노드는 경고 후 건너뛴다."""
    nodes: list[DialogueNode] = []
    for raw in raw_list:
        try:
            nodes.append(node_from_dict(raw))
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(
                "Failed to load dialogue node: %s — %s", raw.get("node_id", "?"), e
            )
    return nodes


def load_dialogue_graph(path: str | Path) -> list[DialogueNode]:
    """JSON 파일에서 대화 그래프 로드"""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        raw_list: list[dict[str, Any]] = json.load(f)
    nodes = parse_dialogue_graph(raw_list)
    logger.info("Loaded %d dialogue nodes from %s", len(nodes), path)
    return nodes
