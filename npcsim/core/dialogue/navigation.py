"""대화 그래프 탐색 — 시작 노드 선택, 노드 조회"""

from typing import List, Optional

from npcsim.core.dialogue.models import (
    TAG_FRIENDLY,
    TAG_GREETING,
    TAG_HOSTILE,
    TAG_INTRODUCTION,
    DialogueNode,
    DialogueResponse,
)

GENERIC_GREETING_ID = "generic-greeting"
GENERIC_GOODBYE_ID = "generic-goodbye"

FRIENDLY_GREETING_THRESHOLD = 5
HOSTILE_GREETING_THRESHOLD = -5


def find_node(graph: List[DialogueNode], node_id: Optional[str]) -> Optional[DialogueNode]:
    if node_id is None:
        return None
    for node in graph:
        if node.node_id == node_id:
            return node
    return None


def generic_greeting(player_name: str) -> DialogueNode:
    """대화 그래프가 비어 있는 NPC용 인사 노드"""
    return DialogueNode(
        node_id=GENERIC_GREETING_ID,
        text=f"Hello there, {player_name}. What can I do for you?",
        responses=[
            DialogueResponse(
                response_id=GENERIC_GOODBYE_ID,
                text="Nothing, just saying hello.",
                is_goodbye=True,
            )
        ],
    )


def find_starting_node(
    graph: List[DialogueNode],
    first_interaction: bool,
    relationship: int,
    player_name: str,
) -> DialogueNode:
    """시작 노드 선택.

    1. 첫 만남이면 introduction 태그 노드
    2. greeting 노드 중 관계 > 5면 friendly, < -5면 hostile, 없으면 첫 greeting
    3. 그래프의 첫 노드
    4. 합성 인사 노드
    """
    if first_interaction:
        for node in graph:
            if node.has_tag(TAG_INTRODUCTION):
                return node

    greetings = [n for n in graph if n.has_tag(TAG_GREETING)]
    if greetings:
        wanted = None
        if relationship > FRIENDLY_GREETING_THRESHOLD:
            wanted = TAG_FRIENDLY
        elif relationship < HOSTILE_GREETING_THRESHOLD:
            wanted = TAG_HOSTILE
        if wanted is not None:
            for node in greetings:
                if node.has_tag(wanted):
                    return node
        return greetings[0]

    if graph:
        return graph[0]

    return generic_greeting(player_name)
