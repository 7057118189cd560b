"""퀘스트 대화 노드 생성

- 완료 감사 노드: 작별 응답 2개 ("You're welcome." +1, "What about my reward?" -1)
- 제안 노드 묶음: 제안 → 수락 / 거절 / 상세
노드는 NPC 대화 그래프에 덧붙여 쓴다. ID는 퀘스트 ID에서 결정적으로 만든다.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from npcsim.core.dialogue.models import DialogueNode, DialogueResponse

TAG_QUEST_COMPLETION = "quest_completion"
TAG_QUEST_OFFER = "quest_offer"
TAG_QUEST_ACCEPTED = "quest_accepted"
TAG_QUEST_DECLINED = "quest_declined"
TAG_QUEST_DETAILS = "quest_details"


@dataclass
class QuestInfo:
    """대화에 필요한 만큼의 퀘스트 정보"""

    quest_id: str
    title: str
    description: str
    objectives: List[str] = field(default_factory=list)  # "clear the wolf den in the old mill"
    rewards: List[str] = field(default_factory=list)  # "20 gold coins"


class QuestCatalog(Protocol):
    def get_quest(self, quest_id: str) -> Optional[QuestInfo]: ...

    def next_quest_for(self, npc_id: str) -> Optional[QuestInfo]: ...


# ── 노드 ID ──────────────────────────────────────────────────


def completion_node_id(quest_id: str) -> str:
    return f"quest-completion-{quest_id}"


def offer_node_id(quest_id: str) -> str:
    return f"quest-offer-{quest_id}"


def accepted_node_id(quest_id: str) -> str:
    return f"quest-accepted-{quest_id}"


def declined_node_id(quest_id: str) -> str:
    return f"quest-declined-{quest_id}"


def details_node_id(quest_id: str) -> str:
    return f"quest-details-{quest_id}"


# ── 문구 ─────────────────────────────────────────────────────


def format_objectives(quest: QuestInfo) -> str:
    if not quest.objectives:
        return "There are no specific objectives."
    return "You need to " + ", and ".join(quest.objectives) + "."


def format_rewards(quest: QuestInfo) -> str:
    if not quest.rewards:
        return "I'll be very grateful for your help."
    return f"In return, I'll give you {' and '.join(quest.rewards)}."


# ── 노드 생성 ────────────────────────────────────────────────


def build_completion_node(quest_id: str, quest: Optional[QuestInfo] = None) -> DialogueNode:
    """완료 감사 노드. 퀘스트 정보가 없으면 일반 문구."""
    title = quest.title if quest is not None else "your quest"
    description = quest.description if quest is not None else "the task I asked of you"
    return DialogueNode(
        node_id=completion_node_id(quest_id),
        text=f"Thank you for completing {title}! I am grateful for your help with {description}.",
        responses=[
            DialogueResponse(
                response_id=f"quest-thanks-{quest_id}",
                text="You're welcome.",
                relationship_effect=1,
                is_goodbye=True,
            ),
            DialogueResponse(
                response_id=f"quest-reward-{quest_id}",
                text="What about my reward?",
                relationship_effect=-1,
                is_goodbye=True,
            ),
        ],
        tags=[TAG_QUEST_COMPLETION, quest_id],
    )


def build_offer_nodes(quest: QuestInfo) -> List[DialogueNode]:
    """제안/수락/거절/상세 노드 4개. 제안과 상세 노드가 quest_id를 가진다."""
    qid = quest.quest_id
    offer = DialogueNode(
        node_id=offer_node_id(qid),
        text=(
            f"I need your help with something important. {quest.description} "
            "Would you be willing to help me?"
        ),
        responses=[
            DialogueResponse(
                response_id=f"accept-{qid}",
                text="I'll help you.",
                next_node_id=accepted_node_id(qid),
                is_quest_accept=True,
            ),
            DialogueResponse(
                response_id=f"decline-{qid}",
                text="Sorry, I'm busy right now.",
                next_node_id=declined_node_id(qid),
                is_quest_refuse=True,
            ),
            DialogueResponse(
                response_id=f"more-info-{qid}",
                text="Tell me more about this task.",
                next_node_id=details_node_id(qid),
            ),
        ],
        tags=[TAG_QUEST_OFFER, qid],
        quest_id=qid,
    )
    accepted = DialogueNode(
        node_id=accepted_node_id(qid),
        text=f"Thank you! This means a lot to me. The task is simple: {format_objectives(quest)}",
        responses=[
            DialogueResponse(
                response_id=f"accepted-goodbye-{qid}",
                text="I'll get right on it.",
                is_goodbye=True,
            )
        ],
        tags=[TAG_QUEST_ACCEPTED, qid],
    )
    declined = DialogueNode(
        node_id=declined_node_id(qid),
        text="I understand. Perhaps another time then.",
        responses=[
            DialogueResponse(
                response_id=f"declined-goodbye-{qid}",
                text="Goodbye.",
                is_goodbye=True,
            )
        ],
        tags=[TAG_QUEST_DECLINED, qid],
    )
    details = DialogueNode(
        node_id=details_node_id(qid),
        text=(
            f"Here's what you need to know: {quest.description} "
            f"{format_objectives(quest)} {format_rewards(quest)}"
        ),
        responses=[
            DialogueResponse(
                response_id=f"details-accept-{qid}",
                text="I'll take the quest.",
                next_node_id=accepted_node_id(qid),
                is_quest_accept=True,
            ),
            DialogueResponse(
                response_id=f"details-decline-{qid}",
                text="I'll pass for now.",
                next_node_id=declined_node_id(qid),
                is_quest_refuse=True,
            ),
        ],
        tags=[TAG_QUEST_DETAILS, qid],
        quest_id=qid,
    )
    return [offer, accepted, declined, details]


def merge_nodes(graph: List[DialogueNode], nodes: List[DialogueNode]) -> int:
    """그래프에 없는 ID의 노드만 덧붙인다. 반환: 추가된 수."""
    existing = {n.node_id for n in graph}
    added = 0
    for node in nodes:
        if node.node_id in existing:
            continue
        graph.append(node)
        existing.add(node.node_id)
        added += 1
    return added
