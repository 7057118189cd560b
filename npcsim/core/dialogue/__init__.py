"""대화 Core 패키지 — 공개 API"""

from npcsim.core.dialogue.models import (
    CONVERSATION_ENDED_TEXT,
    Ability,
    ComparisonOperator,
    ConversationState,
    ConversationStatus,
    DialogueHistoryItem,
    DialogueNode,
    DialogueRequirement,
    DialogueResponse,
    DialogueResult,
    DialogueSkillCheck,
    RequirementType,
    SkillCheckResult,
)
from npcsim.core.dialogue.errors import (
    ConversationNotFoundError,
    DialogueError,
    DialogueNodeNotFoundError,
    ResponseNotFoundError,
)
from npcsim.core.dialogue.requirements import (
    REQUIREMENT_CHECKERS,
    InventoryCollaborator,
    QuestTracker,
    RequirementContext,
    check_requirement,
    compare,
    filter_available_responses,
)
from npcsim.core.dialogue.skill_check import (
    ability_modifier,
    perform_skill_check,
    resolve_branch,
    roll_d20,
)
from npcsim.core.dialogue.navigation import (
    GENERIC_GOODBYE_ID,
    GENERIC_GREETING_ID,
    find_node,
    find_starting_node,
    generic_greeting,
)
from npcsim.core.dialogue.loader import (
    load_dialogue_graph,
    node_from_dict,
    node_to_dict,
    parse_dialogue_graph,
)
from npcsim.core.dialogue.quests import (
    QuestCatalog,
    QuestInfo,
    build_completion_node,
    build_offer_nodes,
    merge_nodes,
)

__all__ = [
    # models
    "CONVERSATION_ENDED_TEXT",
    "Ability",
    "ComparisonOperator",
    "ConversationState",
    "ConversationStatus",
    "DialogueHistoryItem",
    "DialogueNode",
    "DialogueRequirement",
    "DialogueResponse",
    "DialogueResult",
    "DialogueSkillCheck",
    "RequirementType",
    "SkillCheckResult",
    # errors
    "ConversationNotFoundError",
    "DialogueError",
    "DialogueNodeNotFoundError",
    "ResponseNotFoundError",
    # requirements
    "REQUIREMENT_CHECKERS",
    "InventoryCollaborator",
    "QuestTracker",
    "RequirementContext",
    "check_requirement",
    "compare",
    "filter_available_responses",
    # skill check
    "ability_modifier",
    "perform_skill_check",
    "resolve_branch",
    "roll_d20",
    # navigation
    "GENERIC_GOODBYE_ID",
    "GENERIC_GREETING_ID",
    "find_node",
    "find_starting_node",
    "generic_greeting",
    # loader
    "load_dialogue_graph",
    "node_from_dict",
    "node_to_dict",
    "parse_dialogue_graph",
    # quests
    "QuestCatalog",
    "QuestInfo",
    "build_completion_node",
    "build_offer_nodes",
    "merge_nodes",
]
