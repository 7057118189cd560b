"""Narrative service — NPC 상호작용 서술 생성 관문.

LLM 실패는 절대 시뮬레이션을 멈추지 않는다: 예외는 잡아서 경고 로그 후
결정적 템플릿 문자열로 대체한다.
"""

from npcsim.core.interaction.models import InteractionType
from npcsim.core.interaction.selection import fallback_description
from npcsim.core.logging import get_logger
from npcsim.core.relationship.calculations import describe_relationship
from npcsim.services.ai.base import AIProvider

logger = get_logger(__name__)

INTERACTION_MAX_TOKENS = 120
DEFAULT_OCCUPATION = "resident"


class NarrativeService:
    """Service for generating interaction narratives using AI providers."""

    def __init__(self, ai_provider: AIProvider) -> None:
        """Initialize the narrative service.

        Args:
            ai_provider: The AI provider to use for text generation.
        """
        self.ai = ai_provider

    def generate_text(self, prompt: str, max_tokens: int = INTERACTION_MAX_TOKENS) -> str:
        """Raw text generation. 실패 시 예외를 그대로 올린다."""
        if not self.ai.is_available():
            raise RuntimeError(f"AI provider '{self.ai.name}' is not available")
        return self.ai.generate(prompt, max_tokens=max_tokens)

    # === 상호작용 ===

    def build_interaction_prompt(
        self,
        npc1_name: str,
        npc1_occupation: str | None,
        npc2_name: str,
        npc2_occupation: str | None,
        location_name: str,
        interaction_type: InteractionType,
        relationship_value: int,
    ) -> str:
        occ1 = npc1_occupation or DEFAULT_OCCUPATION
        occ2 = npc2_occupation or DEFAULT_OCCUPATION
        return (
            f"{npc1_name} ({occ1}) and {npc2_name} ({occ2}) are interacting in "
            f"{location_name}. They are having a {interaction_type.value}. "
            f"Their relationship is {describe_relationship(relationship_value)}. "
            "Describe their interaction in 1-2 sentences."
        )

    def describe_interaction(
        self,
        npc1_name: str,
        npc1_occupation: str | None,
        npc2_name: str,
        npc2_occupation: str | None,
        location_name: str,
        interaction_type: InteractionType,
        relationship_value: int,
    ) -> str:
        """상호작용 1-2문장 서술. 실패/빈 응답이면 템플릿."""
        prompt = self.build_interaction_prompt(
            npc1_name,
            npc1_occupation,
            npc2_name,
            npc2_occupation,
            location_name,
            interaction_type,
            relationship_value,
        )
        try:
            text = self.generate_text(prompt).strip()
        except Exception as e:
            logger.warning("AI generation failed, using fallback: %s", e)
            return fallback_description(npc1_name, npc2_name, interaction_type)

        if not text:
            return fallback_description(npc1_name, npc2_name, interaction_type)
        return text
