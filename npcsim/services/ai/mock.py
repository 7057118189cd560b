"""Mock AI provider for testing and fallback."""

from typing import Optional

from npcsim.services.ai.base import AIProvider

MOCK_INTERACTION_TEXT = "[Mock] The two exchange a few words and go about their business."


class MockProvider(AIProvider):
    """Mock AI provider that returns static text.

    Used for testing and as a fallback when no API key is configured.
    """

    @property
    def name(self) -> str:
        return "mock"

    def is_available(self) -> bool:
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
    ) -> str:
        return MOCK_INTERACTION_TEXT
