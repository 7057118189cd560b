"""Abstract base class for AI providers."""

from abc import ABC, abstractmethod
from typing import Optional


class AIProvider(ABC):
    """Abstract base class for AI providers.

    The narrative layer only needs short free-form text, so the
    contract is a single synchronous ``generate`` call.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
    ) -> str:
        """Generate text based on the prompt.

        Args:
            prompt: The user prompt to send to the AI model.
            system_prompt: Optional system prompt for role/instruction.
            max_tokens: Maximum tokens for the response.

        Returns:
            Generated text response.
        """
        ...
