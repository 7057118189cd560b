"""Provider selection for interaction narration.

Only two backends exist: the deterministic mock and Gemini. Any
configuration that cannot produce a working Gemini client narrates
with the mock instead, so a simulation tick never depends on the
network being configured.
"""

from typing import Callable, Dict, Optional

from npcsim.config import settings
from npcsim.core.logging import get_logger
from npcsim.services.ai.base import AIProvider
from npcsim.services.ai.gemini import GeminiProvider
from npcsim.services.ai.mock import MockProvider

logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


def _build_mock() -> Optional[AIProvider]:
    return MockProvider()


def _build_gemini() -> Optional[AIProvider]:
    if not settings.AI_API_KEY:
        logger.warning("AI_API_KEY not set, narrating with MockProvider")
        return None
    model = settings.AI_MODEL or DEFAULT_GEMINI_MODEL
    logger.debug("Narrating with Gemini model %s", model)
    return GeminiProvider(
        api_key=settings.AI_API_KEY,
        model=model,
        temperature=settings.AI_TEMPERATURE,
    )


PROVIDER_BUILDERS: Dict[str, Callable[[], Optional[AIProvider]]] = {
    "mock": _build_mock,
    "gemini": _build_gemini,
}


def get_ai_provider(provider_name: Optional[str] = None) -> AIProvider:
    """Provider named by ``provider_name`` or ``settings.AI_PROVIDER``.

    Unknown names and unusable Gemini settings yield a MockProvider.
    """
    name = (provider_name or settings.AI_PROVIDER).lower()
    builder = PROVIDER_BUILDERS.get(name)
    if builder is None:
        logger.warning("Unknown provider '%s', narrating with MockProvider", name)
        return MockProvider()
    return builder() or MockProvider()

