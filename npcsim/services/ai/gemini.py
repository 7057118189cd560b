"""Gemini AI provider for interaction narration."""

from typing import Dict, Optional

import google.generativeai as genai

from npcsim.core.logging import get_logger
from npcsim.services.ai.base import AIProvider

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.8


class GeminiProvider(AIProvider):
    """Google Gemini backed provider.

    Models built for a given system instruction are cached, since the
    interaction narrator reuses the same instruction every tick.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self._api_key = api_key
        self._model_name = model
        self._temperature = temperature
        self._models: Dict[Optional[str], "genai.GenerativeModel"] = {}

        if self._api_key:
            genai.configure(api_key=self._api_key)
            self._models[None] = genai.GenerativeModel(self._model_name)
            logger.info("GeminiProvider initialized with model: %s", self._model_name)

    @property
    def name(self) -> str:
        return "gemini"

    def is_available(self) -> bool:
        return bool(self._api_key) and None in self._models

    def _model_for(self, system_prompt: Optional[str]) -> "genai.GenerativeModel":
        model = self._models.get(system_prompt)
        if model is None:
            model = genai.GenerativeModel(self._model_name, system_instruction=system_prompt)
            self._models[system_prompt] = model
        return model

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 200,
    ) -> str:
        """Generate text with Gemini.

        Raises:
            RuntimeError: provider unavailable or the API call failed.
        """
        if not self.is_available():
            raise RuntimeError("GeminiProvider is not available. Check API key.")

        config = genai.types.GenerationConfig(
            max_output_tokens=max_tokens,
            temperature=self._temperature,
        )
        try:
            response = self._model_for(system_prompt).generate_content(
                prompt, generation_config=config
            )
            return str(response.text).strip()
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise RuntimeError(f"Gemini API error: {e}") from e
