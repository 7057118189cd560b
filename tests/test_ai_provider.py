"""Tests for AI provider module."""

from unittest.mock import MagicMock, patch

import pytest

from npcsim.services.ai import AIProvider, GeminiProvider, MockProvider, get_ai_provider


class TestMockProvider:
    """Tests for MockProvider class."""

    def test_mock_provider_name(self):
        assert MockProvider().name == "mock"

    def test_mock_provider_is_available(self):
        assert MockProvider().is_available() is True

    def test_mock_provider_generate(self):
        result = MockProvider().generate("test prompt")
        assert isinstance(result, str)
        assert "[Mock]" in result


class TestGeminiProvider:
    """Tests for GeminiProvider class."""

    @patch("npcsim.services.ai.gemini.genai")
    def test_gemini_provider_name(self, mock_genai: MagicMock):
        provider = GeminiProvider(api_key="test_key")
        assert provider.name == "gemini"

    @patch("npcsim.services.ai.gemini.genai")
    def test_not_available_without_key(self, mock_genai: MagicMock):
        provider = GeminiProvider(api_key="")
        assert provider.is_available() is False
        with pytest.raises(RuntimeError):
            provider.generate("hi")

    @patch("npcsim.services.ai.gemini.genai")
    def test_generate_strips_text(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "  hello \n"
        provider = GeminiProvider(api_key="test_key")
        assert provider.generate("hi", max_tokens=50) == "hello"

    @patch("npcsim.services.ai.gemini.genai")
    def test_system_prompt_model_cached(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "ok"
        provider = GeminiProvider(api_key="test_key")
        provider.generate("a", system_prompt="narrator")
        provider.generate("b", system_prompt="narrator")
        # 기본 모델 1회 + system prompt 모델 1회
        assert mock_genai.GenerativeModel.call_count == 2

    @patch("npcsim.services.ai.gemini.genai")
    def test_api_error_wrapped(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = ValueError("quota")
        provider = GeminiProvider(api_key="test_key")
        with pytest.raises(RuntimeError, match="quota"):
            provider.generate("hi")


class TestAIProviderFactory:
    """Tests for AI provider factory."""

    def test_factory_returns_mock_by_default(self):
        provider = get_ai_provider()
        assert isinstance(provider, AIProvider)
        assert isinstance(provider, MockProvider)

    @patch("npcsim.services.ai.factory.settings")
    @patch("npcsim.services.ai.gemini.genai")
    def test_factory_returns_gemini_with_config(
        self, mock_genai: MagicMock, mock_settings: MagicMock
    ):
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = "test_key"
        mock_settings.AI_MODEL = "gemini-2.0-flash"
        assert isinstance(get_ai_provider(), GeminiProvider)

    @patch("npcsim.services.ai.factory.settings")
    def test_factory_fallback_without_key(self, mock_settings: MagicMock):
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = None
        assert isinstance(get_ai_provider(), MockProvider)

    def test_factory_unknown_name_falls_back(self):
        assert isinstance(get_ai_provider("oracle"), MockProvider)

    @patch("npcsim.services.ai.factory.settings")
    @patch("npcsim.services.ai.gemini.genai")
    def test_factory_passes_model_settings(
        self, mock_genai: MagicMock, mock_settings: MagicMock
    ):
        mock_settings.AI_API_KEY = "test_key"
        mock_settings.AI_MODEL = None
        mock_settings.AI_TEMPERATURE = 0.3
        provider = get_ai_provider("Gemini")
        assert isinstance(provider, GeminiProvider)
        assert provider._model_name == "gemini-2.0-flash"
        assert provider._temperature == 0.3
