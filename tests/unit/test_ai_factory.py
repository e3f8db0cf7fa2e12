from unittest.mock import MagicMock, patch

import pytest

from paperblog.ai.example_client_adapter import ExampleClientAdapter
from paperblog.ai.factory import AIClientFactory
from paperblog.ai.openai_client_adapter import OpenAIClientAdapter


def _make_settings(**overrides: object) -> MagicMock:
    settings = MagicMock()
    settings.ai_provider = "gemini"
    settings.ai_api_key = "key"
    settings.ai_model_name = ""
    settings.ai_base_url = ""
    settings.ai_vision_enabled = None
    settings.ai_timeout_seconds = 60
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


class TestAIClientFactory:
    def test_creates_example_client(self) -> None:
        client = AIClientFactory.create(_make_settings(ai_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_gemini_uses_openai_compatible_endpoint_with_vision(self) -> None:
        with patch("paperblog.ai.openai_client_adapter.openai.OpenAI") as mock_openai:
            client = AIClientFactory.create(_make_settings())
        assert isinstance(client, OpenAIClientAdapter)
        assert client.supports_vision is True
        kwargs = mock_openai.call_args.kwargs
        assert kwargs["base_url"] == AIClientFactory.OPENAI_COMPATIBLE_BASE_URLS["gemini"]
        assert kwargs["timeout"] == 60

    def test_openrouter_is_text_only_by_default(self) -> None:
        with patch("paperblog.ai.openai_client_adapter.openai.OpenAI"):
            client = AIClientFactory.create(_make_settings(ai_provider="openrouter"))
        assert client.supports_vision is False

    def test_vision_override_wins(self) -> None:
        with patch("paperblog.ai.openai_client_adapter.openai.OpenAI"):
            client = AIClientFactory.create(
                _make_settings(ai_provider="openrouter", ai_vision_enabled=True)
            )
        assert client.supports_vision is True

    def test_default_model_per_provider(self) -> None:
        assert AIClientFactory._resolve_model_name("gemini", _make_settings()) == "gemini-2.5-flash"
        assert (
            AIClientFactory._resolve_model_name("openai", _make_settings(ai_model_name="gpt-x"))
            == "gpt-x"
        )

    def test_openai_provider_uses_default_base_url(self) -> None:
        assert AIClientFactory._resolve_base_url("openai", _make_settings()) is None

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="ai_base_url is required"):
            AIClientFactory.create(_make_settings(ai_provider="openai_compatible"))

    def test_openai_compatible_requires_model(self) -> None:
        settings = _make_settings(ai_provider="openai_compatible", ai_base_url="http://localhost:1/v1")
        with pytest.raises(ValueError, match="ai_model_name is required"):
            AIClientFactory.create(settings)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown AI provider"):
            AIClientFactory.create(_make_settings(ai_provider="nope"))
