from typing import ClassVar

from paperblog.ai.client_base import BaseAIClient
from paperblog.ai.example_client_adapter import ExampleClientAdapter
from paperblog.ai.openai_client_adapter import OpenAIClientAdapter
from paperblog.config.settings import Settings


class AIClientFactory:
    """Creates the configured generative AI client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
    }

    DEFAULT_MODELS: ClassVar[dict[str, str]] = {
        "gemini": "gemini-2.5-flash",
        "openrouter": "meta-llama/llama-3.2-3b-instruct:free",
        "openai": "gpt-4o-mini",
    }

    VISION_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"gemini", "openai"})

    @classmethod
    def create(cls, settings: Settings) -> BaseAIClient:
        """Create a configured client from application settings."""
        provider = settings.ai_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        return OpenAIClientAdapter(
            api_key=settings.ai_api_key,
            model=cls._resolve_model_name(provider, settings),
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=base_url,
            vision=cls._resolve_vision(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.ai_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "ai_base_url is required for ai_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        model = settings.ai_model_name.strip() or cls.DEFAULT_MODELS.get(provider, "")
        if not model:
            raise ValueError(f"ai_model_name is required for ai_provider={provider}")
        return model

    @classmethod
    def _resolve_vision(cls, provider: str, settings: Settings) -> bool:
        if settings.ai_vision_enabled is not None:
            return settings.ai_vision_enabled
        return provider in cls.VISION_PROVIDERS
