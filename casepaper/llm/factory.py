from typing import ClassVar

from casepaper.config.settings import Settings
from casepaper.llm.client_base import ChatModel
from casepaper.llm.example_client_adapter import ExampleClientAdapter
from casepaper.llm.openai_client_adapter import OpenAIClientAdapter


class LlmClientFactory:
    """Creates the configured chat model shared by the text stages."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def create(cls, settings: Settings) -> ChatModel:
        """Create a configured chat model from application settings."""
        provider = settings.llm_provider.lower()
        if provider == "example":
            return ChatModel(client=ExampleClientAdapter(), model="example", temperature=0.0)
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ChatModel(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=cls._resolve_temperature(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.llm_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "llm_openai_compatible_base_url is required for "
                    "llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        raise ValueError(
            f"Unknown LLM provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @classmethod
    def _provider_setting(cls, provider: str, settings: Settings, suffix: str) -> object:
        return getattr(settings, f"llm_{provider}_{suffix}", None)

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key = cls._provider_setting(provider, settings, "api_key")
        return key if isinstance(key, str) else ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        name = cls._provider_setting(provider, settings, "model_name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"llm_{provider}_model_name must be set for llm_provider={provider}")
        return name

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        timeout = cls._provider_setting(provider, settings, "timeout_seconds")
        return timeout if isinstance(timeout, int) and timeout > 0 else 30

    @classmethod
    def _resolve_temperature(cls, provider: str, settings: Settings) -> float:
        if provider == "openai":
            return settings.llm_openai_temperature
        return 0.0
