from typing import ClassVar

from medreport.config.settings import Settings
from medreport.model.base import BaseModelClient
from medreport.model.example_client_adapter import ExampleClientAdapter
from medreport.model.ollama_client_adapter import OllamaClientAdapter
from medreport.model.openai_client_adapter import OpenAIClientAdapter


class ModelClientFactory:
    """Creates the configured model client adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("ollama", "openai", "openai_compatible", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseModelClient:
        """Create a configured model client from application settings."""
        provider = settings.model_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "ollama":
            return OllamaClientAdapter(
                host=settings.ollama_host,
                model=settings.ollama_model,
                timeout_seconds=settings.model_timeout_seconds,
                probe_timeout_seconds=settings.model_probe_timeout_seconds,
                temperature=settings.ollama_temperature,
                num_predict=settings.ollama_num_predict,
            )
        if provider in ("openai", "openai_compatible"):
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                model=settings.openai_model_name,
                timeout_seconds=settings.model_timeout_seconds,
                probe_timeout_seconds=settings.model_probe_timeout_seconds,
                base_url=cls._resolve_base_url(provider, settings),
                temperature=settings.openai_temperature,
                provider=provider,
            )
        raise ValueError(
            f"Unknown model provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        url = settings.openai_base_url.strip()
        if provider == "openai_compatible" and not url:
            raise ValueError(
                "openai_base_url is required for model_provider=openai_compatible"
            )
        return url or None
