from typing import Literal

import structlog

from src.core.config import Settings
from src.core.exceptions import LLMProviderUnavailableError
from src.services.llm.anthropic import AnthropicProvider
from src.services.llm.base import CompletionOptions, LLMProvider
from src.services.llm.ollama import OllamaProvider
from src.services.llm.openai import OpenAIProvider

logger = structlog.get_logger()

ProviderName = Literal["openai", "anthropic", "ollama"]


def completion_options(settings: Settings, model: str) -> CompletionOptions:
    return CompletionOptions(
        model=model,
        temperature=settings.llm_temperature,
        top_p=settings.llm_top_p,
        frequency_penalty=settings.llm_frequency_penalty,
        presence_penalty=settings.llm_presence_penalty,
    )


def get_provider(settings: Settings, name: ProviderName | None = None) -> LLMProvider:
    """
    Build the configured provider.

    Args:
        settings: Run settings.
        name: Override for ``settings.llm_provider``.

    Raises:
        LLMProviderUnavailableError: If the provider is unknown or lacks credentials.
    """
    provider_name = name or settings.llm_provider
    provider: LLMProvider

    if provider_name == "openai":
        provider = OpenAIProvider(
            api_key=(
                settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
            ),
            options=completion_options(settings, settings.openai_api_model),
            base_url=settings.openai_api_url,
            timeout=settings.llm_timeout_seconds,
        )
    elif provider_name == "anthropic":
        provider = AnthropicProvider(
            api_key=(
                settings.anthropic_api_key.get_secret_value()
                if settings.anthropic_api_key
                else None
            ),
            options=completion_options(settings, settings.anthropic_model),
        )
    elif provider_name == "ollama":
        provider = OllamaProvider(
            options=completion_options(settings, settings.ollama_model),
            base_url=settings.ollama_host,
            timeout=settings.llm_timeout_seconds,
        )
    else:
        raise LLMProviderUnavailableError(f"Unknown provider: {provider_name}")

    # Ollama reachability is checked on first use
    if provider_name != "ollama" and not provider.is_available():
        raise LLMProviderUnavailableError(f"No API key configured for {provider_name}")

    logger.info("Using LLM provider", provider=provider.name, model=provider.model)
    return provider
