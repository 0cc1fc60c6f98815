from typing import Any

import structlog

from src.core.exceptions import LLMError, LLMProviderUnavailableError
from src.services.llm.base import CompletionOptions, LLMProvider

logger = structlog.get_logger()


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    def __init__(self, api_key: str | None, options: CompletionOptions) -> None:
        self._api_key = api_key
        self._options = options
        self._client: Any = None

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def model(self) -> str:
        return self._options.model

    def _get_client(self) -> Any:
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            if not self.is_available():
                raise LLMProviderUnavailableError("Anthropic API key not configured")

            import anthropic

            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Complete using Claude."""
        client = self._get_client()

        logger.debug("Sending completion request to Anthropic", model=self._options.model)

        try:
            # Anthropic has no frequency/presence penalties
            message = await client.messages.create(
                model=self._options.model,
                max_tokens=4096,
                temperature=self._options.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except Exception as e:
            logger.error("Anthropic API error", error=str(e))
            raise LLMError(f"Anthropic API error: {e}") from e

        logger.debug(
            "Anthropic completion received",
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )

        return "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
