from typing import Any

import httpx
import structlog

from src.core.exceptions import LLMError, LLMProviderUnavailableError, LLMRateLimitError
from src.services.llm.base import CompletionOptions, LLMProvider

logger = structlog.get_logger()


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider."""

    def __init__(
        self,
        api_key: str | None,
        options: CompletionOptions,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 300.0,
    ) -> None:
        self._api_key = api_key
        self._options = options
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._options.model

    def is_available(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            if not self.is_available():
                raise LLMProviderUnavailableError("OpenAI API key not configured")

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion and return the first choice's text."""
        client = self._get_client()

        payload: dict[str, Any] = {
            "model": self._options.model,
            "temperature": self._options.temperature,
            "top_p": self._options.top_p,
            "frequency_penalty": self._options.frequency_penalty,
            "presence_penalty": self._options.presence_penalty,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }

        logger.debug("Sending completion request to OpenAI", model=self._options.model)

        try:
            response = await client.post("/chat/completions", json=payload)
        except httpx.HTTPError as e:
            logger.error("OpenAI API error", error=str(e))
            raise LLMError(f"OpenAI API error: {e}") from e

        if response.status_code == 429:
            raise LLMRateLimitError("OpenAI rate limit exceeded", {"response": response.text})
        if response.status_code >= 400:
            logger.error("OpenAI API error", status_code=response.status_code)
            raise LLMError(
                f"OpenAI API error: {response.status_code}",
                details={"response": response.text},
            )

        data = response.json()
        usage = data.get("usage") or {}
        logger.debug(
            "OpenAI completion received",
            model=data.get("model", self._options.model),
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
        )

        choices = data.get("choices") or []
        if not choices:
            return ""
        content = (choices[0].get("message") or {}).get("content")
        return content or ""
