import httpx
import structlog

from src.core.exceptions import LLMError, LLMProviderUnavailableError
from src.services.llm.base import CompletionOptions, LLMProvider

logger = structlog.get_logger()


class OllamaProvider(LLMProvider):
    """Ollama provider for local LLM inference."""

    def __init__(
        self,
        options: CompletionOptions,
        base_url: str = "http://localhost:11434",
        timeout: float = 300.0,
    ) -> None:
        self._options = options
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def model(self) -> str:
        return self._options.model

    def is_available(self) -> bool:
        """Check if Ollama server is running."""
        try:
            with httpx.Client(timeout=5.0) as client:
                response = client.get(f"{self._base_url}/api/tags")
                is_ok: bool = response.status_code == 200
                return is_ok
        except httpx.HTTPError:
            return False

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Complete using a local Ollama model."""
        if not self.is_available():
            raise LLMProviderUnavailableError("Ollama server is not available")

        logger.debug("Sending completion request to Ollama", model=self._options.model)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    f"{self._base_url}/api/generate",
                    json={
                        "model": self._options.model,
                        "system": system_prompt,
                        "prompt": user_prompt,
                        "stream": False,
                        "options": {
                            "temperature": self._options.temperature,
                            "top_p": self._options.top_p,
                            "frequency_penalty": self._options.frequency_penalty,
                            "presence_penalty": self._options.presence_penalty,
                        },
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error("Ollama API error", error=str(e))
            raise LLMError(f"Ollama API error: {e}") from e

        response_text: str = data.get("response", "")
        return response_text
