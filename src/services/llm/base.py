from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CompletionOptions:
    """Sampling configuration sent with every completion request."""

    model: str
    temperature: float = 0.2
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0


@dataclass
class InlineComment:
    """A validated comment on a specific line of the new file."""

    path: str
    line: int
    body: str
    importance: int = 1


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier."""
        pass

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the model's free-text reply; empty string when it says nothing."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is configured and available."""
        pass

    async def close(self) -> None:
        """Release any transport held by the provider."""
        return None
