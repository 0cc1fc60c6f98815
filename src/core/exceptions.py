from typing import Any


class ReviewBotError(Exception):
    """Base exception for the AI reviewer."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ReviewBotError):
    """Invalid or missing configuration."""

    pass


class EventPayloadError(ReviewBotError):
    """The trigger event payload is missing or unreadable."""

    pass


class GitHubError(ReviewBotError):
    """A GitHub REST call failed."""

    pass


class GitHubAuthenticationError(GitHubError):
    """The token was rejected or lacks permission."""

    pass


class GitHubRateLimitError(GitHubError):
    """GitHub API rate limit exceeded."""

    def __init__(self, reset_at: int, message: str = "Rate limit exceeded") -> None:
        self.reset_at = reset_at
        super().__init__(message, {"reset_at": reset_at})


class GitHubNotFoundError(GitHubError):
    """The repository, pull request or commit range does not exist."""

    pass


class DiffParseError(ReviewBotError):
    """The diff text is not a well-formed unified diff."""

    pass


class LLMError(ReviewBotError):
    """A completion request failed."""

    pass


class LLMProviderUnavailableError(LLMError):
    """The selected provider has no credentials or cannot be reached."""

    pass


class LLMRateLimitError(LLMError):
    """LLM provider rate limit exceeded."""

    pass


class LLMResponseParseError(LLMError):
    """A model response broke the record grammar."""

    pass
