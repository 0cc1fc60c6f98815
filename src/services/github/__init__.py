from src.services.github.client import GitHubClient
from src.services.github.event import load_event
from src.services.github.models import (
    PullRequest,
    PullRequestContext,
    PullRequestEvent,
    Review,
    ReviewComment,
)

__all__ = [
    "GitHubClient",
    "load_event",
    "PullRequest",
    "PullRequestContext",
    "PullRequestEvent",
    "Review",
    "ReviewComment",
]
