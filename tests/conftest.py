"""Pytest configuration and fixtures."""

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# =============================================================================
# Environment Setup (must happen before app imports)
# =============================================================================

os.environ.setdefault("GITHUB_TOKEN", "test-token-for-testing")
os.environ.setdefault("OPENAI_API_KEY", "test-key-for-testing")

from src.core.config import Settings  # noqa: E402
from src.services.github.models import PullRequest, PullRequestEvent  # noqa: E402

# =============================================================================
# Settings & Events
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        github_token="test-token",
        openai_api_key="test-openai-key",
        openai_api_model="gpt-4",
        exclude="",
    )


@pytest.fixture
def event_payload() -> dict[str, Any]:
    """Minimal `pull_request` event payload."""
    return {
        "action": "opened",
        "number": 42,
        "before": "aaa111",
        "after": "bbb222",
        "repository": {
            "name": "repo",
            "full_name": "owner/repo",
            "owner": {"login": "owner", "id": 1},
        },
        "pull_request": {"title": "ignored by the loader"},
    }


@pytest.fixture
def make_event(event_payload: dict[str, Any]) -> Callable[..., PullRequestEvent]:
    def _make(**overrides: Any) -> PullRequestEvent:
        return PullRequestEvent.model_validate({**event_payload, **overrides})

    return _make


@pytest.fixture
def event_file(tmp_path: Path, event_payload: dict[str, Any]) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(event_payload), encoding="utf-8")
    return path


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def sample_pr() -> PullRequest:
    return PullRequest(
        number=42,
        title="Add input helpers",
        body="Adds validation and formatting helpers.",
    )


@pytest.fixture
def mock_github_client(sample_pr: PullRequest) -> MagicMock:
    client = MagicMock()
    client.get_pull_request = AsyncMock(return_value=sample_pr)
    client.get_pull_request_diff = AsyncMock()
    client.compare_commits = AsyncMock()
    client.create_review = AsyncMock(return_value={"id": 123})
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_llm() -> MagicMock:
    llm = MagicMock()
    llm.name = "mock"
    llm.model = "mock-model"
    llm.complete = AsyncMock(return_value="")
    llm.close = AsyncMock()
    return llm
