"""Loading of the workflow trigger payload."""

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from src.core.exceptions import EventPayloadError
from src.services.github.models import PullRequestEvent

logger = structlog.get_logger()


def load_event(path: str | Path) -> PullRequestEvent:
    """
    Read and validate the event payload written by the workflow runner.

    Raises:
        EventPayloadError: If the file is missing, not JSON, or lacks PR fields.
    """
    if not str(path):
        raise EventPayloadError("GITHUB_EVENT_PATH is not set")

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise EventPayloadError(f"Cannot read event payload: {e}", {"path": str(path)}) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Event payload is not valid JSON: {e}", {"path": str(path)}) from e

    try:
        event = PullRequestEvent.model_validate(data)
    except ValidationError as e:
        raise EventPayloadError(
            "Event payload is not a pull request event",
            {"path": str(path), "errors": e.errors()},
        ) from e

    logger.debug(
        "Loaded trigger event",
        action=event.action,
        owner=event.owner,
        repo=event.repo,
        pr_number=event.number,
    )
    return event
