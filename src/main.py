"""Entrypoint: review the pull request that triggered the workflow run."""

import asyncio
import sys

import structlog

from src.core.config import Settings, get_settings
from src.core.exceptions import ConfigurationError
from src.core.logging import configure_logging
from src.services.github.client import GitHubClient
from src.services.github.event import load_event
from src.services.llm.router import get_provider
from src.services.review.pipeline import PipelineResult, ReviewPipeline

logger = structlog.get_logger()


async def run(settings: Settings, post_review: bool = True) -> PipelineResult:
    """Load the trigger event and run the pipeline once."""
    if not settings.github_event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH is not set")

    event = load_event(settings.github_event_path)

    if not event.is_supported:
        logger.info(
            "Unsupported event",
            event_name=settings.github_event_name,
            action=event.action,
        )
        return PipelineResult(
            pr_number=event.number,
            action=event.action,
            skipped_reason="unsupported_action",
        )

    github = GitHubClient(
        token=settings.github_token.get_secret_value(),
        base_url=settings.github_api_url,
        timeout=settings.github_timeout_seconds,
    )
    pipeline = ReviewPipeline(
        github_client=github,
        llm=get_provider(settings),
        settings=settings,
    )

    try:
        return await pipeline.execute(event, post_review=post_review)
    finally:
        await pipeline.close()


def main() -> None:
    settings = get_settings()
    configure_logging(settings)

    try:
        result = asyncio.run(run(settings))
    except Exception as e:
        logger.exception("Review run failed", error=str(e))
        sys.exit(1)

    logger.info(
        "Review run finished",
        pr_number=result.pr_number,
        files_reviewed=result.files_reviewed,
        comments=result.total_comments,
        review_posted=result.review_posted,
        skipped_reason=result.skipped_reason,
    )


if __name__ == "__main__":
    main()
