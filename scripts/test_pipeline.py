"""Run the review pipeline against a live PR without posting anything."""

import asyncio
import sys

from src.core.config import get_settings
from src.core.logging import configure_logging
from src.services.github.client import GitHubClient
from src.services.github.models import PullRequestEvent
from src.services.llm.router import get_provider
from src.services.review.pipeline import ReviewPipeline


async def main() -> None:
    if len(sys.argv) != 4:
        print("Usage: python scripts/test_pipeline.py <owner> <repo> <pr_number>")
        print("Example: python scripts/test_pipeline.py octocat hello-world 123")
        sys.exit(1)

    owner = sys.argv[1]
    repo = sys.argv[2]
    pr_number = int(sys.argv[3])

    settings = get_settings()
    configure_logging(settings)

    print(f"🔍 Reviewing PR #{pr_number} in {owner}/{repo}")
    print("-" * 50)

    event = PullRequestEvent.model_validate(
        {
            "action": "opened",
            "number": pr_number,
            "repository": {"name": repo, "owner": {"login": owner}},
        }
    )
    pipeline = ReviewPipeline(
        github_client=GitHubClient(
            token=settings.github_token.get_secret_value(),
            base_url=settings.github_api_url,
        ),
        llm=get_provider(settings),
        settings=settings,
    )

    try:
        result = await pipeline.execute(event, post_review=False)

        print("\n✅ Review Complete!")
        print(f"   PR: #{result.pr_number}")
        print(f"   Files Reviewed: {result.files_reviewed}")
        print(f"   Candidate Comments: {result.candidate_comments}")
        print(f"   Comments Kept: {result.total_comments}")
        print(f"   Skipped: {result.skipped_reason or '-'}")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        raise
    finally:
        await pipeline.close()


if __name__ == "__main__":
    asyncio.run(main())
