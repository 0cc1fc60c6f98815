"""Main review pipeline orchestration."""

from dataclasses import dataclass

import structlog

from src.core.config import Settings
from src.prompts.review import REVIEW_SYSTEM_PROMPT, build_review_prompt, join_prompts
from src.services.github.client import GitHubClient
from src.services.github.models import PullRequestContext, PullRequestEvent
from src.services.llm.base import InlineComment, LLMProvider
from src.services.llm.protocol import parse_findings
from src.services.review.diff_parser import DiffParser, FileDiff
from src.services.review.file_filter import filter_files
from src.services.review.synthesizer import build_review, create_comments, rank_and_cap

logger = structlog.get_logger()


@dataclass
class PipelineResult:
    """Result of a review pipeline execution."""

    pr_number: int
    action: str
    files_reviewed: int = 0
    candidate_comments: int = 0
    total_comments: int = 0
    review_posted: bool = False
    github_review_id: int | None = None
    skipped_reason: str | None = None


class ReviewPipeline:
    """Orchestrates the code review process for one trigger event."""

    def __init__(
        self,
        github_client: GitHubClient,
        llm: LLMProvider,
        settings: Settings,
        diff_parser: DiffParser | None = None,
    ) -> None:
        self.github = github_client
        self.llm = llm
        self.settings = settings
        self.diff_parser = diff_parser or DiffParser()

    async def execute(
        self,
        event: PullRequestEvent,
        post_review: bool = True,
    ) -> PipelineResult:
        """
        Execute the full review pipeline for a pull request event.

        Args:
            event: The trigger payload.
            post_review: Whether to post the review to GitHub.

        Returns:
            PipelineResult with review details.
        """
        result = PipelineResult(pr_number=event.number, action=event.action)

        if not event.is_supported:
            logger.info("Unsupported event action", action=event.action)
            result.skipped_reason = "unsupported_action"
            return result

        owner, repo = event.owner, event.repo
        logger.info(
            "Starting review pipeline",
            owner=owner,
            repo=repo,
            pr_number=event.number,
            action=event.action,
        )

        # 1. Fetch PR details
        pr = await self.github.get_pull_request(owner, repo, event.number)
        context = PullRequestContext.from_pull_request(owner, repo, pr)
        logger.info("Fetched PR", title=context.title)

        # 2. Fetch diff
        diff = await self._fetch_diff(event)
        if not diff or not diff.strip():
            logger.info("No diff found")
            result.skipped_reason = "empty_diff"
            return result

        # 3. Parse diff and drop deleted / excluded files
        file_diffs = filter_files(
            self.diff_parser.parse(diff),
            self.settings.exclude_patterns,
        )

        # 4. Review each file
        all_comments: list[InlineComment] = []
        for file_diff in file_diffs:
            comments = await self._review_file(file_diff, context)
            if comments is None:
                continue
            result.files_reviewed += 1
            result.candidate_comments += len(comments)
            all_comments.extend(comments)

        # 5. Rank across files and cap
        selected = rank_and_cap(all_comments, self.settings.max_review_comments)
        result.total_comments = len(selected)

        if not selected:
            logger.info("No review comments to submit", files_reviewed=result.files_reviewed)
            result.skipped_reason = "no_comments"
            return result

        # 6. Post review to GitHub
        if post_review:
            response = await self.github.create_review(
                owner, repo, event.number, build_review(selected)
            )
            result.review_posted = True
            result.github_review_id = response.get("id")
            logger.info("Posted review to GitHub", review_id=result.github_review_id)

        return result

    async def _fetch_diff(self, event: PullRequestEvent) -> str:
        if event.action == "opened":
            return await self.github.get_pull_request_diff(event.owner, event.repo, event.number)

        if not event.before or not event.after:
            logger.warning("Synchronize event without before/after commits")
            return ""
        return await self.github.compare_commits(
            event.owner, event.repo, event.before, event.after
        )

    async def _review_file(
        self,
        file_diff: FileDiff,
        context: PullRequestContext,
    ) -> list[InlineComment] | None:
        """One batched completion per file; None when the file has no hunks."""
        if not file_diff.hunks:
            logger.debug("Skipping file without hunks", path=file_diff.path)
            return None

        logger.info("Reviewing file", path=file_diff.path, hunks=len(file_diff.hunks))

        prompts = [build_review_prompt(file_diff, hunk, context) for hunk in file_diff.hunks]
        user_prompt = join_prompts(prompts)
        logger.debug("Batched prompt", path=file_diff.path, prompt=user_prompt)

        response_text = await self.llm.complete(REVIEW_SYSTEM_PROMPT, user_prompt)
        logger.debug("Model response", path=file_diff.path, response=response_text)

        findings = parse_findings(response_text)
        if not findings:
            logger.info("No findings for file", path=file_diff.path)
            return []

        return create_comments(
            file_diff,
            findings,
            prefix=self.settings.comment_prefix,
            restrict_to_diff=self.settings.restrict_comments_to_diff,
        )

    async def close(self) -> None:
        """Clean up resources."""
        await self.github.close()
        await self.llm.close()
