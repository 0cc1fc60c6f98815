"""Turn model findings into line-addressed review comments."""

from collections.abc import Sequence

import structlog

from src.services.github.models import Review, ReviewComment
from src.services.llm.base import InlineComment
from src.services.llm.protocol import ReviewFinding
from src.services.review.diff_parser import FileDiff

logger = structlog.get_logger()

DEFAULT_COMMENT_PREFIX = "[ai-review] "
MAX_REVIEW_COMMENTS = 15


def coerce_line_number(raw: object) -> int | None:
    """Return a positive integer line number, or None if `raw` is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
            if not number.is_integer():
                return None
            value = int(number)
    else:
        return None
    return value if value > 0 else None


def coerce_importance(raw: float | None) -> int:
    """Nearest integer importance; missing or zero means 1."""
    return round(raw or 1) or 1


def create_comments(
    file_diff: FileDiff,
    findings: Sequence[ReviewFinding],
    prefix: str = DEFAULT_COMMENT_PREFIX,
    restrict_to_diff: bool = True,
) -> list[InlineComment]:
    """
    Map findings for one file onto comments.

    Findings whose line number is not a positive integer are dropped. With
    ``restrict_to_diff`` set, so are lines outside the file's hunks, since
    GitHub rejects the whole review for a single such comment.
    """
    commentable = file_diff.get_commentable_line_numbers() if restrict_to_diff else None
    comments: list[InlineComment] = []

    for finding in findings:
        line = coerce_line_number(finding.line_number)
        if line is None:
            logger.warning(
                "Dropping finding with invalid line number",
                path=file_diff.path,
                line_number=finding.line_number,
            )
            continue

        if commentable is not None and line not in commentable:
            logger.warning(
                "Dropping finding outside the diff",
                path=file_diff.path,
                line=line,
            )
            continue

        comments.append(
            InlineComment(
                path=file_diff.path,
                line=line,
                body=prefix + finding.review_comment,
                importance=coerce_importance(finding.importance),
            )
        )

    return comments


def rank_and_cap(
    comments: Sequence[InlineComment],
    limit: int = MAX_REVIEW_COMMENTS,
) -> list[InlineComment]:
    """Most important first (ties keep their order), truncated to `limit`."""
    ranked = sorted(comments, key=lambda c: c.importance, reverse=True)
    return ranked[: max(limit, 0)]


def build_review(comments: Sequence[InlineComment]) -> Review:
    """Drop importance and wrap the comments in a COMMENT review."""
    return Review(
        event="COMMENT",
        comments=[ReviewComment(path=c.path, line=c.line, body=c.body) for c in comments],
    )
