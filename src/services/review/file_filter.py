"""Selection of the files that get sent for review."""

from collections.abc import Sequence

import pathspec
import structlog

from src.services.review.diff_parser import FileDiff

logger = structlog.get_logger()


def build_exclude_spec(exclude_patterns: Sequence[str]) -> pathspec.PathSpec:
    """Compile exclude globs with gitignore semantics (``**`` spans directories)."""
    return pathspec.PathSpec.from_lines(
        "gitwildmatch", [pattern for pattern in exclude_patterns if pattern.strip()]
    )


def is_excluded(path: str, exclude_patterns: Sequence[str]) -> bool:
    return build_exclude_spec(exclude_patterns).match_file(path)


def filter_files(
    files: Sequence[FileDiff],
    exclude_patterns: Sequence[str] = (),
) -> list[FileDiff]:
    """Drop deleted files and files matching an exclude glob, keeping order."""
    spec = build_exclude_spec(exclude_patterns)
    kept: list[FileDiff] = []
    for file_diff in files:
        if file_diff.is_deleted:
            logger.debug("Skipping deleted file", path=file_diff.path)
            continue
        if spec.match_file(file_diff.new_path):
            logger.debug("Skipping excluded file", path=file_diff.new_path)
            continue
        kept.append(file_diff)
    return kept
