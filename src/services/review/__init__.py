"""Review service package."""

from src.services.review.diff_parser import DiffLine, DiffParser, FileDiff, Hunk
from src.services.review.file_filter import filter_files
from src.services.review.synthesizer import build_review, create_comments, rank_and_cap

__all__ = [
    "DiffParser",
    "DiffLine",
    "FileDiff",
    "Hunk",
    "filter_files",
    "create_comments",
    "rank_and_cap",
    "build_review",
]
