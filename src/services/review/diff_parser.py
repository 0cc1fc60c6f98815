import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

import structlog

from src.core.exceptions import DiffParseError

logger = structlog.get_logger()

DEV_NULL = "/dev/null"


class LineType(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass
class DiffLine:
    """A single line in a diff."""

    type: LineType
    content: str
    old_line_no: int | None = None
    new_line_no: int | None = None

    def __str__(self) -> str:
        prefix = {
            LineType.CONTEXT: " ",
            LineType.ADDITION: "+",
            LineType.DELETION: "-",
        }[self.type]
        return f"{prefix}{self.content}"

    @property
    def prompt_line_no(self) -> int | None:
        """Line number shown to the model: new-file side, old side for deletions."""
        return self.new_line_no if self.new_line_no is not None else self.old_line_no

    @property
    def is_commentable(self) -> bool:
        return self.type != LineType.DELETION and self.new_line_no is not None


@dataclass
class Hunk:
    """A hunk (section) of changes in a diff."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str  # The @@ line
    lines: list[DiffLine] = field(default_factory=list)

    def get_commentable_line_numbers(self) -> list[int]:
        """New file line numbers a review comment may anchor to."""
        return [
            line.new_line_no
            for line in self.lines
            if line.is_commentable and line.new_line_no is not None
        ]


@dataclass
class FileDiff:
    """Parsed diff for a single file."""

    old_path: str
    new_path: str
    status: Literal["added", "modified", "deleted", "renamed"] = "modified"
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def path(self) -> str:
        """Path a comment is addressed to (the new side unless deleted)."""
        return self.old_path if self.is_deleted else self.new_path

    @property
    def is_deleted(self) -> bool:
        return self.new_path == DEV_NULL

    def get_commentable_line_numbers(self) -> set[int]:
        line_numbers: set[int] = set()
        for hunk in self.hunks:
            line_numbers.update(hunk.get_commentable_line_numbers())
        return line_numbers


class DiffParser:
    """Parser for unified diff format."""

    # Regex patterns
    FILE_HEADER_PATTERN = re.compile(r"^diff --git a/(.*) b/(.*)$")
    OLD_FILE_PATTERN = re.compile(r"^--- (?:a/)?([^\t]*)(?:\t.*)?$")
    NEW_FILE_PATTERN = re.compile(r"^\+\+\+ (?:b/)?([^\t]*)(?:\t.*)?$")
    RENAME_FROM_PATTERN = re.compile(r"^rename from (.*)$")
    RENAME_TO_PATTERN = re.compile(r"^rename to (.*)$")
    HUNK_HEADER_PATTERN = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")

    def parse(self, diff_text: str) -> list[FileDiff]:
        """
        Parse a unified diff into structured FileDiff objects.

        Every addition and context line is tagged with its line number in the
        new version of the file; deletions keep only their old-file number.

        Raises:
            DiffParseError: If a hunk header is malformed or appears outside a file.
        """
        if not diff_text.strip():
            return []

        files: list[FileDiff] = []
        current_file: FileDiff | None = None
        current_hunk: Hunk | None = None
        old_line_no = 0
        new_line_no = 0
        old_remaining = 0
        new_remaining = 0

        raw_lines = diff_text.split("\n")
        if raw_lines[-1] == "":
            raw_lines.pop()

        for index, raw_line in enumerate(raw_lines, start=1):
            # Only "\n" ends a diff line; form feeds and other separators are content
            line = raw_line.removesuffix("\r")

            # Hunk body: consume lines while the header's budget lasts
            if current_hunk is not None and (old_remaining > 0 or new_remaining > 0):
                if line.startswith("\\"):
                    # "\ No newline at end of file"
                    continue
                if line.startswith("+"):
                    current_hunk.lines.append(
                        DiffLine(
                            type=LineType.ADDITION,
                            content=line[1:],
                            new_line_no=new_line_no,
                        )
                    )
                    new_line_no += 1
                    new_remaining -= 1
                    continue
                if line.startswith("-"):
                    current_hunk.lines.append(
                        DiffLine(
                            type=LineType.DELETION,
                            content=line[1:],
                            old_line_no=old_line_no,
                        )
                    )
                    old_line_no += 1
                    old_remaining -= 1
                    continue
                if line.startswith(" ") or line == "":
                    current_hunk.lines.append(
                        DiffLine(
                            type=LineType.CONTEXT,
                            content=line[1:],
                            old_line_no=old_line_no,
                            new_line_no=new_line_no,
                        )
                    )
                    old_line_no += 1
                    new_line_no += 1
                    old_remaining -= 1
                    new_remaining -= 1
                    continue
                # Truncated hunk; fall through and treat the line as a header
                logger.debug("Hunk ended early", line_no=index, header=current_hunk.header)
                old_remaining = new_remaining = 0

            if line.startswith("\\"):
                continue

            # New file diff starting
            file_match = self.FILE_HEADER_PATTERN.match(line)
            if file_match:
                if current_file:
                    files.append(current_file)

                current_file = FileDiff(
                    old_path=file_match.group(1),
                    new_path=file_match.group(2),
                )
                if current_file.old_path != current_file.new_path:
                    current_file.status = "renamed"
                current_hunk = None
                continue

            # Old file line (--- a/file); may also open a file in plain `diff -u` output
            old_match = self.OLD_FILE_PATTERN.match(line)
            if old_match:
                if current_file is None or current_file.hunks:
                    if current_file:
                        files.append(current_file)
                    current_file = FileDiff(old_path=old_match.group(1), new_path="")
                    current_hunk = None
                if old_match.group(1) == DEV_NULL:
                    current_file.status = "added"
                else:
                    current_file.old_path = old_match.group(1)
                continue

            # New file line (+++ b/file)
            new_match = self.NEW_FILE_PATTERN.match(line)
            if new_match and current_file:
                current_file.new_path = new_match.group(1)
                if new_match.group(1) == DEV_NULL:
                    current_file.status = "deleted"
                elif current_file.status != "added" and (
                    current_file.old_path != current_file.new_path
                ):
                    current_file.status = "renamed"
                continue

            rename_from = self.RENAME_FROM_PATTERN.match(line)
            if rename_from and current_file:
                current_file.old_path = rename_from.group(1)
                current_file.status = "renamed"
                continue

            rename_to = self.RENAME_TO_PATTERN.match(line)
            if rename_to and current_file:
                current_file.new_path = rename_to.group(1)
                current_file.status = "renamed"
                continue

            # Hunk header
            if line.startswith("@@"):
                hunk_match = self.HUNK_HEADER_PATTERN.match(line)
                if not hunk_match:
                    raise DiffParseError(
                        f"Malformed hunk header on line {index}",
                        details={"line": line},
                    )
                if current_file is None:
                    raise DiffParseError(
                        f"Hunk header without a file header on line {index}",
                        details={"line": line},
                    )

                old_start = int(hunk_match.group(1))
                old_count = int(hunk_match.group(2) or 1)
                new_start = int(hunk_match.group(3))
                new_count = int(hunk_match.group(4) or 1)

                current_hunk = Hunk(
                    old_start=old_start,
                    old_count=old_count,
                    new_start=new_start,
                    new_count=new_count,
                    header=line,
                )
                current_file.hunks.append(current_hunk)

                old_line_no = old_start
                new_line_no = new_start
                old_remaining = old_count
                new_remaining = new_count
                continue

            # Anything else (index, mode, similarity, Binary files ...) is metadata

        # Don't forget the last file
        if current_file:
            files.append(current_file)

        return files
