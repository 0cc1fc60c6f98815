"""Prompts for code review."""

from collections.abc import Iterable

from src.services.github.models import PullRequestContext
from src.services.llm.protocol import RECORD_SEPARATOR
from src.services.review.diff_parser import FileDiff, Hunk

PROMPT_SEPARATOR = ";\n\n"

REVIEW_SYSTEM_PROMPT = f"""You are an expert software engineer reviewing pull requests.
Look for semantic errors, bugs, performance problems, security risks and unclear control flow.
Do not report problems a type checker, compiler or build step would already catch.

## Output Format
For every issue, write exactly one line holding a single JSON object, followed by {RECORD_SEPARATOR}:

{{"lineNumber": <line_number>, "reviewComment": "<review comment>", "importance": <importance>}}{RECORD_SEPARATOR}

- lineNumber is the number printed in front of the diff line you comment on.
- importance is an integer from 1 to 20: 20 is a major issue (e.g. a security risk),
  1 is an optional change (e.g. a rename that may deserve a second look).
- Write reviewComment in GitHub Markdown and start it with the category that fits best,
  e.g. "Security Risk: <rest of comment>".
- If there is nothing worth improving, respond with nothing at all.

## Important
- Comment only on the code; use the pull request title and description for context only.
- Do not comment on library or dependency versions; your knowledge of them may be outdated.
- Do not assume something was forgotten.
- Never give compliments or positive comments.
- Never ask to make sure a change does not break something.
- Never suggest adding code comments.

## Example
Review the following code diff in the file "src/app.js" and take the pull request title and description into account when writing the response.

Pull request title: feat/improve performance
Pull request description:

---
This PR improves the performance of the application by using a more efficient algorithm.
---

Git diff to review:

```diff
@@ -17,13 +17,16 @@
17 -invokeInefficientAlgorithm()
17 +invokeEfficientAlgorithm()
18 +console.log('test log')
```

Expected response:
{{"lineNumber": 18, "reviewComment": "Debugging: remove this console.log, it looks like a leftover debug statement", "importance": 2}}{RECORD_SEPARATOR}
"""


def format_hunk(hunk: Hunk) -> str:
    """Render a hunk with each line prefixed by its line number."""
    lines = [hunk.header]
    for diff_line in hunk.lines:
        lines.append(f"{diff_line.prompt_line_no} {diff_line}")
    return "\n".join(lines)


def build_review_prompt(
    file_diff: FileDiff,
    hunk: Hunk,
    pr: PullRequestContext,
) -> str:
    """Build the user prompt for one hunk of one file."""
    parts = [
        f'Review the following code diff in the file "{file_diff.path}" and take the '
        "pull request title and description into account when writing the response.",
        "",
        f"Pull request title: {pr.title}",
        "Pull request description:",
        "",
        "---",
        pr.description,
        "---",
        "",
        "Git diff to review:",
        "",
        "```diff",
        format_hunk(hunk),
        "```",
        "",
    ]
    return "\n".join(parts)


def join_prompts(prompts: Iterable[str]) -> str:
    """Batch several hunk prompts into a single request body."""
    return PROMPT_SEPARATOR.join(prompts)
