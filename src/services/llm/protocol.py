"""
Line-oriented response protocol between the reviewer and the model.

The model answers with zero or more single-line JSON records, each one
terminated by ``;;;``::

    {"lineNumber": 18, "reviewComment": "...", "importance": 2};;;

Decoding is all-or-nothing per response: one broken record means the stream
can no longer be trusted, so the whole batch counts as "no findings".
"""

import json
from collections.abc import Iterable
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.exceptions import LLMResponseParseError

logger = structlog.get_logger()

RECORD_SEPARATOR = ";;;"


class ReviewFinding(BaseModel):
    """A candidate comment as produced by the model, before validation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    line_number: str | int | float | None = Field(default=None, alias="lineNumber")
    review_comment: str = Field(alias="reviewComment")
    importance: int | float | None = None


def _decode_record(segment: str) -> ReviewFinding | None:
    """Decode one segment; None for the empty-array "nothing to flag" marker."""
    try:
        data: Any = json.loads(segment)
    except json.JSONDecodeError as e:
        raise LLMResponseParseError(f"Invalid JSON record: {e}", {"segment": segment}) from e

    if data == []:
        return None
    if not isinstance(data, dict):
        raise LLMResponseParseError("Record is not a JSON object", {"segment": segment})

    try:
        return ReviewFinding.model_validate(data)
    except ValidationError as e:
        raise LLMResponseParseError(f"Invalid record fields: {e}", {"segment": segment}) from e


def decode_findings(raw_text: str | None) -> list[ReviewFinding]:
    """
    Strictly decode a model response.

    Raises:
        LLMResponseParseError: If any record is not a valid finding.
    """
    if not raw_text or not raw_text.strip():
        return []

    segments = raw_text.strip().split(RECORD_SEPARATOR)

    # A trailing separator leaves blank remainders behind
    while segments and not segments[-1].strip():
        segments.pop()

    findings = []
    for segment in segments:
        finding = _decode_record(segment)
        if finding is not None:
            findings.append(finding)
    return findings


def parse_findings(raw_text: str | None) -> list[ReviewFinding]:
    """Decode a model response, treating any grammar violation as zero findings."""
    try:
        return decode_findings(raw_text)
    except LLMResponseParseError as e:
        logger.warning(
            "Discarding unparseable model response",
            error=e.message,
            segment=str(e.details.get("segment", ""))[:200],
        )
        return []


def serialize_findings(findings: Iterable[ReviewFinding]) -> str:
    """Render findings in the wire grammar the model is asked to produce."""
    return "".join(
        json.dumps(finding.model_dump(by_alias=True)) + RECORD_SEPARATOR + "\n"
        for finding in findings
    )
