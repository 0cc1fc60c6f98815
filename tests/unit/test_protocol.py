import pytest

from src.core.exceptions import LLMResponseParseError
from src.services.llm.protocol import (
    ReviewFinding,
    decode_findings,
    parse_findings,
    serialize_findings,
)


class TestParseFindings:
    """Tests for the ;;;-separated response protocol."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\n"])
    def test_empty_response_means_no_findings(self, raw: str | None) -> None:
        assert parse_findings(raw) == []

    def test_single_record_with_trailing_separator(self) -> None:
        findings = parse_findings('{"lineNumber":"5","reviewComment":"x","importance":3};;;')

        assert len(findings) == 1
        assert findings[0].line_number == "5"
        assert findings[0].review_comment == "x"
        assert findings[0].importance == 3

    def test_multiple_records_across_lines(self) -> None:
        raw = """
{"lineNumber": 18, "reviewComment": "Debugging: remove this log", "importance": 2};;;
{"lineNumber": 3, "reviewComment": "Security Risk: SQL built from input", "importance": 19};;;
"""
        findings = parse_findings(raw)

        assert [f.line_number for f in findings] == [18, 3]
        assert [f.importance for f in findings] == [2, 19]

    def test_record_without_trailing_separator(self) -> None:
        raw = '{"lineNumber": 1, "reviewComment": "a", "importance": 1};;;{"lineNumber": 2, "reviewComment": "b", "importance": 4}'

        findings = parse_findings(raw)

        assert [f.review_comment for f in findings] == ["a", "b"]

    def test_missing_importance_is_none(self) -> None:
        findings = parse_findings('{"lineNumber": 1, "reviewComment": "a"};;;')

        assert findings[0].importance is None

    def test_unknown_fields_are_ignored(self) -> None:
        findings = parse_findings(
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2, "category": "bug"};;;'
        )

        assert len(findings) == 1

    def test_empty_array_marker_means_nothing_to_flag(self) -> None:
        assert parse_findings("[]") == []
        assert parse_findings("[];;;") == []

    @pytest.mark.parametrize(
        "raw",
        [
            # truncated second record
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2};;;{"lineNumber": 2, "revi',
            # prose instead of records
            "The code looks good to me!",
            # good record followed by prose
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2};;;Overall fine.;;;',
            # record missing its comment
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2};;;{"lineNumber": 2};;;',
            # non-object record
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2};;;[1, 2];;;',
            # empty record in the middle
            '{"lineNumber": 1, "reviewComment": "a", "importance": 2};;;;;;{"lineNumber": 2, "reviewComment": "b"};;;',
            # non-numeric importance
            '{"lineNumber": 1, "reviewComment": "a", "importance": "high"};;;',
        ],
    )
    def test_any_malformed_record_discards_the_batch(self, raw: str) -> None:
        assert parse_findings(raw) == []

    def test_decode_findings_raises_on_malformed_record(self) -> None:
        with pytest.raises(LLMResponseParseError):
            decode_findings('{"lineNumber": 1, "reviewComment": "a"};;;{oops};;;')

    def test_reparsing_serialized_findings_is_idempotent(self) -> None:
        raw = (
            '{"lineNumber": "5", "reviewComment": "Bug: off by one", "importance": 12};;;\n'
            '{"lineNumber": 7, "reviewComment": "Style: \\"quoted\\"", "importance": 3};;;\n'
            '{"lineNumber": "x9", "reviewComment": "odd line", "importance": null};;;\n'
        )
        findings = parse_findings(raw)

        reparsed = parse_findings(serialize_findings(findings))

        assert len(findings) == 3
        assert reparsed == findings
        assert parse_findings(serialize_findings(reparsed)) == findings

    def test_serialize_uses_wire_field_names(self) -> None:
        text = serialize_findings(
            [ReviewFinding(line_number=4, review_comment="c", importance=2)]
        )

        assert text == '{"lineNumber": 4, "reviewComment": "c", "importance": 2};;;\n'
