"""Tests for diagnostics: codes, spans, templates, errors and formatting.

Covers single-diagnostic output in every OutputFormat as well as rendering
of whole failure trees returned by the engine.
"""

from __future__ import annotations

import json
import re

import pytest

from yieldparse import Failure, parse
from yieldparse.diagnostics import (
    DepthLimitExceededError,
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    GrammarError,
    OutputFormat,
    SourceSpan,
    UnanchoredPatternError,
    YieldParseError,
)


def _number():
    record = yield re.compile(r"^\d+")
    return int(record.text)


def _value():
    return (yield [_number, "x"])


def _failure(source: str, procedure: object) -> Failure:
    result = parse(source, procedure)
    assert isinstance(result, Failure)
    return result


# ============================================================================
# CODES & SPANS
# ============================================================================


class TestSourceSpan:
    """SourceSpan validates its invariants."""

    def test_valid(self) -> None:
        span = SourceSpan(start=3, end=5, line=1, column=4)
        assert (span.start, span.end) == (3, 5)

    @pytest.mark.parametrize(
        ("kwargs", "fragment"),
        [
            ({"start": -1, "end": 0, "line": 1, "column": 1}, "start"),
            ({"start": 5, "end": 2, "line": 1, "column": 1}, "end"),
            ({"start": 0, "end": 0, "line": 0, "column": 1}, "line"),
            ({"start": 0, "end": 0, "line": 1, "column": 0}, "column"),
        ],
    )
    def test_invalid(self, kwargs: dict[str, int], fragment: str) -> None:
        with pytest.raises(ValueError, match=fragment):
            SourceSpan(**kwargs)


class TestDiagnosticCodes:
    """Code ranges separate grammar faults from parse failures."""

    def test_grammar_faults(self) -> None:
        assert 1000 <= DiagnosticCode.PATTERN_NOT_ANCHORED.value < 2000
        assert 1000 <= DiagnosticCode.MAX_DEPTH_EXCEEDED.value < 2000

    def test_parse_failures(self) -> None:
        assert 3000 <= DiagnosticCode.EXPECTED_ITEM.value < 4000
        assert 3000 <= DiagnosticCode.PROCEDURE_GAVE_UP.value < 4000

    def test_unique(self) -> None:
        values = [code.value for code in DiagnosticCode]
        assert len(values) == len(set(values))


# ============================================================================
# TEMPLATES & ERRORS
# ============================================================================


class TestErrorTemplate:
    """Templates produce consistent messages."""

    def test_pattern_not_anchored(self) -> None:
        diagnostic = ErrorTemplate.pattern_not_anchored("abc")

        assert diagnostic.code is DiagnosticCode.PATTERN_NOT_ANCHORED
        assert diagnostic.message == "Pattern 'abc' must start with '^' or '$'"
        assert diagnostic.span is None
        assert diagnostic.hint is not None

    def test_depth_exceeded(self) -> None:
        diagnostic = ErrorTemplate.depth_exceeded(7)
        assert diagnostic.message == "Maximum sub-parser nesting depth (7) exceeded"

    def test_expected_item(self) -> None:
        span = SourceSpan(start=0, end=0, line=1, column=1)
        diagnostic = ErrorTemplate.expected_item("'bar'", span, "'foo'", depth=2)

        assert diagnostic.message == "Expected 'bar', found 'foo'"
        assert diagnostic.expected == "'bar'"
        assert diagnostic.depth == 2

    def test_procedure_gave_up(self) -> None:
        span = SourceSpan(start=0, end=0, line=1, column=1)
        diagnostic = ErrorTemplate.procedure_gave_up(KeyError("k"), span)

        assert diagnostic.code is DiagnosticCode.PROCEDURE_GAVE_UP
        assert diagnostic.message.startswith("KeyError")


class TestErrors:
    """Exception hierarchy."""

    def test_plain_message(self) -> None:
        error = YieldParseError("boom")

        assert str(error) == "boom"
        assert error.diagnostic is None

    def test_diagnostic_message(self) -> None:
        diagnostic = ErrorTemplate.pattern_not_anchored("abc")
        error = UnanchoredPatternError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()

    def test_hierarchy(self) -> None:
        assert issubclass(UnanchoredPatternError, GrammarError)
        assert issubclass(UnanchoredPatternError, ValueError)
        assert issubclass(DepthLimitExceededError, GrammarError)
        assert issubclass(DepthLimitExceededError, RecursionError)
        assert issubclass(GrammarError, YieldParseError)


# ============================================================================
# SINGLE DIAGNOSTIC FORMATTING
# ============================================================================


class TestDiagnosticFormatter:
    """Formatting of one diagnostic."""

    def test_rust_without_span(self) -> None:
        output = DiagnosticFormatter().format(ErrorTemplate.pattern_not_anchored("abc"))

        assert output.split("\n") == [
            "error[PATTERN_NOT_ANCHORED]: Pattern 'abc' must start with '^' or '$'",
            "  = help: Prefix the pattern with '^' to match at the current position",
        ]

    def test_rust_with_span(self) -> None:
        span = SourceSpan(start=6, end=6, line=2, column=3)
        diagnostic = ErrorTemplate.expected_item("'x'", span, "'y'")

        output = DiagnosticFormatter().format(diagnostic)

        assert "  --> line 2, column 3" in output

    def test_simple(self) -> None:
        span = SourceSpan(start=0, end=0, line=1, column=1)
        diagnostic = ErrorTemplate.expected_item("'bar'", span, "'foo'")
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(diagnostic) == "EXPECTED_ITEM at 1:1: Expected 'bar', found 'foo'"

    def test_simple_without_span(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format(ErrorTemplate.depth_exceeded(3))

        assert output == "MAX_DEPTH_EXCEEDED: Maximum sub-parser nesting depth (3) exceeded"

    def test_json(self) -> None:
        span = SourceSpan(start=0, end=0, line=1, column=1)
        diagnostic = ErrorTemplate.expected_item("'bar'", span, "'foo'")
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(diagnostic))

        assert data["code"] == "EXPECTED_ITEM"
        assert data["code_value"] == 3001
        assert data["expected"] == "'bar'"
        assert data["line"] == 1

    def test_color(self) -> None:
        output = DiagnosticFormatter(color=True).format(ErrorTemplate.depth_exceeded(1))
        assert output.startswith("\033[1;31merror\033[0m")

    @pytest.mark.parametrize("color", [False, True])
    def test_every_template_renders_as_error(self, color: bool) -> None:
        span = SourceSpan(start=0, end=0, line=1, column=1)
        diagnostics = [
            ErrorTemplate.pattern_not_anchored("abc"),
            ErrorTemplate.depth_exceeded(3),
            ErrorTemplate.expected_item("'bar'", span, "'foo'"),
            ErrorTemplate.procedure_gave_up(ValueError("bad"), span),
        ]
        label = "\033[1;31merror\033[0m[" if color else "error["
        formatter = DiagnosticFormatter(color=color)

        for diagnostic in diagnostics:
            assert formatter.format(diagnostic).startswith(label)

    def test_diagnostics_have_no_severity(self) -> None:
        """Every diagnostic is an error; there is no severity to set."""
        with pytest.raises(TypeError):
            Diagnostic(code=DiagnosticCode.EXPECTED_ITEM, message="m", severity="warning")  # type: ignore[call-arg]

        data = json.loads(
            DiagnosticFormatter(output_format=OutputFormat.JSON).format(
                ErrorTemplate.depth_exceeded(3)
            )
        )
        assert "severity" not in data

    def test_sanitize_truncates(self) -> None:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )
        output = formatter.format(ErrorTemplate.depth_exceeded(3))

        assert output == "MAX_DEPTH_EXCEEDED: Maximum su..."

    def test_format_all(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        diagnostics = [ErrorTemplate.depth_exceeded(1), ErrorTemplate.depth_exceeded(2)]

        assert formatter.format_all(diagnostics).count("\n\n") == 1

    def test_diagnostic_str_is_message(self) -> None:
        diagnostic = ErrorTemplate.depth_exceeded(1)
        assert str(diagnostic) == diagnostic.message


# ============================================================================
# FAILURE TREE FORMATTING
# ============================================================================


class TestFormatFailure:
    """Rendering of failures returned by the engine."""

    def test_rust_includes_source_context(self) -> None:
        output = _failure("foo", ["bar"]).format()

        assert output.split("\n") == [
            "error[EXPECTED_ITEM]: Expected 'bar', found 'foo'",
            "  --> line 1, column 1",
            "",
            "   1 | foo",
            "     | ^",
        ]

    def test_nested_errors_are_indented(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        lines = formatter.format_failure(_failure("?", _value)).split("\n")

        assert len(lines) == 2
        assert lines[0].startswith("EXPECTED_ITEM at 1:1: Expected one of <_number>, 'x'")
        assert lines[1] == "    EXPECTED_ITEM at 1:1: Expected /^\\d+/, found '?'"

    def test_json_is_one_array(self) -> None:
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
        data = json.loads(formatter.format_failure(_failure("?", _value)))

        assert [entry["depth"] for entry in data] == [0, 1]
        assert data[1]["expected"] == "/^\\d+/"

    def test_position_on_later_line(self) -> None:
        def two_lines():
            yield "a\n"
            yield "b"

        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_failure(_failure("a\nc", two_lines))

        assert output == "EXPECTED_ITEM at 2:1: Expected 'b', found 'c'"

    def test_gave_up(self) -> None:
        def refuse():
            yield "9"
            return ValueError("too big")

        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        output = formatter.format_failure(_failure("9", refuse))

        assert output == "PROCEDURE_GAVE_UP at 1:2: ValueError: too big"

    def test_context_lines(self) -> None:
        source = "l1\nl2\nl3\nl4\nl5\nX"

        def lines():
            for _ in range(5):
                yield re.compile(r"^l\d\n")
            yield "Y"

        output = DiagnosticFormatter(context_lines=1).format_failure(_failure(source, lines))

        assert "   5 | l5" in output
        assert "   4 | l4" not in output
        assert "   6 | X" in output
