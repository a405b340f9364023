"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options, for
single diagnostics and for whole failure trees returned by the engine.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from yieldparse.cursor import Failure

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects into human-readable
    or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing
        context_lines: Source lines shown around the failure (RUST only)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.pattern_not_anchored("abc")
        >>> print(formatter.format(diagnostic))
        error[PATTERN_NOT_ANCHORED]: Pattern 'abc' must start with '^' or '$'
          = help: Prefix the pattern with '^' to match at the current position

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        PATTERN_NOT_ANCHORED: Pattern 'abc' must start with '^' or '$'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100
    context_lines: int = 2

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics.

        Args:
            diagnostics: Iterable of diagnostics to format

        Returns:
            Formatted string with all diagnostics separated by newlines
        """
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_failure(self, failure: "Failure") -> str:
        """Format a failed parse result with its whole nested error tree.

        Nested errors are indented by their depth in RUST and SIMPLE output.
        JSON output is a single array with one object per error, each
        carrying its ``depth``. RUST output ends with the source excerpt
        around the top-level failure.

        Args:
            failure: Failure returned by the engine

        Returns:
            Formatted failure report
        """
        diagnostics = failure.failed_on.to_diagnostics()

        if self.output_format is OutputFormat.JSON:
            return json.dumps(
                [self._json_data(d) for d in diagnostics], ensure_ascii=False
            )

        parts: list[str] = []
        for diagnostic in diagnostics:
            indent = "    " * diagnostic.depth
            text = self.format(diagnostic)
            parts.append("\n".join(indent + line for line in text.split("\n")))

        if self.output_format is OutputFormat.RUST:
            context = failure.failed_on.cursor
            if context is not None:
                parts.append("")
                parts.append(context.format_context(self.context_lines))

        return "\n".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[EXPECTED_ITEM]: Expected 'bar', found 'foo'
              --> line 1, column 1
        """
        label = "\033[1;31merror\033[0m" if self.color else "error"  # Bold red

        message = self._maybe_sanitize(diagnostic.message)
        parts = [f"{label}[{diagnostic.code.name}]: {message}"]

        if diagnostic.span:
            parts.append(f"  --> line {diagnostic.span.line}, column {diagnostic.span.column}")

        if diagnostic.hint:
            hint = self._maybe_sanitize(diagnostic.hint)
            parts.append(f"  = help: {hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            EXPECTED_ITEM: Expected 'bar', found 'foo'
        """
        message = self._maybe_sanitize(diagnostic.message)
        if diagnostic.span:
            return (
                f"{diagnostic.code.name} at {diagnostic.span.line}:"
                f"{diagnostic.span.column}: {message}"
            )
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "EXPECTED_ITEM", "code_value": 3001, "message": "...", "depth": 0}
        """
        return json.dumps(self._json_data(diagnostic), ensure_ascii=False)

    def _json_data(self, diagnostic: Diagnostic) -> dict[str, str | int | None]:
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "depth": diagnostic.depth,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.expected:
            data["expected"] = self._maybe_sanitize(diagnostic.expected)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return data

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
