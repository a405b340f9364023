"""Diagnostic system for yieldparse errors.

Provides structured error diagnostics with codes, spans and hints, the
exception hierarchy for grammar faults, and formatting of failure trees.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    DepthLimitExceededError,
    GrammarError,
    UnanchoredPatternError,
    YieldParseError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GrammarError",
    "OutputFormat",
    "SourceSpan",
    "UnanchoredPatternError",
    "YieldParseError",
]
