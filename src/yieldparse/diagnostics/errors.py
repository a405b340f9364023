"""yieldparse exception hierarchy with structured diagnostics.

Only grammar faults are raised. Input that does not match a grammar is
reported as a Failure value, never as an exception.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "DepthLimitExceededError",
    "GrammarError",
    "UnanchoredPatternError",
    "YieldParseError",
]


class YieldParseError(Exception):
    """Base exception for all yieldparse errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize YieldParseError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarError(YieldParseError):
    """Malformed parser definition.

    A programmer error in the grammar, not a data error. Aborts the
    current parse call.
    """


class UnanchoredPatternError(GrammarError, ValueError):
    """Pattern source does not start with '^' or '$'.

    Example:
        yield re.compile(r"abc")  ← matches anywhere, not at the cursor!
    """


class DepthLimitExceededError(GrammarError, RecursionError):
    """Sub-parser nesting exceeded the configured maximum depth.

    This error indicates either:
    - Left recursion (a procedure delegating to itself without consuming)
    - Input nested deeper than the engine was configured for
    """
