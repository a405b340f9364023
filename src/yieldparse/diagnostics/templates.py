"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def pattern_not_anchored(source: str) -> Diagnostic:
        """Pattern source lacks a leading anchor.

        Args:
            source: The offending regular expression source

        Returns:
            Diagnostic for PATTERN_NOT_ANCHORED
        """
        msg = f"Pattern {source!r} must start with '^' or '$'"
        return Diagnostic(
            code=DiagnosticCode.PATTERN_NOT_ANCHORED,
            message=msg,
            hint="Prefix the pattern with '^' to match at the current position",
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Sub-parser nesting limit reached.

        Args:
            max_depth: The configured maximum depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum sub-parser nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint=(
                "Check the grammar for left recursion, or raise max_depth "
                "on ParseEngine and sys.setrecursionlimit()"
            ),
        )

    @staticmethod
    def expected_item(
        expected: str, span: SourceSpan, found: str, depth: int = 0
    ) -> Diagnostic:
        """No alternative of a suspension point matched.

        Args:
            expected: Rendered form of the yielded item
            span: Location of the failing step
            found: Excerpt of the input at that location
            depth: Nesting depth of the failing procedure

        Returns:
            Diagnostic for EXPECTED_ITEM
        """
        msg = f"Expected {expected}, found {found}"
        return Diagnostic(
            code=DiagnosticCode.EXPECTED_ITEM,
            message=msg,
            span=span,
            expected=expected,
            depth=depth,
        )

    @staticmethod
    def procedure_gave_up(reason: BaseException, span: SourceSpan, depth: int = 0) -> Diagnostic:
        """Procedure returned an exception instance.

        Args:
            reason: The exception returned by the procedure
            span: Location at which the procedure gave up
            depth: Nesting depth of the failing procedure

        Returns:
            Diagnostic for PROCEDURE_GAVE_UP
        """
        msg = f"{type(reason).__name__}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.PROCEDURE_GAVE_UP,
            message=msg,
            span=span,
            depth=depth,
        )
