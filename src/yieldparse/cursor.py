"""Immutable cursor and result types for the parse engine.

The engine never slices the caller's input in place. It carries a frozen
:class:`Cursor` (source text plus offset) and every successful match
produces a NEW cursor, so a failed alternative can never change what the
next alternative sees.

Line Ending Support:
    Line:column positions use \\n as the line delimiter. CRLF input works
    because the \\n is still present; CR-only input reports line 1.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from yieldparse.diagnostics import Diagnostic, DiagnosticFormatter, ErrorTemplate, SourceSpan
from yieldparse.items import describe

__all__ = [
    "Cursor",
    "Failure",
    "LineOffsetCache",
    "MatchRecord",
    "ParseError",
    "ParseResult",
    "Success",
]

# Characters of input quoted in "found ..." messages.
_EXCERPT_LENGTH: int = 20


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable position in the input.

    Key Design Decisions:
        1. Frozen dataclass - a failed alternative cannot move the cursor
        2. Slots - one cursor per successful step
        3. Simple position - an integer offset into the untouched source
        4. ``remaining`` is computed on demand

    Example:
        >>> cursor = Cursor("hello world")
        >>> cursor.startswith("hello")
        True
        >>> cursor.advance(5).remaining
        ' world'
        >>> cursor.remaining  # Original unchanged
        'hello world'
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        """Check if all input has been consumed."""
        return self.pos >= len(self.source)

    @property
    def remaining(self) -> str:
        """Unconsumed input from the current position."""
        return self.source[self.pos :]

    def advance(self, count: int) -> "Cursor":
        """Return new cursor advanced by count positions.

        Args:
            count: Number of characters to consume

        Returns:
            New Cursor instance (original unchanged), clamped to the end
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def startswith(self, text: str) -> bool:
        """Exact prefix test at the current position.

        Example:
            >>> Cursor("dogcat").startswith("cat")
            False
            >>> Cursor("dogcat", 3).startswith("cat")
            True
        """
        return self.source.startswith(text, self.pos)

    def search(self, regex: re.Pattern[str]) -> re.Match[str] | None:
        """Leftmost match of ``regex`` in the remaining input.

        The remaining text is sliced first so that ``^`` anchors at the
        cursor and ``$`` at the end of the input.
        """
        return regex.search(self.remaining)

    def excerpt(self, length: int = _EXCERPT_LENGTH) -> str:
        """Quoted excerpt of the remaining input for error messages.

        Example:
            >>> Cursor("foo").excerpt()
            "'foo'"
            >>> Cursor("foo", 3).excerpt()
            'end of input'
        """
        if self.is_eof:
            return "end of input"
        text = self.source[self.pos : self.pos + length]
        if self.pos + length < len(self.source):
            return repr(text) + "..."
        return repr(text)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> source = "line1\\nline2\\nline3"
            >>> Cursor(source, 0).compute_line_col()
            (1, 1)
            >>> Cursor(source, 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def span(self) -> SourceSpan:
        """Zero-width source span at the current position."""
        line, col = self.compute_line_col()
        return SourceSpan(start=self.pos, end=self.pos, line=line, column=col)

    def format_context(self, context_lines: int = 2) -> str:
        """Render the source around the cursor with a caret pointer.

        Example:
            >>> print(Cursor("a = 1\\nb = ?\\nc = 3", 10).format_context())
               1 | a = 1
               2 | b = ?
                 |     ^
               3 | c = 3
        """
        line, col = self.compute_line_col()
        lines = self.source.split("\n")

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        result_lines: list[str] = []
        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when reporting many
    positions of the same input (for example every node of an error tree).

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(8)
        (2, 3)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Character position in source (0-indexed, clamped)

        Returns:
            (line, column) tuple (1-indexed)
        """
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """Resume value of a successful Pattern match.

    Attributes:
        text: Full matched text
        groups: Captured groups (None for groups that did not participate)
        start: Offset of the match within the remaining input
        named: Named groups

    Example:
        >>> record = MatchRecord.from_match(re.search(r"^(\\d+)-(?P<b>\\d+)", "12-34"))
        >>> record[0], record[1], record["b"], record.start
        ('12-34', '12', '34', 0)
    """

    text: str
    groups: tuple[str | None, ...] = ()
    start: int = 0
    named: Mapping[str, str | None] = field(default_factory=dict, compare=False)

    @classmethod
    def from_match(cls, match: re.Match[str]) -> "MatchRecord":
        """Build a record from a :class:`re.Match`."""
        return cls(
            text=match.group(0),
            groups=match.groups(),
            start=match.start(),
            named=match.groupdict(),
        )

    def __getitem__(self, key: int | str) -> str | None:
        """``record[0]`` is the full text, ``record[n]`` group n, ``record[name]`` a named group."""
        if isinstance(key, str):
            return self.named[key]
        if key == 0:
            return self.text
        return self.groups[key - 1]

    def __len__(self) -> int:
        return len(self.groups) + 1


@dataclass(frozen=True, slots=True)
class ParseError:
    """Why a procedure failed.

    Attributes:
        iteration_count: Zero-based index of the suspension point at which
            the procedure failed
        yielded: The value yielded there, or the exception instance the
            procedure returned
        nested: One error per failed sub-parser alternative, in attempt
            order; None when no sub-parser was attempted
        cursor: Input position of the failing step (diagnostics only, not
            part of equality)

    Example:
        >>> ParseError(0, "bar") == ParseError(0, "bar", cursor=Cursor("foo"))
        True
    """

    iteration_count: int
    yielded: object
    nested: tuple["ParseError", ...] | None = None
    cursor: Cursor | None = field(default=None, compare=False, repr=False)

    @property
    def gave_up(self) -> bool:
        """True if the procedure returned an exception instead of a value."""
        return isinstance(self.yielded, BaseException)

    def walk(self) -> Iterator[tuple[int, "ParseError"]]:
        """Depth-first traversal of the error tree.

        Yields:
            (depth, error) pairs, the root at depth 0, nested errors in
            attempt order
        """
        stack: list[tuple[int, ParseError]] = [(0, self)]
        while stack:
            depth, error = stack.pop()
            yield depth, error
            if error.nested:
                stack.extend((depth + 1, child) for child in reversed(error.nested))

    def deepest(self) -> "ParseError":
        """Leaf error that stood furthest into the input.

        Ties keep the first error in traversal order. Errors without a
        cursor count as position 0.
        """
        best = self
        best_pos = -1
        for _, error in self.walk():
            if error.nested:
                continue
            pos = error.cursor.pos if error.cursor is not None else 0
            if pos > best_pos:
                best, best_pos = error, pos
        return best

    def to_diagnostic(
        self, depth: int = 0, lines: LineOffsetCache | None = None
    ) -> Diagnostic:
        """Describe this error (without its children) as a Diagnostic.

        Args:
            depth: Nesting depth recorded on the diagnostic
            lines: Precomputed line offsets of the input, if available
        """
        cursor = self.cursor if self.cursor is not None else Cursor("")
        if lines is None:
            span = cursor.span()
        else:
            line, col = lines.get_line_col(cursor.pos)
            span = SourceSpan(start=cursor.pos, end=cursor.pos, line=line, column=col)

        if isinstance(self.yielded, BaseException):
            return ErrorTemplate.procedure_gave_up(self.yielded, span, depth)
        return ErrorTemplate.expected_item(
            describe(self.yielded), span, cursor.excerpt(), depth
        )

    def to_diagnostics(self) -> tuple[Diagnostic, ...]:
        """Describe the whole tree, in :meth:`walk` order."""
        lines = LineOffsetCache(self.cursor.source) if self.cursor is not None else None
        return tuple(
            error.to_diagnostic(depth, lines) for depth, error in self.walk()
        )


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Procedure returned a value.

    Attributes:
        result: The procedure's return value
        cursor: Position after everything the procedure consumed

    Example:
        >>> ok = Success("x", Cursor("xy", 1))
        >>> ok.success, ok.remaining, ok.offset
        (True, 'y', 1)
    """

    success: ClassVar[bool] = True

    result: T
    cursor: Cursor

    @property
    def remaining(self) -> str:
        """Unconsumed input."""
        return self.cursor.remaining

    @property
    def offset(self) -> int:
        """Characters consumed from the original input."""
        return self.cursor.pos


@dataclass(frozen=True, slots=True)
class Failure:
    """Procedure could not match the input.

    Attributes:
        failed_on: Root of the error tree
        cursor: Position of the failing suspension point, before any of its
            alternatives consumed input
    """

    success: ClassVar[bool] = False

    failed_on: ParseError
    cursor: Cursor

    @property
    def remaining(self) -> str:
        """Input as it stood when the failing suspension point was reached."""
        return self.cursor.remaining

    @property
    def offset(self) -> int:
        """Characters consumed before the failing suspension point."""
        return self.cursor.pos

    def format(self) -> str:
        """Rust-style report of the error tree with source context."""
        return DiagnosticFormatter().format_failure(self)


type ParseResult[T] = Success[T] | Failure
