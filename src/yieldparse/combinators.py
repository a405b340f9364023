"""Reusable building blocks written as ordinary procedures.

Every combinator here uses only parse items and the engine's
suspend/resume protocol; none of them reaches into the engine. Most rely
on the empty literal ``""`` as a last alternative: it always matches and
consumes nothing, so its resume value tells the procedure that nothing
else matched.

Factories (``has_prefix``, ``optional``, ``look_ahead``) return a
zero-argument generator function. ``must_end``, ``is_end`` and
``has_more`` are generator functions themselves. Both kinds are yielded
directly::

    def signed_number():
        negative = yield has_prefix("-")
        digits = yield re.compile(r"^\\d+")
        return -int(digits[0]) if negative else int(digits[0])
"""

import re
from typing import Any

from yieldparse.cursor import MatchRecord
from yieldparse.items import Procedure, ProcedureFactory

__all__ = [
    "has_more",
    "has_prefix",
    "is_end",
    "look_ahead",
    "must_end",
    "optional",
]

# Python's "$" also matches just before a trailing newline.
# These only accept the true end of the input.
_EMPTY_INPUT = re.compile(r"^\Z")
_END_OF_INPUT = re.compile(r"$(?!\n)")

# Leading inline global flag groups, e.g. "(?i)" or "(?s)(?m)".
_GLOBAL_FLAGS = re.compile(r"^(?:\(\?[aiLmsux]+\))+")


def must_end() -> Procedure[None]:
    """Succeed only if the remaining input is empty."""
    yield _EMPTY_INPUT


def is_end() -> Procedure[bool]:
    """Report whether all input has been consumed, without failing.

    Example:
        >>> from yieldparse import parse
        >>> parse("", is_end).result
        True
        >>> parse("x", is_end).result
        False
    """
    end: MatchRecord = yield _END_OF_INPUT
    return end.start == 0


def has_more() -> Procedure[bool]:
    """Report whether input remains, without failing."""
    end: MatchRecord = yield _END_OF_INPUT
    return end.start > 0


def has_prefix(item: object) -> ProcedureFactory[bool]:
    """Test for ``item``, consuming it if present.

    Args:
        item: Any parse item

    Returns:
        Factory of a procedure that returns True if ``item`` matched
    """

    def has_prefix_procedure() -> Procedure[bool]:
        return (yield [item, ""]) != ""

    return has_prefix_procedure


def optional(*items: object) -> ProcedureFactory[Any]:
    """Match the first of ``items`` that matches, or nothing.

    Args:
        *items: Parse items tried in order

    Returns:
        Factory of a procedure that returns the matched item's resume value,
        or None when none matched
    """

    def optional_procedure() -> Procedure[Any]:
        result = yield [*items, ""]
        return None if result == "" else result

    return optional_procedure


def look_ahead(pattern: re.Pattern[str] | str) -> ProcedureFactory[MatchRecord]:
    """Match ``pattern`` at the cursor without consuming input.

    The pattern is wrapped as ``^(?=...)``; flags of a compiled pattern and
    leading inline flags such as ``(?i)`` are kept. Capture groups are available on the returned MatchRecord.

    Args:
        pattern: Compiled pattern or pattern source; need not be anchored

    Returns:
        Factory of a procedure that returns the MatchRecord (start is 0)

    Example:
        >>> from yieldparse import parse
        >>> parse("abcdef", look_ahead("abc")).remaining
        'abcdef'
        >>> parse("ABCdef", look_ahead("(?i)(abc)")).result[1]
        'ABC'
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
    # Global flags such as (?i) must lead the pattern; compiled.flags has them.
    body = _GLOBAL_FLAGS.sub("", compiled.pattern)
    wrapped = re.compile(f"^(?={body})", compiled.flags)

    def look_ahead_procedure() -> Procedure[MatchRecord]:
        return (yield wrapped)

    return look_ahead_procedure
