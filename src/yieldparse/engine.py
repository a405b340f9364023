"""Interpreter loop for generator-based parser procedures.

A procedure is a generator that yields parse items and is resumed with
whatever each item matched::

    def greeting():
        yield "hello"
        name = yield re.compile(r"^ (\\w+)")
        yield must_end
        return name[1]

    parse("hello world", greeting)  # Success(result='world', ...)

Architecture:
    :class:`ParseEngine` drives one procedure at a time against an
    immutable :class:`~yieldparse.cursor.Cursor`. Each yielded value is
    normalized into ordered alternatives (:func:`~yieldparse.items.normalize`)
    and the first alternative that matches resumes the procedure. SubParser
    alternatives recurse into the same loop. When no alternative matches,
    the whole invocation returns a :class:`~yieldparse.cursor.Failure`
    whose error tree records the failed sub-parser attempts.

Error Handling:
    Input that does not match is never raised; it is a Failure value.
    An unanchored Pattern raises UnanchoredPatternError. Nesting past
    ``max_depth``, or past what the call stack can hold when no limit is
    configured, raises DepthLimitExceededError. Exceptions raised by
    procedure bodies or factories propagate unchanged.

Thread Safety:
    The engine holds configuration only. Every parse() call builds its own
    cursor, counters and DepthGuard.
"""

import logging
from collections.abc import Iterable
from typing import Any

from yieldparse.core import DepthGuard
from yieldparse.cursor import Cursor, Failure, MatchRecord, ParseError, ParseResult, Success
from yieldparse.diagnostics import ErrorTemplate, UnanchoredPatternError
from yieldparse.items import (
    Alternatives,
    Literal,
    Pattern,
    Procedure,
    SubParser,
    as_item,
    describe,
    is_procedure,
    iter_sequence,
    normalize,
)

__all__ = ["ParseEngine", "parse"]

logger = logging.getLogger(__name__)


def _start(procedure: object) -> Procedure[Any]:
    """Turn anything accepted as a procedure into a generator.

    Accepts a generator, a zero-argument factory, a single parse item, or
    an iterable of parse items.
    """
    if is_procedure(procedure):
        return procedure  # type: ignore[return-value]
    if isinstance(procedure, Iterable) and not isinstance(procedure, str):
        return iter_sequence(procedure)
    item = as_item(procedure)
    match item:
        case SubParser():
            return item.factory()
        case Literal() | Pattern() | Alternatives():
            return iter_sequence((procedure,))
    msg = f"Cannot run {procedure!r} as a parser procedure"
    raise TypeError(msg)


class ParseEngine:
    """Backtracking interpreter for parser procedures.

    Attributes:
        max_depth: Maximum nesting of sub-parser invocations, or None for
            as deep as the call stack allows (explicit values are clamped
            against the interpreter recursion limit)

    Example:
        >>> engine = ParseEngine(max_depth=50)
        >>> engine.parse("cat", lambda: (yield ["dog", "cat"])).result
        'cat'
    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize engine with an optional nesting limit.

        Args:
            max_depth: Maximum sub-parser nesting depth (default: None,
                limited only by the remaining call stack).
        """
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int | None:
        """Configured sub-parser nesting depth (None: host capacity)."""
        return self._max_depth

    def parse[T](self, source: str, procedure: object) -> ParseResult[T]:
        """Run ``procedure`` against ``source``.

        Args:
            source: Complete input text (never modified)
            procedure: Generator, zero-argument generator function, single
                parse item, or iterable of parse items

        Returns:
            Success with the procedure's return value, or Failure with the
            error tree

        Raises:
            UnanchoredPatternError: A yielded Pattern lacks a leading anchor
            DepthLimitExceededError: Sub-parsers nested deeper than max_depth
            TypeError: ``procedure`` cannot be run
        """
        guard = DepthGuard(max_depth=self._max_depth)
        result = self._run(Cursor(source), _start(procedure), guard)
        if logger.isEnabledFor(logging.DEBUG):
            if result.success:
                logger.debug("Parse succeeded, consumed %d of %d chars", result.offset, len(source))
            else:
                logger.debug(
                    "Parse failed at offset %d on %s",
                    result.offset,
                    describe(result.failed_on.yielded),
                )
        return result  # type: ignore[return-value]

    def _run(self, cursor: Cursor, procedure: Procedure[Any], guard: DepthGuard) -> ParseResult[Any]:
        """Drive one procedure until it returns or a step cannot match."""
        last: object = None
        iteration_count = 0

        while True:
            try:
                yielded = procedure.send(last)
            except StopIteration as stop:
                if isinstance(stop.value, BaseException):
                    return Failure(ParseError(iteration_count, stop.value, cursor=cursor), cursor)
                return Success(stop.value, cursor)

            nested: list[ParseError] = []
            for choice in normalize(yielded):
                match choice:
                    case Literal(text=text):
                        if cursor.startswith(text):
                            cursor = cursor.advance(len(text))
                            last = text
                            break
                    case Pattern(regex=regex):
                        if not choice.is_anchored:
                            raise UnanchoredPatternError(
                                ErrorTemplate.pattern_not_anchored(regex.pattern)
                            )
                        found = cursor.search(regex)
                        if found is not None:
                            cursor = cursor.advance(len(found.group(0)))
                            last = MatchRecord.from_match(found)
                            break
                    case SubParser():
                        sub_result = self._run_sub(cursor, choice, guard)
                        if sub_result.success:
                            cursor = sub_result.cursor
                            last = sub_result.result
                            break
                        nested.append(sub_result.failed_on)
                    case _:
                        logger.debug("Skipping alternative that cannot match: %r", choice)
            else:
                failed_on = ParseError(
                    iteration_count, yielded, tuple(nested) or None, cursor=cursor
                )
                procedure.close()
                return Failure(failed_on, cursor)

            iteration_count += 1

    def _run_sub(self, cursor: Cursor, item: SubParser, guard: DepthGuard) -> ParseResult[Any]:
        """Run a sub-parser alternative one nesting level down."""
        with guard:
            return self._run(cursor, item.factory(), guard)


_DEFAULT_ENGINE = ParseEngine()


def parse[T](source: str, procedure: object, *, max_depth: int | None = None) -> ParseResult[T]:
    """Parse ``source`` with ``procedure``.

    Convenience wrapper around :meth:`ParseEngine.parse`.

    Args:
        source: Complete input text
        procedure: Generator, zero-argument generator function, single
            parse item, or iterable of parse items
        max_depth: Maximum sub-parser nesting depth (default: limited only
            by the remaining call stack)

    Returns:
        Success or Failure

    Example:
        >>> result = parse("foo", ["bar"])
        >>> result.success, result.remaining, result.failed_on
        (False, 'foo', ParseError(iteration_count=0, yielded='bar', nested=None))
    """
    engine = _DEFAULT_ENGINE if max_depth is None else ParseEngine(max_depth=max_depth)
    return engine.parse(source, procedure)
