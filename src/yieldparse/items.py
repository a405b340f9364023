"""Parse items: the requests a procedure can yield at a suspension point.

A parser procedure is a generator. Each ``yield`` suspends it and hands
the engine one of four requests:

- :class:`Literal` - exact text at the front of the remaining input
- :class:`Pattern` - an anchored regular expression
- :class:`Alternatives` - an ordered choice between other items
- :class:`SubParser` - delegate to another procedure

Raw Python values are accepted in place of the tagged variants and are
coerced by :func:`as_item`::

    "abc"                  -> Literal("abc")
    re.compile(r"^\\d+")    -> Pattern(...)
    ["a", "b"]             -> Alternatives(("a", "b"))
    digits                 -> SubParser(digits)

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from typing import Any

from yieldparse.constants import PATTERN_ANCHORS

__all__ = [
    "Alternatives",
    "Literal",
    "ParseItem",
    "Pattern",
    "Procedure",
    "ProcedureFactory",
    "SubParser",
    "as_item",
    "describe",
    "is_procedure",
    "iter_sequence",
    "normalize",
]

type Procedure[T] = Generator[Any, Any, T]
type ProcedureFactory[T] = Callable[[], Procedure[T]]


@dataclass(frozen=True, slots=True)
class Literal:
    """Exact text to remove from the front of the remaining input.

    Resumes the procedure with ``text``. The empty literal always matches
    and consumes nothing.
    """

    text: str


@dataclass(frozen=True, slots=True)
class Pattern:
    """Anchored regular expression.

    The source must start with ``^`` (match at the current position) or
    ``$`` (probe the end of the input). The engine checks this when the
    item is evaluated. Resumes the procedure with a
    :class:`~yieldparse.cursor.MatchRecord`.
    """

    regex: re.Pattern[str]

    @property
    def source(self) -> str:
        """Regular expression source text."""
        return self.regex.pattern

    @property
    def is_anchored(self) -> bool:
        """Whether the source starts with an anchor character."""
        return self.source[:1] in PATTERN_ANCHORS


@dataclass(frozen=True, slots=True)
class Alternatives:
    """Ordered choice. The first alternative that succeeds wins."""

    items: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class SubParser:
    """Reference to another procedure.

    ``factory`` is called each time the alternative is tried and must
    return a fresh generator.
    """

    factory: ProcedureFactory[Any]

    @property
    def name(self) -> str:
        """Name of the factory, for diagnostics."""
        return getattr(self.factory, "__qualname__", None) or repr(self.factory)


type ParseItem = Literal | Pattern | Alternatives | SubParser


def as_item(value: object) -> ParseItem | object:
    """Coerce a raw yielded value into its tagged variant.

    Tagged variants are returned unchanged. Values of any other shape are
    also returned unchanged; the engine treats them as alternatives that
    never match.

    Args:
        value: Value yielded by a procedure or listed in an Alternatives

    Returns:
        Literal, Pattern, Alternatives or SubParser, or ``value`` itself
    """
    match value:
        case Literal() | Pattern() | Alternatives() | SubParser():
            return value
        case str():
            return Literal(value)
        case re.Pattern():
            return Pattern(value)
        case list() | tuple():
            return Alternatives(tuple(value))
        case _ if callable(value):
            return SubParser(value)
        case _:
            return value


def normalize(yielded: object) -> tuple[ParseItem | object, ...]:
    """Expand a yielded value into the ordered alternatives to try.

    An Alternatives value is decomposed one level; its members are
    coerced but not flattened, so a list nested inside a list stays an
    Alternatives item (which never matches as an alternative). Every other
    value becomes a one-element tuple.

    Args:
        yielded: Value yielded at a suspension point

    Returns:
        Tuple of coerced alternatives, in trial order

    Example:
        >>> normalize("cat")
        (Literal(text='cat'),)
        >>> normalize(["dog", "cat"])
        (Literal(text='dog'), Literal(text='cat'))
    """
    item = as_item(yielded)
    if isinstance(item, Alternatives):
        return tuple(as_item(choice) for choice in item.items)
    return (item,)


def describe(value: object) -> str:
    """Render a yielded value for error messages.

    Example:
        >>> describe(["dog", re.compile("^cat")])
        "one of 'dog', /^cat/"
    """
    item = as_item(value)
    match item:
        case Literal(text=text):
            return repr(text)
        case Pattern(regex=regex):
            return f"/{regex.pattern}/"
        case SubParser():
            return f"<{item.name}>"
        case Alternatives(items=items):
            return "one of " + ", ".join(describe(choice) for choice in items)
        case _:
            return repr(item)


def is_procedure(value: object) -> bool:
    """Check whether ``value`` is a started-or-startable generator object."""
    return isinstance(value, Generator)


def iter_sequence(items: Iterable[object]) -> Procedure[None]:
    """Wrap a plain iterable of items as a procedure.

    Each element is yielded in turn; resume values are ignored and the
    procedure returns ``None``.
    """
    for item in items:
        yield item
