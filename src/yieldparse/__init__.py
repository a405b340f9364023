"""yieldparse - backtracking parsers written as generators.

A parser is a generator that yields what it expects next (a literal, an
anchored regular expression, a list of alternatives, or another parser)
and is resumed with what matched. The engine owns all input handling,
backtracking and recursion.

Public API:
    parse - Run a procedure against an input string
    ParseEngine - Reusable engine carrying configuration (max_depth)
    Success, Failure, ParseResult - Result types
    ParseError - Node of the failure tree
    MatchRecord - Resume value of a pattern match
    Literal, Pattern, Alternatives, SubParser - Explicit parse items
    has_prefix, optional, look_ahead, must_end, is_end, has_more - Combinators

Exceptions:
    YieldParseError - Base exception class
    GrammarError - Malformed parser definition
    UnanchoredPatternError - Pattern without a leading '^' or '$'
    DepthLimitExceededError - Sub-parser nesting limit exceeded

Submodules:
    yieldparse.items - Parse item model and normalization
    yieldparse.cursor - Cursor and result types
    yieldparse.diagnostics - Error codes, templates and failure formatting
"""

from .combinators import has_more, has_prefix, is_end, look_ahead, must_end, optional
from .cursor import Failure, MatchRecord, ParseError, ParseResult, Success
from .diagnostics import (
    DepthLimitExceededError,
    GrammarError,
    UnanchoredPatternError,
    YieldParseError,
)
from .engine import ParseEngine, parse
from .items import Alternatives, Literal, Pattern, SubParser

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("yieldparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Alternatives",
    "DepthLimitExceededError",
    "Failure",
    "GrammarError",
    "Literal",
    "MatchRecord",
    "ParseEngine",
    "ParseError",
    "ParseResult",
    "Pattern",
    "SubParser",
    "Success",
    "UnanchoredPatternError",
    "YieldParseError",
    "__version__",
    "has_more",
    "has_prefix",
    "is_end",
    "look_ahead",
    "must_end",
    "optional",
    "parse",
]
