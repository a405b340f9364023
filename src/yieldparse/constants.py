"""Shared constants for yieldparse.

Centralized configuration values used by the engine, the combinators and
the diagnostics layer. Placing them here avoids circular imports and
provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "FRAMES_PER_LEVEL",
    "PATTERN_ANCHORS",
    "RECURSION_RESERVE_FRAMES",
    "UNTRUSTED_INPUT_MAX_DEPTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Every SubParser alternative runs a nested engine invocation on the Python
# call stack. Recursive grammars (lists, nested expressions) grow that stack
# by one level per nested sub-parser. Without an explicit max_depth the
# engine allows as many levels as the remaining call stack can hold.

# Conservative nesting limit for untrusted input. Opt-in: pass it as
# ParseEngine(max_depth=UNTRUSTED_INPUT_MAX_DEPTH).
UNTRUSTED_INPUT_MAX_DEPTH: int = 300

# Python frames consumed by one nested engine invocation.
FRAMES_PER_LEVEL: int = 2

# Frames kept free for the caller, logging and exception handling.
RECURSION_RESERVE_FRAMES: int = 50

# ============================================================================
# PATTERN ANCHORING
# ============================================================================

# First character a Pattern source must start with.
PATTERN_ANCHORS: tuple[str, ...] = ("^", "$")
