"""Depth limiting for nested sub-parser invocations.

Every SubParser alternative runs a nested engine loop on the Python call
stack. DepthGuard turns runaway nesting (left recursion, adversarially deep
input) into a DepthLimitExceededError at a known depth instead of a bare
RecursionError somewhere inside user code.

Without an explicit limit the guard allows as many levels as the call stack
remaining at construction time can hold, so valid deeply nested input parses
as far as the interpreter would let it.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from yieldparse.constants import FRAMES_PER_LEVEL, RECURSION_RESERVE_FRAMES
from yieldparse.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "depth_clamp", "host_depth_limit"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in the engine:
        guard = DepthGuard(max_depth=None)  # host capacity
        with guard:
            sub_result = self._run(cursor, procedure, guard)

    Mutability Note:
        Intentionally mutable (not frozen=True). current_depth is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Each top-level parse call creates its own DepthGuard, so concurrent
        calls never share one.

    Attributes:
        max_depth: Maximum allowed depth. None means host capacity
            (see host_depth_limit); explicit values are clamped.
        current_depth: Current recursion depth
    """

    max_depth: int | None = None
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Resolve max_depth against the Python call stack."""
        if self.max_depth is None:
            self.max_depth = host_depth_limit()
        else:
            self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing: __exit__ is not called
        when __enter__ raises, so incrementing first would leave
        current_depth permanently elevated.
        """
        limit = self.limit
        if self.current_depth >= limit:
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(limit))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    @property
    def limit(self) -> int:
        """Resolved maximum depth."""
        assert self.max_depth is not None  # Type narrowing: resolved in __post_init__
        return self.max_depth


def _stack_depth() -> int:
    """Number of Python frames on the caller's stack."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def host_depth_limit(
    reserve_frames: int = RECURSION_RESERVE_FRAMES,
    frames_per_level: int = FRAMES_PER_LEVEL,
) -> int:
    """Deepest sub-parser nesting the remaining call stack can hold.

    Counts the frames already in use by the caller and divides what is left
    of sys.getrecursionlimit() by the frames one nesting level consumes.

    Args:
        reserve_frames: Stack frames to keep free for call overhead
        frames_per_level: Stack frames one nesting level consumes

    Returns:
        Available depth (at least 1)
    """
    available = sys.getrecursionlimit() - _stack_depth() - reserve_frames
    return max(1, available // frames_per_level)


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = RECURSION_RESERVE_FRAMES,
    frames_per_level: int = FRAMES_PER_LEVEL,
) -> int:
    """Clamp requested depth against Python recursion limit.

    Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to keep free for call overhead
        frames_per_level: Stack frames one nesting level consumes

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(300)  # OK, 300 * 2 frames fit
        300
        >>> depth_clamp(600)  # (1000 - 50) // 2
        475
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
