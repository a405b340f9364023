"""Core utilities shared by the engine and its configuration.

Exports:
    DepthGuard: Context manager for recursion depth limiting
    depth_clamp: Clamp a depth limit against the interpreter recursion limit
    host_depth_limit: Nesting depth the remaining call stack can hold

Python 3.13+.
"""

from .depth_guard import DepthGuard, depth_clamp, host_depth_limit

__all__ = ["DepthGuard", "depth_clamp", "host_depth_limit"]
