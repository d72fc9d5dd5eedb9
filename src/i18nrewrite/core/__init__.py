"""Core utilities shared across the syntax, extraction and runtime layers.

Isolating these here keeps the dependency graph clean:

    core <- syntax <- extraction <- runtime

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError

__all__ = ["DepthGuard", "DepthLimitExceededError"]
