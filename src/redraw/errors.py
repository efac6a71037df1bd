"""
errors.py
---------

Exception types raised by redraw.

defines:
- ResampleError: common base class
- ConfigError: invalid generator construction arguments
- SamplingError: a draw cannot be satisfied by the data it is given
- InputError: the dataset handed to a generator is unusable

All concrete errors also subclass ValueError, so callers that only
know about the builtin still catch them.
"""

from __future__ import annotations

from collections.abc import Sequence


class ResampleError(Exception):
    """Base class for every error raised by redraw."""


class ConfigError(ResampleError, ValueError):
    """Invalid arguments passed to sampler() / bootstrapper()."""


class SamplingError(ResampleError, ValueError):
    """
    A group is too small for the requested draw.

    Attributes
    ----------
    key : Hashable
        Group key of the offending group (None when ungrouped).
    size : int
        Requested rows per draw.
    available : int
        Rows actually present in the group.
    """

    def __init__(self, message: str, *, key=None, size=None, available=None):
        super().__init__(message)
        self.key = key
        self.size = size
        self.available = available


class InputError(ResampleError, ValueError):
    """
    The input dataset cannot be resampled as configured.

    Attributes
    ----------
    columns : tuple of str
        Column names that were referenced but not found (may be empty).
    """

    def __init__(self, message: str, *, columns: Sequence[str] = ()):
        super().__init__(message)
        self.columns = tuple(columns)
