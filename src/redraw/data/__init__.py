"""
redraw.data
===========

submodule for handling the datasets being resampled.

Includes:
- groups: Partition, resolve(), unwrap()
- frames: per-draw views of a resampled frame
"""

from .frames import count_draws, iter_draws, select_draw
from .groups import Partition, resolve, unwrap

__all__ = [
    "Partition",
    "resolve",
    "unwrap",
    "iter_draws",
    "select_draw",
    "count_draws",
]
