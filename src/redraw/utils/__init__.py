"""
utils
=====

Shared utility functions and helpers for redraw.

This subpackage provides:
- rng : save/restore handling of NumPy's global generator (SeedGuard).
"""

from .rng import SeedGuard, get_state, preserved_state, seed, set_state

__all__ = [
    "SeedGuard",
    "seed",
    "get_state",
    "set_state",
    "preserved_state",
]
