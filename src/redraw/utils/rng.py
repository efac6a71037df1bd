"""
rng.py
------

Random number utilities for redraw.

Resampling draws from NumPy's global (legacy) generator so that the
output of a generator is reproducible bit for bit. This module treats
that global state as a scoped resource:

- seed(), get_state(), set_state(): thin wrappers over numpy.random.
- preserved_state(): context manager that puts the caller's state back.
- SeedGuard: holds a private baseline state, installs it for the
  duration of a call and restores whatever was there before.

The baseline is never advanced, so every call of the same guard sees
the same random stream.

Examples
--------
>>> from redraw.utils.rng import SeedGuard
>>> guard = SeedGuard(seed=42)
>>> with guard.activate():
...     a = np.random.permutation(10)
>>> with guard.activate():
...     b = np.random.permutation(10)
>>> bool((a == b).all())
True
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

# NumPy's global generator is shared by every guard in the process.
_GLOBAL_STATE_LOCK = threading.RLock()

RandomState = tuple[Any, ...]


def seed(seed_value: int) -> None:
    """
    Seed NumPy's global generator.

    Parameters
    ----------
    seed_value : int
        Seed for random number generation.
    """
    np.random.seed(seed_value)


def get_state() -> RandomState:
    """Return the current state of NumPy's global generator."""
    return np.random.get_state()


def set_state(state: RandomState) -> None:
    """Install ``state`` into NumPy's global generator."""
    np.random.set_state(state)


def state_from_seed(seed_value: int) -> RandomState:
    """
    Compute the generator state produced by ``seed_value``.

    The global generator is left untouched.

    Parameters
    ----------
    seed_value : int
        Seed in [0, 2**32 - 1].

    Returns
    -------
    tuple
        State in the format of ``numpy.random.get_state()``.
    """
    return np.random.RandomState(seed_value).get_state()


def states_equal(a: RandomState, b: RandomState) -> bool:
    """Compare two states as returned by ``numpy.random.get_state()``."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if isinstance(x, np.ndarray) or isinstance(y, np.ndarray):
            if not np.array_equal(x, y):
                return False
        elif x != y:
            return False
    return True


@contextmanager
def preserved_state() -> Iterator[RandomState]:
    """
    Restore NumPy's global generator state on exit.

    Yields the saved state. Holds the global state lock for the duration
    of the block.
    """
    with _GLOBAL_STATE_LOCK:
        saved = get_state()
        try:
            yield saved
        finally:
            set_state(saved)


class SeedGuard:
    """
    Save/restore guard around NumPy's global generator.

    Parameters
    ----------
    seed : int | None
        If given, the private baseline is derived from it immediately.
        If None, the baseline is snapshotted from the global generator
        the first time the guard is activated.

    Attributes
    ----------
    seed : int | None
        Seed the guard was built with.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._baseline: RandomState | None = None
        if seed is not None:
            self._baseline = state_from_seed(seed)

    @property
    def captured(self) -> bool:
        """True once a baseline exists."""
        return self._baseline is not None

    @property
    def baseline(self) -> RandomState | None:
        """Copy of the private baseline state, or None if not captured yet."""
        if self._baseline is None:
            return None
        name, keys, pos, has_gauss, cached = self._baseline
        return (name, keys.copy(), pos, has_gauss, cached)

    def reset(self) -> None:
        """
        Forget a captured baseline.

        Seeded guards rebuild their baseline from the seed; seedless
        guards capture a new one on next activation.
        """
        self._baseline = state_from_seed(self.seed) if self.seed is not None else None

    @contextmanager
    def activate(self) -> Iterator[None]:
        """
        Run a block against the private baseline.

        On entry the caller's global state is saved and the baseline
        installed; on exit (normal or exceptional) the caller's state is
        put back. The baseline itself is not updated.
        """
        with _GLOBAL_STATE_LOCK:
            saved = get_state()
            if self._baseline is None:
                self._baseline = saved
                logger.debug("captured random baseline from global generator")
            try:
                set_state(self._baseline)
                yield
            finally:
                set_state(saved)

    def __repr__(self) -> str:
        origin = f"seed={self.seed}" if self.seed is not None else "seed=None"
        status = "captured" if self.captured else "pending"
        return f"SeedGuard({origin}, {status})"
