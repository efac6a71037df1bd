"""
draw.py
-------

Per-group, per-draw row selection.

For each draw 1..times and each group of a Partition (in partition
order), pick ``size`` row indices from that group:

- without replacement: a uniform permutation of the group, truncated
- with replacement: ``size`` independent uniform picks

All randomness comes from NumPy's global generator; wrap calls in a
SeedGuard to make them reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import NamedTuple

import numpy as np

from redraw.data.groups import Partition
from redraw.errors import SamplingError

logger = logging.getLogger(__name__)


class Selection(NamedTuple):
    """Rows picked for one group in one draw."""

    draw: int
    key: Hashable
    indices: np.ndarray


def check_sizes(partition: Partition, size: int | None, replace: bool) -> None:
    """
    Raise SamplingError if a group cannot supply ``size`` distinct rows.

    Empty groups are exempt: they contribute nothing to any draw.
    """
    if replace or size is None:
        return
    for key, available in zip(partition.keys, partition.sizes):
        if 0 < available < size:
            label = "the data" if not partition.grouped else f"group {key!r}"
            raise SamplingError(
                f"cannot draw {size} rows without replacement from {label}, "
                f"which has only {available}",
                key=key,
                size=size,
                available=available,
            )


def draw_group(indices: np.ndarray, size: int, replace: bool) -> np.ndarray:
    """
    Select ``size`` entries of ``indices``.

    Parameters
    ----------
    indices : np.ndarray
        Row indices of one group.
    size : int
        Number of rows to select.
    replace : bool
        Allow repeats.

    Returns
    -------
    np.ndarray
        Selected row indices, in draw order.
    """
    if len(indices) == 0 or size == 0:
        return np.empty(0, dtype=np.intp)
    if replace:
        return np.random.choice(indices, size=size, replace=True)
    if size > len(indices):
        raise SamplingError(
            f"cannot draw {size} rows without replacement from {len(indices)}",
            size=size,
            available=len(indices),
        )
    return np.random.permutation(indices)[:size]


def draw_indices(
    partition: Partition,
    times: int,
    size: int | None = None,
    replace: bool = False,
) -> list[Selection]:
    """
    Draw row indices for every (draw, group) pair.

    Parameters
    ----------
    partition : Partition
        Groups to sample from, in iteration order.
    times : int
        Number of draws.
    size : int | None
        Rows per group per draw; None uses each group's own size.
    replace : bool, default=False
        Sample with replacement.

    Returns
    -------
    list of Selection
        Draw-major, then group order.

    Raises
    ------
    SamplingError
        If ``replace`` is False and ``size`` exceeds a non-empty group.
        Raised before any random number is consumed.
    """
    check_sizes(partition, size, replace)

    selections = []
    for draw in range(1, times + 1):
        for key, indices in partition:
            n = len(indices) if size is None else size
            selections.append(Selection(draw, key, draw_group(indices, n, replace)))

    logger.debug(
        "drew %d selections (%d draws x %d groups, replace=%s)",
        len(selections),
        times,
        len(partition),
        replace,
    )
    return selections
