"""
assemble.py
-----------

Turn draw selections into the augmented output frame.

Output columns: the input's columns in their original order, then the
bookkeeping columns ``.draw``, ``.id``, ``.original_id``, ``.row`` and,
for bootstraps, ``.copies``.

Notes
-----
- ``.original_id`` is the 1-based position of the source row.
- ``.row`` counts 1..N over the whole output and never resets.
- ``.copies`` counts how often an ``.original_id`` occurs within its
  own (draw, group) block.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence

import numpy as np
import pandas as pd

from redraw.config import BookkeepingColumns
from redraw.engine.draw import Selection

logger = logging.getLogger(__name__)


def block_ids(lengths: np.ndarray, scope_starts: np.ndarray) -> np.ndarray:
    """
    Running 1-based position, restarting at each scope boundary.

    Parameters
    ----------
    lengths : np.ndarray
        Length of each (draw, group) block.
    scope_starts : np.ndarray of bool
        True where a block starts a new numbering scope.

    Returns
    -------
    np.ndarray, shape (lengths.sum(),)
    """
    total = int(lengths.sum())
    if total == 0:
        return np.empty(0, dtype=np.int64)
    offsets = np.concatenate(([0], np.cumsum(lengths)[:-1]))
    # position where the scope of each block began
    scope_offset = np.maximum.accumulate(np.where(scope_starts, offsets, 0))
    return np.arange(total, dtype=np.int64) - np.repeat(scope_offset, lengths) + 1


def block_copies(selections: Sequence[Selection]) -> np.ndarray:
    """Multiplicity of each selected index within its own selection."""
    parts = []
    for selection in selections:
        if len(selection.indices) == 0:
            continue
        _, inverse, counts = np.unique(
            selection.indices, return_inverse=True, return_counts=True
        )
        parts.append(counts[inverse.reshape(-1)])
    if not parts:
        return np.empty(0, dtype=np.int64)
    return np.concatenate(parts).astype(np.int64)


def assemble(
    data: pd.DataFrame,
    selections: Sequence[Selection],
    *,
    copies: bool = False,
    id_scope: str = "group",
    columns: BookkeepingColumns | None = None,
) -> pd.DataFrame:
    """
    Materialize selected rows with bookkeeping columns.

    Parameters
    ----------
    data : pd.DataFrame
        Original input.
    selections : sequence of Selection
        Output of ``draw_indices``, draw-major then group order.
    copies : bool, default=False
        Add the ``.copies`` column (bootstraps).
    id_scope : {"group", "draw"}, default="group"
        Where ``.id`` restarts: every (draw, group) pair, or every draw.
    columns : BookkeepingColumns, optional
        Output names of the bookkeeping columns.

    Returns
    -------
    pd.DataFrame
        One row per selected index, with a fresh RangeIndex.
    """
    columns = columns or BookkeepingColumns()
    bookkeeping = columns.output_order(copies)

    clashing = [c for c in data.columns if c in bookkeeping]
    if clashing:
        warnings.warn(
            f"input columns {clashing} are replaced by bookkeeping columns",
            UserWarning,
            stacklevel=3,
        )
        data = data.drop(columns=clashing)

    lengths = np.array([len(s.indices) for s in selections], dtype=np.int64)
    if len(selections):
        positions = np.concatenate([s.indices for s in selections]).astype(np.intp)
    else:
        positions = np.empty(0, dtype=np.intp)

    draws = np.array([s.draw for s in selections], dtype=np.int64)
    if id_scope == "draw":
        scope_starts = np.concatenate(([True], draws[1:] != draws[:-1]))
    else:
        scope_starts = np.ones(len(selections), dtype=bool)

    out = data.iloc[positions].reset_index(drop=True)
    out[columns.draw] = np.repeat(draws, lengths)
    out[columns.id] = block_ids(lengths, scope_starts)
    out[columns.original_id] = positions.astype(np.int64) + 1
    out[columns.row] = np.arange(1, len(positions) + 1, dtype=np.int64)
    if copies:
        out[columns.copies] = block_copies(selections)

    logger.debug("assembled %d rows from %d selections", len(out), len(selections))
    return out
