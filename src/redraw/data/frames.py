"""
frames.py
---------

Helpers for consumers that show one draw at a time (e.g. one draw per
animation frame).

functions:
- iter_draws(result): yield (draw, rows) in draw order
- select_draw(result, draw): rows of a single draw
- count_draws(result): number of distinct draws
"""

from __future__ import annotations

from collections.abc import Iterator

import pandas as pd

from redraw.errors import InputError


def _draw_column(result: pd.DataFrame, column: str) -> pd.Series:
    if column not in result.columns:
        raise InputError(
            f"draw column {column!r} not found; was this frame produced by a resampler?",
            columns=[column],
        )
    return result[column]


def iter_draws(
    result: pd.DataFrame, column: str = ".draw"
) -> Iterator[tuple[int, pd.DataFrame]]:
    """
    Iterate over the draws of a resampled frame.

    Parameters
    ----------
    result : pd.DataFrame
        Output of a sampler or bootstrapper.
    column : str, default=".draw"
        Name of the draw column.

    Yields
    ------
    draw : int
    rows : pd.DataFrame
        Rows of that draw, in output order.
    """
    draws = _draw_column(result, column)
    for draw, rows in result.groupby(draws, sort=True):
        yield int(draw), rows


def select_draw(result: pd.DataFrame, draw: int, column: str = ".draw") -> pd.DataFrame:
    """Rows of ``result`` belonging to ``draw`` (empty if there are none)."""
    draws = _draw_column(result, column)
    return result[draws == draw]


def count_draws(result: pd.DataFrame, column: str = ".draw") -> int:
    """Number of distinct draws in ``result``."""
    return int(_draw_column(result, column).nunique())
