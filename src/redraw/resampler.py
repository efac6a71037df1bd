"""
resampler.py
------------

Generator factories for reproducible resampling.

Provides:
- sampler(...) --> Resampler drawing with or without replacement
- bootstrapper(...) --> Resampler drawing each group's size with replacement
- Resampler --> configuration plus a private random baseline, called
  on a DataFrame to produce the augmented frame

Design
------
A Resampler is built once and called many times, typically once per
rendered frame by a plotting layer. Every call installs the same random
baseline (see ``redraw.utils.rng.SeedGuard``), so calling it twice on the
same data returns identical frames, and the caller's global random state
is untouched afterwards.

Call pipeline::

    Resampler(data)
      -> SeedGuard.activate()          install baseline
      -> data.groups.resolve()         partition rows
      -> engine.draw.draw_indices()    select rows per draw and group
      -> engine.assemble.assemble()    build output frame
      <- SeedGuard restores caller state
"""

from __future__ import annotations

import logging
import warnings
from typing import Literal

import pandas as pd

from redraw.config import BookkeepingColumns, ResampleConfig, normalize_group
from redraw.data.groups import GroupSpec, resolve, unwrap
from redraw.engine.assemble import assemble
from redraw.engine.draw import draw_indices
from redraw.errors import ConfigError, InputError
from redraw.utils.rng import SeedGuard

logger = logging.getLogger(__name__)


class Resampler:
    """
    Callable resampling function with a fixed random baseline.

    Parameters
    ----------
    config : ResampleConfig
        Validated generator settings.

    Attributes
    ----------
    config : ResampleConfig
    seed_guard : SeedGuard
        Holds the private baseline shared by all calls.

    Examples
    --------
    >>> draws = sampler(times=3, size=2, seed=1)
    >>> out = draws(df)
    >>> out.equals(draws(df))
    True
    """

    def __init__(self, config: ResampleConfig) -> None:
        self.config = config
        self.seed_guard = SeedGuard(config.seed)
        logger.debug("created %r", self)

    @property
    def times(self) -> int:
        return self.config.times

    @property
    def size(self) -> int | None:
        return self.config.size

    @property
    def replace(self) -> bool:
        return self.config.replace

    @property
    def group(self) -> str | tuple[str, ...] | None:
        return self.config.group

    @property
    def is_bootstrap(self) -> bool:
        return self.config.is_bootstrap

    def reset(self) -> None:
        """Drop the random baseline captured by a seedless generator."""
        self.seed_guard.reset()

    def __call__(self, data, groups: GroupSpec | None = None) -> pd.DataFrame:
        """
        Resample ``data``.

        Parameters
        ----------
        data : pd.DataFrame or DataFrameGroupBy
            Input dataset. A groupby supplies an external grouping.
        groups : column label or list of labels, optional
            External grouping given at call time. A tuple is one
            (MultiIndex) column label. Overrides a groupby
            annotation; overridden by the configured ``group``.

        Returns
        -------
        pd.DataFrame
            Selected rows plus bookkeeping columns.

        Raises
        ------
        InputError
            If ``data`` is not a frame or a grouping column is missing.
        SamplingError
            If a group has fewer rows than ``size`` and ``replace`` is False.
        """
        frame, grouping = unwrap(data)
        try:
            groups = normalize_group(groups)
        except ConfigError as exc:
            raise InputError(str(exc)) from exc
        external = groups if groups is not None else grouping
        if self.config.group is not None and external is not None:
            warnings.warn(
                f"configured group {self.config.group!r} overrides the grouping "
                "supplied with the data",
                UserWarning,
                stacklevel=2,
            )

        partition = resolve(frame, self.config.group, external)
        with self.seed_guard.activate():
            selections = draw_indices(
                partition,
                times=self.config.times,
                size=self.config.size,
                replace=self.config.replace,
            )

        result = assemble(
            frame,
            selections,
            copies=self.config.is_bootstrap,
            id_scope=self.config.id_scope,
            columns=self.config.columns,
        )
        logger.debug(
            "%s: %d input rows in %d group(s) -> %d output rows",
            self.config.kind,
            len(frame),
            len(partition),
            len(result),
        )
        return result

    def __repr__(self) -> str:
        draws = "draw" if self.times == 1 else "draws"
        if self.is_bootstrap:
            desc = f"bootstrapper: {self.times} {draws}"
        else:
            size = "full size" if self.size is None else f"size {self.size}"
            how = "with" if self.replace else "without"
            desc = f"sampler: {self.times} {draws} of {size}, {how} replacement"
        if self.group is not None:
            desc += f", grouped by {self.group!r}"
        if self.config.seed is not None:
            desc += f", seed {self.config.seed}"
        return f"<Resampler {desc}>"


def _columns(columns: BookkeepingColumns | dict | None) -> BookkeepingColumns:
    if columns is None:
        return BookkeepingColumns()
    if isinstance(columns, dict):
        try:
            return BookkeepingColumns(**columns)
        except TypeError as exc:
            raise ConfigError(f"invalid bookkeeping columns {columns!r}: {exc}") from exc
    return columns


def sampler(
    times: int = 1,
    size: int | None = None,
    replace: bool = False,
    group: GroupSpec | None = None,
    seed: int | None = None,
    *,
    id_scope: Literal["group", "draw"] = "group",
    columns: BookkeepingColumns | dict | None = None,
) -> Resampler:
    """
    Build a resampling function that draws rows, optionally by group.

    Parameters
    ----------
    times : int, default=1
        Number of draws.
    size : int, optional
        Rows per draw (per group). Defaults to each group's row count.
    replace : bool, default=False
        Sample with replacement.
    group : column name or list of names, optional
        Sample each group independently. A tuple is a single
        MultiIndex column label, not a list of names.
    seed : int, optional
        Random seed. If omitted, the generator's baseline is captured
        from NumPy's global generator the first time it is called.
    id_scope : {"group", "draw"}, default="group"
        Where ``.id`` numbering restarts.
    columns : BookkeepingColumns or dict, optional
        Names of the bookkeeping columns, e.g. ``{"draw": "frame"}``.

    Returns
    -------
    Resampler

    Raises
    ------
    ConfigError
        On invalid arguments.

    Examples
    --------
    >>> letters = pd.DataFrame({"letter": list("abcdefghijklmnopqrstuvwxyz")})
    >>> draws = sampler(times=3, size=2, seed=123)
    >>> len(draws(letters))
    6

    >>> # Stratified: 2 rows from each species in each of 5 draws
    >>> draws = sampler(times=5, size=2, group="species")
    """
    config = ResampleConfig(
        times=times,
        size=size,
        replace=replace,
        group=group,
        seed=seed,
        kind="sampler",
        id_scope=id_scope,
        columns=_columns(columns),
    )
    return Resampler(config)


def bootstrapper(
    times: int = 1,
    group: GroupSpec | None = None,
    seed: int | None = None,
    *,
    size: None = None,
    replace: bool = True,
    id_scope: Literal["group", "draw"] = "group",
    columns: BookkeepingColumns | dict | None = None,
) -> Resampler:
    """
    Build a resampling function that bootstraps rows, optionally by group.

    Each draw takes as many rows as the (group's) input has, with
    replacement, and records the multiplicity of every source row in
    ``.copies``.

    Parameters
    ----------
    times : int, default=1
        Number of bootstrap draws.
    group : column name or list of names, optional
        Bootstrap each group independently.
    seed : int, optional
        Random seed; see ``sampler``.
    size : None
        Not settable; present so that passing it fails loudly.
    replace : bool, default=True
        Not settable to False.
    id_scope : {"group", "draw"}, default="group"
    columns : BookkeepingColumns or dict, optional

    Returns
    -------
    Resampler

    Raises
    ------
    ConfigError
        On invalid arguments, including any ``size`` or ``replace=False``.

    Examples
    --------
    >>> boot = bootstrapper(times=20, seed=42)
    >>> out = boot(df)
    >>> out.groupby(".draw").size().unique()  # len(df) rows per draw
    """
    config = ResampleConfig(
        times=times,
        size=size,
        replace=replace,
        group=group,
        seed=seed,
        kind="bootstrapper",
        id_scope=id_scope,
        columns=_columns(columns),
    )
    return Resampler(config)
