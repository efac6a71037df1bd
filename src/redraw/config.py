"""
config.py
---------

Immutable configuration for resampling generators.

defines:
- BookkeepingColumns: names of the columns appended to every output
- ResampleConfig: validated settings shared by sampler() and bootstrapper()
- normalize_group(): canonical form of a grouping argument

Both are frozen dataclasses validated in ``__post_init__``; a config that
exists is a config that is valid.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable
from dataclasses import dataclass, field
from numbers import Integral
from typing import Literal

import numpy as np

from redraw.errors import ConfigError

# numpy.random.RandomState only accepts 32-bit seeds
MAX_SEED = 2**32 - 1


@dataclass(frozen=True)
class BookkeepingColumns:
    """
    Output names of the bookkeeping columns.

    Attributes
    ----------
    draw : str, default=".draw"
        1-based draw number.
    id : str, default=".id"
        1-based position within the (draw, group) selection.
    original_id : str, default=".original_id"
        1-based position of the source row in the input.
    row : str, default=".row"
        1-based position in the whole output.
    copies : str, default=".copies"
        Multiplicity of ``original_id`` within its (draw, group)
        selection. Bootstrappers only.
    """

    draw: str = ".draw"
    id: str = ".id"
    original_id: str = ".original_id"
    row: str = ".row"
    copies: str = ".copies"

    def __post_init__(self):
        names = self.as_tuple()
        for name in names:
            if not isinstance(name, str) or not name:
                raise ConfigError(
                    f"bookkeeping column names must be non-empty strings, got {name!r}"
                )
        if len(set(names)) != len(names):
            raise ConfigError(f"bookkeeping column names must be distinct, got {names}")

    def as_tuple(self) -> tuple[str, str, str, str, str]:
        return (self.draw, self.id, self.original_id, self.row, self.copies)

    def output_order(self, copies: bool) -> list[str]:
        """Bookkeeping columns in output order."""
        order = [self.draw, self.id, self.original_id, self.row]
        if copies:
            order.append(self.copies)
        return order


@dataclass(frozen=True)
class ResampleConfig:
    """
    Settings of one resampling generator.

    Attributes
    ----------
    times : int, default=1
        Number of independent draws.
    size : int | None, default=None
        Rows per draw per group. None means each group's own row count.
        Must be None for bootstrappers.
    replace : bool, default=False
        Draw with replacement. Must be True for bootstrappers.
    group : column label | list of labels | None
        Column(s) whose distinct values partition the rows before
        sampling. A list names several columns and is normalized to a
        tuple; a tuple is one (MultiIndex) column label.
    seed : int | None
        Fixes the generator's random baseline. If None, the baseline is
        captured from NumPy's global generator on first use.
    kind : {"sampler", "bootstrapper"}
        Bootstrappers add a ``.copies`` column.
    id_scope : {"group", "draw"}, default="group"
        "group" restarts ``.id`` for every (draw, group) pair; "draw"
        numbers continuously across the groups of one draw.
    columns : BookkeepingColumns
        Names of the appended columns.

    Examples
    --------
    >>> ResampleConfig(times=3, size=2)
    >>> ResampleConfig(times=10, replace=True, group="species", seed=1)

    >>> # Bootstrapper: size derives from the data
    >>> ResampleConfig(times=5, replace=True, kind="bootstrapper")
    """

    times: int = 1
    size: int | None = None
    replace: bool = False
    group: Hashable | tuple[Hashable, ...] | None = None
    seed: int | None = None
    kind: Literal["sampler", "bootstrapper"] = "sampler"
    id_scope: Literal["group", "draw"] = "group"
    columns: BookkeepingColumns = field(default_factory=BookkeepingColumns)

    def __post_init__(self):
        """Validate configuration."""
        if not _is_integer(self.times) or self.times < 1:
            raise ConfigError(f"times must be a positive integer, got {self.times!r}")
        object.__setattr__(self, "times", int(self.times))

        if self.size is not None:
            if not _is_integer(self.size) or self.size < 1:
                raise ConfigError(
                    f"size must be a positive integer or None, got {self.size!r}"
                )
            object.__setattr__(self, "size", int(self.size))

        if not isinstance(self.replace, (bool, np.bool_)):
            raise ConfigError(f"replace must be a boolean, got {self.replace!r}")
        object.__setattr__(self, "replace", bool(self.replace))

        object.__setattr__(self, "group", normalize_group(self.group))

        if self.seed is not None:
            if not _is_integer(self.seed) or not 0 <= self.seed <= MAX_SEED:
                raise ConfigError(
                    f"seed must be an integer in [0, {MAX_SEED}] or None, got {self.seed!r}"
                )
            object.__setattr__(self, "seed", int(self.seed))

        if self.kind not in ("sampler", "bootstrapper"):
            raise ConfigError(f"Unknown kind: {self.kind!r}")
        if self.kind == "bootstrapper":
            if not self.replace:
                raise ConfigError("bootstrappers always draw with replacement")
            if self.size is not None:
                raise ConfigError(
                    "bootstrappers draw as many rows as each group holds; "
                    f"size cannot be set, got {self.size!r}"
                )

        if self.id_scope not in ("group", "draw"):
            raise ConfigError(
                f"id_scope must be 'group' or 'draw', got {self.id_scope!r}"
            )
        if not isinstance(self.columns, BookkeepingColumns):
            raise ConfigError(
                f"columns must be a BookkeepingColumns, got {type(self.columns).__name__}"
            )

    @property
    def is_bootstrap(self) -> bool:
        return self.kind == "bootstrapper"

    def with_seed(self, seed: int | None) -> ResampleConfig:
        """Return a copy of this configuration with a different seed."""
        return dataclasses.replace(self, seed=seed)


def _is_integer(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, (bool, np.bool_))


def normalize_group(group) -> Hashable | tuple[Hashable, ...] | None:
    """
    Bring a grouping argument into canonical form.

    A list names several columns and becomes a tuple of names (a
    one-element list collapses to its name). Anything else, including a
    tuple, is a single column label; a tuple label is wrapped as
    ``(label,)`` so that a tuple always means several names afterwards.
    """
    if group is None:
        return None
    if isinstance(group, list):
        if not group:
            raise ConfigError("group must name at least one column")
        for name in group:
            if not isinstance(name, Hashable):
                raise ConfigError(f"group column names must be hashable, got {name!r}")
        if len(group) == 1 and not isinstance(group[0], tuple):
            return group[0]
        return tuple(group)
    if not isinstance(group, Hashable):
        raise ConfigError(f"group must be a column name or list of names, got {group!r}")
    if isinstance(group, tuple):
        return (group,)
    return group
