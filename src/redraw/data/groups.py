"""
groups.py
---------

Partitioning of input rows into independently resampled groups.

defines:
- Partition: group keys and the positional row indices of each group
- resolve(): build a Partition from an explicit column, an external
  grouping, or neither
- unwrap(): split a pandas groupby into its frame and grouping

Precedence
----------
1. explicit ``group`` column(s) from the generator configuration
2. ``external`` grouping: column name(s) given at call time, or a
   ``DataFrameGroupBy`` the data arrived as
3. a single group holding every row

Column-based groups are ordered by first appearance. Missing values
form a group of their own.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np
import pandas as pd
from pandas.core.groupby import DataFrameGroupBy

from redraw.errors import InputError

GroupSpec = Union[Hashable, Sequence[Hashable]]


@dataclass(frozen=True, eq=False)
class Partition:
    """
    Mapping from group key to the rows of that group.

    Attributes
    ----------
    keys : tuple
        Group keys in iteration order. The implicit single group has key
        None; multi-column groups have tuple keys.
    indices : tuple of np.ndarray
        0-based positional row indices of each group, ascending.
    grouped : bool
        False for the implicit single group.
    """

    keys: tuple
    indices: tuple[np.ndarray, ...]
    grouped: bool = True

    def __len__(self) -> int:
        return len(self.keys)

    def __iter__(self) -> Iterator[tuple[Hashable, np.ndarray]]:
        return iter(zip(self.keys, self.indices))

    @property
    def sizes(self) -> tuple[int, ...]:
        """Number of rows in each group."""
        return tuple(len(idx) for idx in self.indices)

    @property
    def n_rows(self) -> int:
        """Total number of rows covered by the partition."""
        return sum(self.sizes)

    @classmethod
    def single(cls, n_rows: int) -> Partition:
        """Partition with one group holding rows 0..n_rows-1."""
        return cls(keys=(None,), indices=(np.arange(n_rows, dtype=np.intp),), grouped=False)


def unwrap(data) -> tuple[pd.DataFrame, DataFrameGroupBy | None]:
    """
    Separate a dataset from a grouping it may carry.

    Parameters
    ----------
    data : pd.DataFrame or DataFrameGroupBy

    Returns
    -------
    frame : pd.DataFrame
    grouping : DataFrameGroupBy | None
    """
    if isinstance(data, DataFrameGroupBy):
        return data.obj, data
    if isinstance(data, pd.DataFrame):
        return data, None
    raise InputError(
        f"data must be a pandas DataFrame or DataFrameGroupBy, got {type(data).__name__}"
    )


def resolve(
    data: pd.DataFrame,
    group: GroupSpec | None = None,
    external: GroupSpec | DataFrameGroupBy | None = None,
) -> Partition:
    """
    Partition the rows of ``data``.

    Parameters
    ----------
    data : pd.DataFrame
        Input dataset.
    group : column label or tuple of labels, optional
        Explicit grouping; takes precedence over ``external``. Expected in
        the form produced by ``redraw.config.normalize_group``: a tuple
        names several columns, so a tuple column label arrives wrapped as
        ``(label,)``.
    external : column label(s) or DataFrameGroupBy, optional
        Grouping supplied with the data, in the same form as ``group``.

    Returns
    -------
    Partition
        Every row of ``data`` appears in exactly one group.

    Raises
    ------
    InputError
        If a referenced column does not exist, or a groupby leaves rows
        out of its groups.
    """
    if group is not None:
        return _by_columns(data, group)
    if isinstance(external, DataFrameGroupBy):
        return _from_groupby(data, external)
    if external is not None:
        return _by_columns(data, external)
    return Partition.single(len(data))


def _column_list(group: GroupSpec) -> list[Hashable]:
    if isinstance(group, (list, tuple)):
        return list(group)
    return [group]


def _by_columns(data: pd.DataFrame, group: GroupSpec) -> Partition:
    columns = _column_list(group)
    missing = [c for c in columns if c not in data.columns]
    if missing:
        raise InputError(
            f"group column(s) not found in data: {missing}; "
            f"available columns are {list(data.columns)}",
            columns=[str(c) for c in missing],
        )

    if len(data) == 0:
        return Partition(keys=(), indices=())

    # sort=False numbers groups in order of first appearance
    codes = (
        data.groupby(columns, sort=False, dropna=False, observed=True)
        .ngroup()
        .to_numpy(dtype=np.intp)
    )
    return _partition_from_codes(data, columns, codes)


def _partition_from_codes(
    data: pd.DataFrame, columns: list[Hashable], codes: np.ndarray
) -> Partition:
    order = np.argsort(codes, kind="stable")
    boundaries = np.flatnonzero(np.diff(codes[order])) + 1
    indices = tuple(np.split(order, boundaries))

    values = data[columns]
    keys = []
    for idx in indices:
        first = values.iloc[idx[0]]
        keys.append(first.iloc[0] if len(columns) == 1 else tuple(first))
    return Partition(keys=tuple(keys), indices=indices)


def _from_groupby(data: pd.DataFrame, grouping: DataFrameGroupBy) -> Partition:
    numbers = grouping.ngroup()
    if len(numbers) != len(data):
        raise InputError("grouping does not match the rows of the data")
    if numbers.isna().any() or (numbers < 0).any():
        raise InputError(
            "grouped input leaves rows without a group (missing group keys "
            "with dropna=True); group with dropna=False to keep them"
        )
    if len(data) == 0:
        return Partition(keys=(), indices=())

    codes = numbers.to_numpy(dtype=np.intp)
    # .indices only lists groups that own rows; order them the way the
    # groupby numbers them
    groups = [
        (key, np.sort(np.asarray(idx, dtype=np.intp)))
        for key, idx in grouping.indices.items()
        if len(idx)
    ]
    groups.sort(key=lambda item: codes[item[1][0]])
    return Partition(
        keys=tuple(key for key, _ in groups),
        indices=tuple(idx for _, idx in groups),
    )
