"""
test_assemble.py
----------------

Tests for output assembly from fixed selections (no randomness involved).
"""

import numpy as np
import pandas as pd
import pytest

from redraw.config import BookkeepingColumns
from redraw.engine.assemble import assemble, block_copies, block_ids
from redraw.engine.draw import Selection


@pytest.fixture
def frame():
    return pd.DataFrame({"name": ["p", "q", "r", "s"], "score": [10, 20, 30, 40]})


@pytest.fixture
def selections():
    return [
        Selection(1, "g1", np.array([0, 0, 1])),
        Selection(1, "g2", np.array([3, 2])),
        Selection(2, "g1", np.array([1, 1, 1])),
        Selection(2, "g2", np.array([2, 3])),
    ]


class TestAssemble:
    def test_column_order(self, frame, selections):
        out = assemble(frame, selections)
        assert list(out.columns) == ["name", "score", ".draw", ".id", ".original_id", ".row"]

    def test_column_order_with_copies(self, frame, selections):
        out = assemble(frame, selections, copies=True)
        assert list(out.columns)[-1] == ".copies"

    def test_rows_copied_verbatim(self, frame, selections):
        out = assemble(frame, selections)
        assert out["name"].tolist() == ["p", "p", "q", "s", "r", "q", "q", "q", "r", "s"]
        assert out["score"].tolist() == [10, 10, 20, 40, 30, 20, 20, 20, 30, 40]

    def test_bookkeeping_values(self, frame, selections):
        out = assemble(frame, selections)
        assert out[".draw"].tolist() == [1, 1, 1, 1, 1, 2, 2, 2, 2, 2]
        assert out[".id"].tolist() == [1, 2, 3, 1, 2, 1, 2, 3, 1, 2]
        assert out[".original_id"].tolist() == [1, 1, 2, 4, 3, 2, 2, 2, 3, 4]
        assert out[".row"].tolist() == list(range(1, 11))

    def test_bookkeeping_dtypes(self, frame, selections):
        out = assemble(frame, selections, copies=True)
        for column in [".draw", ".id", ".original_id", ".row", ".copies"]:
            assert out[column].dtype == np.int64

    def test_copies_per_draw_and_group(self, frame, selections):
        out = assemble(frame, selections, copies=True)
        assert out[".copies"].tolist() == [2, 2, 1, 1, 1, 3, 3, 3, 1, 1]

    def test_id_scope_draw(self, frame, selections):
        out = assemble(frame, selections, id_scope="draw")
        assert out[".id"].tolist() == [1, 2, 3, 4, 5, 1, 2, 3, 4, 5]

    def test_fresh_index(self, selections):
        frame = pd.DataFrame({"v": range(4)}, index=["a", "b", "c", "d"])
        out = assemble(frame, selections)
        assert isinstance(out.index, pd.RangeIndex)
        assert out["v"].tolist()[:3] == [0, 0, 1]

    def test_custom_column_names(self, frame, selections):
        names = BookkeepingColumns(draw="frame", id="i", original_id="src", row="n", copies="k")
        out = assemble(frame, selections, copies=True, columns=names)
        assert list(out.columns) == ["name", "score", "frame", "i", "src", "n", "k"]

    def test_clashing_columns_replaced(self, selections):
        frame = pd.DataFrame({".draw": [9, 9, 9, 9], "v": range(4)})
        with pytest.warns(UserWarning, match="replaced by bookkeeping"):
            out = assemble(frame, selections)
        assert list(out.columns) == ["v", ".draw", ".id", ".original_id", ".row"]
        assert out[".draw"].tolist()[0] == 1

    def test_no_selections(self, frame):
        out = assemble(frame, [], copies=True)
        assert len(out) == 0
        assert list(out.columns)[-5:] == [".draw", ".id", ".original_id", ".row", ".copies"]

    def test_empty_blocks_skipped(self, frame):
        selections = [
            Selection(1, "a", np.array([2])),
            Selection(1, "b", np.empty(0, dtype=np.intp)),
            Selection(2, "a", np.array([0])),
        ]
        out = assemble(frame, selections, copies=True)
        assert out[".id"].tolist() == [1, 1]
        assert out[".copies"].tolist() == [1, 1]
        assert out[".row"].tolist() == [1, 2]


def test_block_ids_restart_at_scope():
    ids = block_ids(np.array([2, 0, 3]), np.array([True, True, False]))
    assert ids.tolist() == [1, 2, 1, 2, 3]


def test_block_copies_counts_within_block():
    copies = block_copies([Selection(1, None, np.array([5, 5, 1])), Selection(2, None, np.array([5]))])
    assert copies.tolist() == [2, 2, 1, 1]
