"""
test_bootstrapper.py
--------------------

Tests for bootstrapper(): forced replacement, derived size and the
.copies multiplicity column.
"""

import numpy as np
import pandas.testing as pdt
import pytest

from redraw import ConfigError, bootstrapper


def assert_copies_law(out, block_columns):
    """Per block: .copies equals the occurrence count of .original_id."""
    for _, block in out.groupby(block_columns):
        counts = block[".original_id"].map(block[".original_id"].value_counts())
        assert (block[".copies"] == counts).all()
        once = block.drop_duplicates(".original_id")
        assert once[".copies"].sum() == len(block)


class TestBootstrapper:
    def test_four_rows_two_draws(self, four_rows):
        out = bootstrapper(times=2, seed=10)(four_rows)

        assert len(out) == 8
        assert out.groupby(".draw").size().tolist() == [4, 4]
        assert_copies_law(out, [".draw"])
        assert list(out.columns) == [
            "x", "y", ".draw", ".id", ".original_id", ".row", ".copies",
        ]

    def test_row_count_is_times_input(self, letters):
        out = bootstrapper(times=5, seed=1)(letters)
        assert len(out) == 5 * len(letters)

    def test_grouped_bootstrap_keeps_group_sizes(self, typed):
        out = bootstrapper(times=3, group="type", seed=2)(typed)
        assert len(out) == 3 * len(typed)
        counts = out.groupby([".draw", "type"]).size().unstack()
        assert (counts["A"] == 100).all()
        assert (counts["B"] == 10).all()
        assert (counts["C"] == 3).all()
        assert_copies_law(out, [".draw", "type"])

    def test_rows_stay_in_their_group(self, typed):
        out = bootstrapper(times=2, group="type", seed=2)(typed)
        source_type = typed["type"].to_numpy()[out[".original_id"].to_numpy() - 1]
        assert (source_type == out["type"].to_numpy()).all()

    def test_deterministic(self, typed):
        boot = bootstrapper(times=4, group="type", seed=99)
        pdt.assert_frame_equal(boot(typed), boot(typed))

    def test_seedless_deterministic(self, four_rows):
        boot = bootstrapper(times=3)
        first = boot(four_rows)
        np.random.random(3)
        pdt.assert_frame_equal(first, boot(four_rows))

    def test_copies_with_custom_name(self, four_rows):
        out = bootstrapper(times=1, seed=1, columns={"copies": "n"})(four_rows)
        assert "n" in out.columns
        assert ".copies" not in out.columns

    def test_is_bootstrap(self):
        boot = bootstrapper(times=2)
        assert boot.is_bootstrap
        assert boot.replace is True
        assert boot.size is None
        assert repr(boot) == "<Resampler bootstrapper: 2 draws>"


class TestBootstrapperConfig:
    def test_rejects_size(self):
        with pytest.raises(ConfigError, match="size cannot be set"):
            bootstrapper(times=2, size=4)

    def test_rejects_no_replacement(self):
        with pytest.raises(ConfigError, match="with replacement"):
            bootstrapper(times=2, replace=False)

    def test_rejects_bad_times(self):
        with pytest.raises(ConfigError):
            bootstrapper(times=0)
