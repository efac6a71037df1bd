"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.
- **Pytest hooks**: project-wide customizations of pytest behavior.

Notes
-----
- Contributors should install the package in editable mode (`pip install -e .`)
  so that imports are resolved consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import string

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def letters():
    """26 rows lettered a-z with a numeric column."""
    return pd.DataFrame(
        {"letter": list(string.ascii_lowercase), "value": np.arange(26) * 1.5}
    )


@pytest.fixture
def four_rows():
    """Small frame for with-replacement and bootstrap scenarios."""
    return pd.DataFrame({"x": [1, 2, 3, 4], "y": ["w", "x", "y", "z"]})


@pytest.fixture
def typed():
    """113 rows in groups A (100), B (10), C (3), interleaved."""
    types = ["A"] * 100 + ["B"] * 10 + ["C"] * 3
    rng = np.random.RandomState(7)
    order = rng.permutation(len(types))
    return pd.DataFrame(
        {
            "type": [types[i] for i in order],
            "measure": rng.normal(size=len(types)),
        }
    )


@pytest.fixture
def restore_global_rng():
    """Put NumPy's global generator back after a test that seeds it."""
    state = np.random.get_state()
    yield
    np.random.set_state(state)
