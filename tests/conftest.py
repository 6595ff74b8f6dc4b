"""Pytest configuration for pointinterval tests."""
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def summary_df() -> pd.DataFrame:
    """Two groups, each with a 66% and a 95% interval."""
    return pd.DataFrame(
        {
            "i": ["a", "a", "b", "b"],
            "value": [1.0, 1.0, 2.0, 2.0],
            "lower": [0.5, 0.0, 1.5, 1.0],
            "upper": [1.5, 2.0, 2.5, 3.0],
            "width": [0.66, 0.95, 0.66, 0.95],
        }
    )


@pytest.fixture
def draws_df() -> pd.DataFrame:
    rng = np.random.default_rng(7)
    return pd.DataFrame(
        {
            "i": np.repeat(["a", "b"], 500),
            "u_tau": np.concatenate([rng.normal(0, 1, 500), rng.normal(3, 1, 500)]),
        }
    )
