"""Tests for point + interval summaries of sample draws."""

import numpy as np
import pandas as pd
import pytest

from pointinterval import DrawsEmptyError, mean_qi, median_qi, mode_hdi, point_interval
from pointinterval.data import hdi, mode, qi, read_draws


def test_qi_bounds():
    lower, upper = qi(np.arange(101), 0.9)
    assert lower == pytest.approx(5)
    assert upper == pytest.approx(95)


def test_hdi_is_shortest_interval():
    values = np.array([0, 0, 0, 0, 1, 2, 10, 20, 50, 100])
    assert hdi(values, 0.5) == (0.0, 1.0)


def test_hdi_full_width_covers_everything():
    values = np.array([3.0, -1.0, 7.0])
    assert hdi(values, 1.0) == (-1.0, 7.0)


def test_mode_of_normal_draws():
    draws = np.random.default_rng(1).normal(size=4000)
    assert mode(draws) == pytest.approx(0, abs=0.3)


def test_mode_of_constant_draws():
    assert mode(np.full(10, 2.5)) == 2.5


def test_point_interval_columns_and_rows(draws_df):
    summary = median_qi(draws_df, "u_tau", by=["i"])
    assert list(summary.columns) == ["i", "u_tau", "lower", "upper", "width", "point", "interval"]
    assert summary["i"].tolist() == ["a", "a", "b", "b"]
    assert summary["width"].tolist() == [0.66, 0.95, 0.66, 0.95]
    assert (summary["point"] == "median").all()
    assert (summary["interval"] == "qi").all()


def test_wider_interval_contains_narrower(draws_df):
    summary = mean_qi(draws_df, "u_tau", by=["i"])
    for _, group in summary.groupby("i"):
        narrow, wide = group.iloc[0], group.iloc[1]
        assert wide["lower"] <= narrow["lower"] <= narrow["u_tau"] <= narrow["upper"] <= wide["upper"]


def test_point_estimates_per_group(draws_df):
    summary = mean_qi(draws_df, "u_tau", by=["i"], width=0.95)
    expected = draws_df.groupby("i")["u_tau"].mean()
    assert summary.set_index("i")["u_tau"].to_dict() == pytest.approx(expected.to_dict())


def test_ungrouped_summary(draws_df):
    summary = mode_hdi(draws_df, "u_tau", width=[0.5, 0.8, 0.95])
    assert list(summary.columns) == ["u_tau", "lower", "upper", "width", "point", "interval"]
    assert len(summary) == 3
    assert (summary["interval"] == "hdi").all()


def test_missing_values_are_dropped():
    draws = pd.DataFrame({"v": [1.0, np.nan, 3.0]})
    summary = point_interval(draws, "v", point="mean", width=1.0)
    assert summary["v"].iloc[0] == 2.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"point": "max"},
        {"interval": "eti"},
        {"width": 1.5},
        {"width": 0},
        {"width": []},
    ],
)
def test_invalid_arguments(draws_df, kwargs):
    with pytest.raises(ValueError):
        point_interval(draws_df, "u_tau", **kwargs)


def test_unknown_column(draws_df):
    with pytest.raises(ValueError):
        point_interval(draws_df, "missing")


def test_empty_draws():
    with pytest.raises(DrawsEmptyError):
        point_interval(pd.DataFrame({"v": []}), "v")


def test_all_missing_draws():
    with pytest.raises(DrawsEmptyError):
        point_interval(pd.DataFrame({"v": [np.nan, np.nan]}), "v")


def test_read_draws_rejects_header_only_file(tmp_path):
    path = tmp_path / "draws.csv"
    path.write_text("i,u_tau\n")
    with pytest.raises(DrawsEmptyError):
        read_draws(str(path))


def test_rows_ordered_by_group_then_requested_width(draws_df):
    summary = median_qi(draws_df, "u_tau", by=["i"], width=[0.95, 0.5, 0.8])
    assert list(zip(summary["i"], summary["width"])) == [
        ("a", 0.95),
        ("a", 0.5),
        ("a", 0.8),
        ("b", 0.95),
        ("b", 0.5),
        ("b", 0.8),
    ]
