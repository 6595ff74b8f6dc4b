# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import logging
from typing import Callable, Iterable

import numpy as np
import pandas as pd
from scipy.stats import gaussian_kde

logger = logging.getLogger(__name__)


class DrawsEmptyError(RuntimeError):
    """Raised when there are no draws to summarize."""


def read_draws(path: str) -> pd.DataFrame:
    """
    Load a CSV of sample draws, one draw per row.
    """
    df = pd.read_csv(path)
    if df.empty:
        raise DrawsEmptyError(f"Draws file {path} is empty.")
    logger.debug("Read %d draws from %s", len(df), path)
    return df


def mode(values: np.ndarray) -> float:
    """
    Location of the highest peak of a Gaussian kernel density estimate.
    """
    values = np.asarray(values, dtype=float)
    if np.ptp(values) == 0:
        return float(values[0])
    kde = gaussian_kde(values)
    grid = np.linspace(values.min(), values.max(), 2048)
    return float(grid[np.argmax(kde(grid))])


def qi(values: np.ndarray, width: float) -> tuple[float, float]:
    """
    Equal-tailed quantile interval containing ``width`` of the mass.
    """
    tail = (1 - width) / 2
    lower, upper = np.quantile(np.asarray(values, dtype=float), [tail, 1 - tail])
    return float(lower), float(upper)


def hdi(values: np.ndarray, width: float) -> tuple[float, float]:
    """
    Shortest interval containing ``width`` of the sorted draws.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    n = len(ordered)
    span = min(max(int(np.ceil(width * n)), 1), n)
    lengths = ordered[span - 1 :] - ordered[: n - span + 1]
    start = int(np.argmin(lengths))
    return float(ordered[start]), float(ordered[start + span - 1])


POINT_FUNCTIONS: dict[str, Callable[[np.ndarray], float]] = {
    "mean": lambda v: float(np.mean(v)),
    "median": lambda v: float(np.median(v)),
    "mode": mode,
}
INTERVAL_FUNCTIONS: dict[str, Callable[[np.ndarray, float], tuple[float, float]]] = {
    "qi": qi,
    "hdi": hdi,
}


def _check_widths(width: float | Iterable[float]) -> list[float]:
    widths = [float(width)] if np.isscalar(width) else [float(w) for w in width]
    if not widths:
        raise ValueError("At least one interval width is required.")
    for w in widths:
        if not 0 < w <= 1:
            raise ValueError(f"Interval widths must lie in (0, 1], got {w}.")
    return widths


def point_interval(
    draws: pd.DataFrame,
    value: str,
    *,
    by: Iterable[str] | None = None,
    width: float | Iterable[float] = (0.66, 0.95),
    point: str = "median",
    interval: str = "qi",
) -> pd.DataFrame:
    """
    Summarize the draws in column ``value`` into a point estimate and intervals.

    One row is returned per group of ``by`` and per requested width, with
    columns ``[*by, value, "lower", "upper", "width", "point", "interval"]``.
    These are the columns :func:`pointinterval.geom_pointinterval` maps by
    default.
    """
    if point not in POINT_FUNCTIONS:
        raise ValueError(f"Unknown point estimate {point!r}; expected one of {sorted(POINT_FUNCTIONS)}.")
    if interval not in INTERVAL_FUNCTIONS:
        raise ValueError(f"Unknown interval {interval!r}; expected one of {sorted(INTERVAL_FUNCTIONS)}.")
    if value not in draws.columns:
        raise ValueError(f"Column {value!r} not found in draws.")
    if draws.empty:
        raise DrawsEmptyError("No draws to summarize.")

    widths = _check_widths(width)
    group_cols = list(by or [])
    point_fn = POINT_FUNCTIONS[point]
    interval_fn = INTERVAL_FUNCTIONS[interval]

    if group_cols:
        groups = draws.groupby(group_cols, sort=True)
    else:
        groups = [((), draws)]

    rows: list[dict] = []
    for key, group in groups:
        values = group[value].dropna().to_numpy(dtype=float)
        if values.size == 0:
            continue
        keys = key if isinstance(key, tuple) else (key,)
        estimate = point_fn(values)
        for w in widths:
            lower, upper = interval_fn(values, w)
            row = dict(zip(group_cols, keys))
            row.update(
                {
                    value: estimate,
                    "lower": lower,
                    "upper": upper,
                    "width": w,
                    "point": point,
                    "interval": interval,
                }
            )
            rows.append(row)

    if not rows:
        raise DrawsEmptyError(f"Column {value!r} holds no usable draws.")

    summary = pd.DataFrame(rows, columns=[*group_cols, value, "lower", "upper", "width", "point", "interval"])
    logger.debug("Summarized %d draws into %d rows", len(draws), len(summary))
    return summary


def mean_qi(draws: pd.DataFrame, value: str, **kwargs) -> pd.DataFrame:
    return point_interval(draws, value, point="mean", interval="qi", **kwargs)


def median_qi(draws: pd.DataFrame, value: str, **kwargs) -> pd.DataFrame:
    return point_interval(draws, value, point="median", interval="qi", **kwargs)


def mode_hdi(draws: pd.DataFrame, value: str, **kwargs) -> pd.DataFrame:
    return point_interval(draws, value, point="mode", interval="hdi", **kwargs)
