# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

"""
Point + interval geometries for plotnine.

:func:`geom_pointinterval` draws a point estimate with one or more intervals
and maps the ``lower``, ``upper`` and ``width`` columns produced by
:func:`point_interval` by default.  Invoke ``python -m pointinterval`` for the
command line interface.
"""

from .data import DrawsEmptyError, mean_qi, median_qi, mode_hdi, point_interval
from .geoms import (
    GeomPointinterval,
    GeomSlabinterval,
    geom_pointinterval,
    geom_pointintervalh,
    geom_slabinterval,
    layer_geom_slabinterval,
)

__all__ = [
    "DrawsEmptyError",
    "GeomPointinterval",
    "GeomSlabinterval",
    "geom_pointinterval",
    "geom_pointintervalh",
    "geom_slabinterval",
    "layer_geom_slabinterval",
    "mean_qi",
    "median_qi",
    "mode_hdi",
    "point_interval",
]
