# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

"""
Point + multiple interval layers with defaults suited to ``point_interval`` output.

``geom_pointinterval`` behaves as if its default mapping were
``aes(ymin="lower", ymax="upper", size="-width")``, so summaries produced by
:func:`pointinterval.data.median_qi` and friends plot without any mapping
beyond ``x`` and ``y``.  Wider intervals get thinner lines.
"""

from __future__ import annotations

from typing import Any, Mapping

import pandas as pd

from ..utils import defaults
from .geom_slabinterval import GeomSlabinterval, layer_geom_slabinterval

DEFAULT_MAPPING = {"ymin": "lower", "ymax": "upper", "size": "-width"}
DEFAULT_MAPPING_H = {"xmin": "lower", "xmax": "upper", "size": "-width"}

# Stands in for the size-legend-hidden default so that an explicit None is kept
_HIDE_SIZE_LEGEND = object()


class GeomPointinterval(GeomSlabinterval):
    """
    Slab/interval geometry drawing only the point and interval.
    """

    DEFAULT_AES = defaults({"datatype": "interval"}, GeomSlabinterval.DEFAULT_AES)
    DEFAULT_KEY_AES = defaults({"fill": None}, GeomSlabinterval.DEFAULT_KEY_AES)
    DEFAULT_PARAMS = defaults(
        {
            "side": "both",
            "orientation": "vertical",
            "show_slab": False,
        },
        GeomSlabinterval.DEFAULT_PARAMS,
    )
    DEFAULT_DATATYPE = "interval"


def geom_pointinterval(
    mapping: Mapping[str, Any] | None = None,
    data: pd.DataFrame | None = None,
    stat: str = "identity",
    position: str = "identity",
    *,
    side: str = "both",
    orientation: str = "vertical",
    show_slab: bool = False,
    show_legend: Any = _HIDE_SIZE_LEGEND,
    **kwargs: Any,
) -> GeomPointinterval:
    """
    Point + interval layer for data with ``lower``, ``upper`` and ``width`` columns.

    Parameters
    ----------
    mapping
        Aesthetic mapping; entries win over the default mapping.
    data
        Layer data.  Defaults to the plot data.
    stat, position
        Statistical transform and position adjustment.  Use
        ``position_dodge(width=...)`` to separate overlapping intervals.
    side, orientation, show_slab
        Forwarded to :class:`GeomPointinterval`.
    show_legend
        Defaults to hiding the size legend only.  ``None`` shows legends for
        mapped aesthetics, as elsewhere in plotnine.
    **kwargs
        Any other aesthetic value or parameter of :class:`GeomSlabinterval`.
    """
    if show_legend is _HIDE_SIZE_LEGEND:
        show_legend = {"size": False}
    return layer_geom_slabinterval(
        mapping,
        data,
        stat,
        GeomPointinterval,
        position,
        default_mapping=DEFAULT_MAPPING,
        show_legend=show_legend,
        side=side,
        orientation=orientation,
        show_slab=show_slab,
        datatype="interval",
        **kwargs,
    )


def geom_pointintervalh(
    mapping: Mapping[str, Any] | None = None,
    data: pd.DataFrame | None = None,
    stat: str = "identity",
    position: str = "identity",
    *,
    side: str = "both",
    orientation: str = "horizontal",
    show_slab: bool = False,
    show_legend: Any = _HIDE_SIZE_LEGEND,
    **kwargs: Any,
) -> GeomPointinterval:
    """
    Horizontal :func:`geom_pointinterval`, mapping the bounds onto ``xmin`` / ``xmax``.
    """
    if show_legend is _HIDE_SIZE_LEGEND:
        show_legend = {"size": False}
    return layer_geom_slabinterval(
        mapping,
        data,
        stat,
        GeomPointinterval,
        position,
        default_mapping=DEFAULT_MAPPING_H,
        show_legend=show_legend,
        side=side,
        orientation=orientation,
        show_slab=show_slab,
        datatype="interval",
        **kwargs,
    )
