# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

"""
General slab + interval geometry for plotnine.

Rows tagged ``datatype == "interval"`` are drawn as a line between the
interval bounds plus a point at ``(x, y)``.  Rows tagged ``"slab"`` are drawn
as a filled region whose extent comes from the ``thickness`` aesthetic.
"""

from __future__ import annotations

import logging
from copy import copy
from typing import Any, Mapping

import matplotlib.lines as mlines
import numpy as np
import pandas as pd
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgba
from matplotlib.patches import Rectangle
from plotnine import aes, coord_flip
from plotnine.exceptions import PlotnineError
from plotnine.geoms.geom import geom

from ..utils import defaults

logger = logging.getLogger(__name__)

SIZE_FACTOR = np.sqrt(np.pi)

# Direction of the slab relative to the group position
SIDES = {
    "top": 1,
    "right": 1,
    "topright": 1,
    "bottom": -1,
    "left": -1,
    "bottomleft": -1,
    "both": 0,
}
ORIENTATIONS = ("vertical", "horizontal")
NORMALIZATIONS = ("all", "groups", "none")


def _to_rgba(colors, alphas) -> list[tuple[float, float, float, float]]:
    out = []
    for color, alpha in zip(colors, alphas):
        if color is None or (isinstance(color, float) and np.isnan(color)):
            out.append((0.0, 0.0, 0.0, 0.0))
            continue
        out.append(to_rgba(color, None if pd.isna(alpha) else float(alpha)))
    return out


def interval_columns(orientation: str) -> tuple[str, str]:
    """
    Names of the lower / upper bound aesthetics for an orientation.
    """
    if orientation == "horizontal":
        return "xmin", "xmax"
    return "ymin", "ymax"


class GeomSlabinterval(geom):
    """
    Slab (density region) plus point and interval.

    Parameters such as ``side``, ``orientation`` and ``show_slab`` are read
    from ``DEFAULT_PARAMS`` and may be overridden per layer.
    """

    DEFAULT_AES = {
        "color": "black",
        "fill": "gray",
        "alpha": 1,
        "size": 1,
        "stroke": 0.5,
        "shape": "o",
        "linetype": "solid",
        "thickness": None,
        "slab_color": None,
        "slab_alpha": None,
        "datatype": "slab",
    }
    DEFAULT_KEY_AES = {
        "fill": "gray",
        "size": 1,
    }
    REQUIRED_AES = {"x", "y"}
    DEFAULT_PARAMS = {
        "stat": "identity",
        "position": "identity",
        "na_rm": False,
        "inherit_aes": True,
        "side": "topright",
        "orientation": "vertical",
        "scale": 0.9,
        "normalize": "all",
        "fatten_point": 1.8,
        "show_slab": True,
        "show_point": True,
        "show_interval": True,
    }
    DEFAULT_DATATYPE = "slab"

    # Mapping keys filled in from a constructor's default mapping
    _default_mapping_keys: frozenset[str] = frozenset()

    def __init__(self, mapping=None, data=None, **kwargs: Any):
        super().__init__(mapping, data, **kwargs)
        side = self.params["side"]
        if side not in SIDES:
            raise PlotnineError(f"side must be one of {sorted(SIDES)}, got {side!r}")
        orientation = self.params["orientation"]
        if orientation not in ORIENTATIONS:
            raise PlotnineError(f"orientation must be one of {ORIENTATIONS}, got {orientation!r}")
        normalize = self.params["normalize"]
        if normalize not in NORMALIZATIONS:
            raise PlotnineError(f"normalize must be one of {NORMALIZATIONS}, got {normalize!r}")

    def __radd__(self, other):
        # Plot-level mappings beat this layer's defaults, not its explicit mappings
        plot_mapping = getattr(other, "mapping", None) or {}
        shadowed = self._default_mapping_keys & set(plot_mapping) if self.params["inherit_aes"] else set()
        if not shadowed:
            return super().__radd__(other)

        logger.debug("Plot mapping overrides default aesthetics %s", sorted(shadowed))
        layer_geom = copy(self)
        layer_geom.mapping = aes(**{ae: value for ae, value in self.mapping.items() if ae not in shadowed})
        layer_geom._default_mapping_keys = self._default_mapping_keys - shadowed
        return super(GeomSlabinterval, layer_geom).__radd__(other)

    def draw_panel(self, data: pd.DataFrame, panel_params, coord, ax, *args, **kwargs):
        # plotnine hands the layer params positionally or as keywords depending
        # on the release; self.params is the same table.
        params = self.params
        vertical = params["orientation"] == "vertical"
        draw_vertical = vertical != isinstance(coord, coord_flip)

        datatype = data["datatype"]
        slabs = data[datatype == "slab"].reset_index(drop=True)
        intervals = data[datatype == "interval"].reset_index(drop=True)

        if params["show_slab"] and len(slabs):
            self._draw_slabs(slabs, panel_params, coord, ax, params, vertical, draw_vertical)

        if len(intervals) and (params["show_interval"] or params["show_point"]):
            lower, upper = interval_columns(params["orientation"])
            missing = sorted({lower, upper} - set(intervals.columns))
            if missing:
                raise PlotnineError(f"{type(self).__name__} requires the following missing aesthetics: {', '.join(missing)}")

            intervals = coord.transform(intervals, panel_params)
            if params["show_interval"]:
                _draw_intervals(intervals, ax, params, draw_vertical)
            if params["show_point"]:
                _draw_points(intervals, ax, params)

    def _draw_slabs(self, data, panel_params, coord, ax, params, vertical, draw_vertical):
        if "thickness" not in data or data["thickness"].isna().all():
            raise PlotnineError(f"{type(self).__name__} needs a thickness aesthetic to draw slabs")

        thickness = data["thickness"].astype(float)
        if params["normalize"] == "all":
            thickness = thickness / thickness.max()
        elif params["normalize"] == "groups":
            thickness = thickness / thickness.groupby(data["group"]).transform("max")

        pos = "x" if vertical else "y"
        extent = thickness * params["scale"]
        direction = SIDES[params["side"]]
        if direction == 0:
            low, high = data[pos] - extent / 2, data[pos] + extent / 2
        else:
            low, high = data[pos], data[pos] + direction * extent

        data = data.assign(**{f"{pos}min": low, f"{pos}max": high})
        data = coord.transform(data, panel_params)

        zorder = params.get("zorder", 1)
        for _, gdata in data.groupby("group"):
            first = gdata.iloc[0]
            alpha = first["slab_alpha"] if pd.notna(first["slab_alpha"]) else first["alpha"]
            facecolor = _to_rgba([first["fill"]], [alpha])[0]
            edgecolor = first["slab_color"] if pd.notna(first["slab_color"]) else "none"
            if draw_vertical:
                gdata = gdata.sort_values("y")
                ax.fill_betweenx(
                    gdata["y"], gdata["xmin"], gdata["xmax"], facecolor=facecolor, edgecolor=edgecolor, zorder=zorder
                )
            else:
                gdata = gdata.sort_values("x")
                ax.fill_between(
                    gdata["x"], gdata["ymin"], gdata["ymax"], facecolor=facecolor, edgecolor=edgecolor, zorder=zorder
                )

    @staticmethod
    def draw_legend(data: pd.Series, da, lyr):
        """
        Draw a slab swatch, an interval line and a point into the key.
        """
        key_geom = lyr.geom
        params = key_geom.params
        data = data.copy()
        for ae, value in key_geom.DEFAULT_KEY_AES.items():
            if value is None or pd.isna(data.get(ae)):
                data[ae] = value

        color = _to_rgba([data["color"]], [data["alpha"]])[0]
        vertical = params["orientation"] == "vertical"

        if params["show_slab"] and pd.notna(data["fill"]):
            slab = Rectangle(
                (0, 0),
                da.width,
                da.height,
                facecolor=_to_rgba([data["fill"]], [data["alpha"]])[0],
                edgecolor="none",
            )
            da.add_artist(slab)

        if params["show_interval"]:
            if vertical:
                x, y = [0.5 * da.width] * 2, [0, da.height]
            else:
                x, y = [0, da.width], [0.5 * da.height] * 2
            line = mlines.Line2D(
                x,
                y,
                linestyle=data["linetype"],
                linewidth=data["size"] * SIZE_FACTOR,
                color=color,
                solid_capstyle="butt",
            )
            da.add_artist(line)

        if params["show_point"]:
            point = mlines.Line2D(
                [0.5 * da.width],
                [0.5 * da.height],
                marker=data["shape"],
                markersize=(data["size"] * params["fatten_point"] + data["stroke"]) * SIZE_FACTOR,
                markerfacecolor=color,
                markeredgecolor=color,
                markeredgewidth=data["stroke"],
                linestyle="none",
            )
            da.add_artist(point)
        return da


def _draw_intervals(data: pd.DataFrame, ax, params: Mapping[str, Any], draw_vertical: bool) -> None:
    if draw_vertical:
        segments = [[(x, lo), (x, hi)] for x, lo, hi in zip(data["x"], data["ymin"], data["ymax"])]
    else:
        segments = [[(lo, y), (hi, y)] for y, lo, hi in zip(data["y"], data["xmin"], data["xmax"])]

    lines = LineCollection(
        segments,
        colors=_to_rgba(data["color"], data["alpha"]),
        linewidths=(data["size"] * SIZE_FACTOR).to_numpy(),
        linestyles=data["linetype"].tolist(),
        capstyle="butt",
        zorder=params.get("zorder", 1),
        rasterized=params.get("raster", False),
    )
    ax.add_collection(lines)


def _draw_points(data: pd.DataFrame, ax, params: Mapping[str, Any]) -> None:
    for shape, sdata in data.groupby("shape", sort=False):
        color = _to_rgba(sdata["color"], sdata["alpha"])
        size = ((sdata["size"] * params["fatten_point"] + sdata["stroke"]) ** 2) * np.pi
        ax.scatter(
            x=sdata["x"],
            y=sdata["y"],
            s=size,
            facecolor=color,
            edgecolor=color,
            linewidth=sdata["stroke"],
            marker=shape,
            zorder=params.get("zorder", 1) + 0.1,
            rasterized=params.get("raster", False),
        )


def layer_geom_slabinterval(
    mapping: Mapping[str, Any] | None = None,
    data: pd.DataFrame | None = None,
    stat: str = "identity",
    geom: type[GeomSlabinterval] = GeomSlabinterval,
    position: str = "identity",
    *,
    default_mapping: Mapping[str, Any] | None = None,
    show_legend: bool | dict[str, bool] | None = None,
    **params: Any,
) -> GeomSlabinterval:
    """
    Build a slab/interval layer, filling unmapped aesthetics from ``default_mapping``.

    The result is added to a plot with ``ggplot(...) + layer``.
    """
    user_mapping = dict(mapping or {})
    merged = defaults(user_mapping, default_mapping)
    layer_geom = geom(
        aes(**merged),
        data,
        stat=stat,
        position=position,
        show_legend=show_legend,
        **params,
    )
    layer_geom._default_mapping_keys = frozenset(merged) - frozenset(user_mapping)
    return layer_geom


def geom_slabinterval(
    mapping: Mapping[str, Any] | None = None,
    data: pd.DataFrame | None = None,
    stat: str = "identity",
    position: str = "identity",
    *,
    show_legend: bool | dict[str, bool] | None = None,
    **kwargs: Any,
) -> GeomSlabinterval:
    """
    Slab + point + interval layer with no default mapping.
    """
    return layer_geom_slabinterval(
        mapping,
        data,
        stat,
        GeomSlabinterval,
        position,
        show_legend=show_legend,
        **kwargs,
    )
