# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

"""
plotnine geometries.  Each ``geom_*`` constructor returns an object that is
added to a plot with ``ggplot(...) + geom_*()``.
"""

from .geom_pointinterval import GeomPointinterval, geom_pointinterval, geom_pointintervalh
from .geom_slabinterval import GeomSlabinterval, geom_slabinterval, layer_geom_slabinterval

__all__ = [
    "GeomPointinterval",
    "GeomSlabinterval",
    "geom_pointinterval",
    "geom_pointintervalh",
    "geom_slabinterval",
    "layer_geom_slabinterval",
]
