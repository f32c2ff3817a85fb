# sharkprio/raster/__init__.py
from .io import load_layer, load_layers, write_raster, translate_to_cog
from .frame import raster_to_frame, frame_to_raster
from .processing import (
    raster_distance,
    distance_to_points,
    reclassify,
    zonal_statistics,
    rasterise_zones,
    ZonalStat,
)

__all__ = [
    "load_layer",
    "load_layers",
    "write_raster",
    "translate_to_cog",
    "raster_to_frame",
    "frame_to_raster",
    "raster_distance",
    "distance_to_points",
    "reclassify",
    "zonal_statistics",
    "rasterise_zones",
    "ZonalStat",
]
