import logging
from enum import StrEnum
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd
import geopandas as gpd
import xarray as xr
import rioxarray as rxr  # noqa: F401  registers the .rio accessor
from rasterio.features import rasterize
from scipy.spatial import cKDTree

logger = logging.getLogger(__name__)


def _cell_centres(grid: Union[xr.DataArray, xr.Dataset]) -> np.ndarray:
    xx, yy = np.meshgrid(grid["x"].values, grid["y"].values)
    return np.column_stack([xx.ravel(), yy.ravel()])


def _nearest_distance(grid_points: np.ndarray, feature_points: np.ndarray) -> np.ndarray:
    tree = cKDTree(feature_points)
    return tree.query(grid_points, k=1)[0]


def _like(template: xr.DataArray, data: np.ndarray, name: str) -> xr.DataArray:
    array = xr.DataArray(
        data,
        coords={"y": template["y"].values, "x": template["x"].values},
        dims=("y", "x"),
        name=name,
    )
    if template.rio.crs is not None:
        array = array.rio.write_crs(template.rio.crs)
    array = array.rio.write_transform(template.rio.transform())
    return array.rio.write_nodata(np.nan, encoded=False)


def raster_distance(source: xr.DataArray, name: str = "distance") -> xr.DataArray:
    """Distance from every cell to the nearest cell of ``source`` holding a value.

    Cells that hold a value get a distance of 0. Distances are between cell
    centres, in CRS units.

    Args:
        source: Raster whose non-missing cells are the targets (e.g. port locations).
        name: Name of the output layer.

    Returns:
        xr.DataArray of distances on the source grid.
    """
    source = source.transpose("y", "x")
    grid_points = _cell_centres(source)
    has_value = ~np.isnan(source.values.astype("float64").ravel())

    if not has_value.any():
        logger.warning("Source raster %s has no cells with a value; distances are all missing", source.name)
        distances = np.full(grid_points.shape[0], np.nan)
    else:
        logger.info("Calculating distances to %d source cells", int(has_value.sum()))
        distances = _nearest_distance(grid_points, grid_points[has_value])

    return _like(source, distances.reshape(source.shape), name)


def distance_to_points(
    template: xr.DataArray, points: gpd.GeoDataFrame, name: str = "distance_to_port"
) -> xr.DataArray:
    """Distance from each template cell centre to the nearest point.

    Args:
        template: Grid to calculate distances on.
        points: Point features (e.g. ports). Reprojected to the template CRS if needed.
        name: Name of the output layer.

    Raises:
        ValueError: If there are no points or any geometry is not a Point.
    """
    if points.empty:
        raise ValueError("No point features to calculate distances to")
    if not (points.geom_type == "Point").all():
        raise ValueError("All geometries must be of type Point")

    template_crs = template.rio.crs
    if template_crs is not None and points.crs is not None and points.crs != template_crs:
        logger.info("Reprojecting points from %s to %s", points.crs, template_crs)
        points = points.to_crs(template_crs)

    template = template.transpose("y", "x")
    feature_points = np.column_stack([points.geometry.x, points.geometry.y])
    logger.info("Calculating distances to %d points", len(feature_points))
    distances = _nearest_distance(_cell_centres(template), feature_points)
    return _like(template, distances.reshape(template.shape), name)


def reclassify(
    array: xr.DataArray,
    rules: Sequence[Tuple[float, float, float]],
    include_lowest: bool = False,
) -> xr.DataArray:
    """
    Replace values falling in ``(low, high]`` intervals with new values.

    Every rule is matched against the original values, so rules cannot chain.
    Where intervals overlap the later rule wins. Unmatched cells keep their value
    and missing cells stay missing.

    Args:
        array: Raster to reclassify.
        rules: ``(low, high, new)`` triples.
        include_lowest: Close the interval of the first rule on the left, ``[low, high]``.

    Returns:
        A float64 copy of ``array`` with the new values.
    """
    values = array.values.astype("float64")
    out = values.copy()
    for i, (low, high, new) in enumerate(rules):
        if low > high:
            raise ValueError(f"Rule {i} has low > high: ({low}, {high}, {new})")
        lower = values >= low if (include_lowest and i == 0) else values > low
        matched = lower & (values <= high)
        logger.debug("Rule (%s, %s] -> %s matched %d cells", low, high, new, int(matched.sum()))
        out[matched] = new
    return array.copy(data=out)


class ZonalStat(StrEnum):
    MEAN = "mean"
    SUM = "sum"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
    STD = "std"


def zonal_statistics(
    values: xr.DataArray,
    zones: xr.DataArray,
    stat: Union[ZonalStat, str] = ZonalStat.MEAN,
) -> pd.DataFrame:
    """
    Summarise ``values`` within each zone of ``zones``.

    Missing values are ignored; cells without a zone are dropped.

    Returns:
        DataFrame with a ``zone`` column and one column named after the statistic.
    """
    stat = ZonalStat(stat)
    try:
        values, zones = xr.align(values, zones, join="exact")
    except ValueError as e:
        raise ValueError(f"Values and zones are not on a common grid: {e}") from e

    frame = pd.DataFrame(
        {
            "zone": zones.transpose("y", "x").values.ravel(),
            "value": values.transpose("y", "x").values.ravel(),
        }
    ).dropna(subset=["zone"])

    summary = frame.groupby("zone")["value"].agg(stat.value)
    logger.info("Calculated zonal %s for %d zones", stat.value, len(summary))
    return summary.rename(stat.value).reset_index()


def rasterise_zones(
    zones: gpd.GeoDataFrame,
    template: xr.DataArray,
    column: str,
    all_touched: bool = False,
) -> xr.DataArray:
    """Burn a numeric attribute of zone polygons onto the template grid.

    Cells outside every polygon are NaN. Where polygons overlap the later one wins.
    """
    if column not in zones.columns:
        raise ValueError(f"Column '{column}' not found in zones")
    template_crs = template.rio.crs
    if template_crs is not None and zones.crs is not None and zones.crs != template_crs:
        zones = zones.to_crs(template_crs)

    template = template.transpose("y", "x")
    shapes = (
        (geom, float(value))
        for geom, value in zip(zones.geometry, zones[column])
        if geom is not None and not geom.is_empty
    )
    burned = rasterize(
        shapes,
        out_shape=template.shape,
        transform=template.rio.transform(),
        fill=np.nan,
        all_touched=all_touched,
        dtype="float64",
    )
    return _like(template, burned, column)
