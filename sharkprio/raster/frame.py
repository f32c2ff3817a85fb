"""
Conversion between gridded layers and cell tables.

A cell is identified by its 0-based position in the row-major flattening of
the (y, x) grid as stored, so ``cell_id = row * width + col``. Writing a
cell table back onto the same grid puts every value in the cell it came from.
"""

import logging
from typing import Union

import numpy as np
import pandas as pd
import xarray as xr
import rioxarray as rxr  # noqa: F401  registers the .rio accessor

logger = logging.getLogger(__name__)

CELL_ID = "cell_id"


def _grid_shape(grid: Union[xr.DataArray, xr.Dataset]) -> tuple:
    if "y" not in grid.dims or "x" not in grid.dims:
        raise ValueError(f"Expected a grid with 'y' and 'x' dimensions, got {tuple(grid.dims)}")
    return grid.sizes["y"], grid.sizes["x"]


def raster_to_frame(
    dataset: Union[xr.Dataset, xr.DataArray], dropna: bool = False
) -> pd.DataFrame:
    """
    Flatten gridded layers into a table with one row per cell.

    Args:
        dataset: Layers on a shared (y, x) grid. A DataArray is treated as a single layer.
        dropna: Drop cells where every layer is missing.

    Returns:
        DataFrame indexed by ``cell_id`` with ``x`` and ``y`` cell centres and one
        column per layer.
    """
    if isinstance(dataset, xr.DataArray):
        dataset = dataset.to_dataset(name=dataset.name or "value")
    height, width = _grid_shape(dataset)

    xx, yy = np.meshgrid(dataset["x"].values, dataset["y"].values)
    columns = {"x": xx.ravel(), "y": yy.ravel()}
    for name in dataset.data_vars:
        layer = dataset[name]
        if layer.dims != ("y", "x"):
            layer = layer.squeeze(drop=True).transpose("y", "x")
        columns[str(name)] = layer.values.ravel()

    frame = pd.DataFrame(columns, index=pd.RangeIndex(height * width, name=CELL_ID))
    if dropna:
        layer_columns = [str(name) for name in dataset.data_vars]
        frame = frame.dropna(subset=layer_columns, how="all")
    logger.debug("Flattened %d x %d grid into %d cells", height, width, len(frame))
    return frame


def frame_to_raster(
    values: pd.Series,
    template: Union[xr.DataArray, xr.Dataset],
    name: str = None,
) -> xr.DataArray:
    """
    Place cell values back onto the template grid.

    Cells not present in ``values`` (or holding a missing value) are NaN.

    Args:
        values: Series indexed by ``cell_id``.
        template: Grid the cell identifiers refer to.
        name: Name of the output layer. Defaults to the Series name.

    Returns:
        float64 DataArray with dims (y, x), the template's coordinates and CRS.

    Raises:
        ValueError: If any cell identifier falls outside the grid.
    """
    height, width = _grid_shape(template)
    n_cells = height * width

    cell_ids = np.asarray(values.index, dtype=np.int64)
    if len(cell_ids) and (cell_ids.min() < 0 or cell_ids.max() >= n_cells):
        raise ValueError(f"Cell identifiers out of range for a grid of {n_cells} cells")

    flat = np.full(n_cells, np.nan, dtype=np.float64)
    flat[cell_ids] = values.to_numpy(dtype=np.float64, na_value=np.nan)

    array = xr.DataArray(
        flat.reshape(height, width),
        coords={"y": template["y"].values, "x": template["x"].values},
        dims=("y", "x"),
        name=name or values.name,
    )
    crs = template.rio.crs
    if crs is not None:
        array = array.rio.write_crs(crs)
    array = array.rio.write_transform(template.rio.transform())
    return array.rio.write_nodata(np.nan, encoded=False)
