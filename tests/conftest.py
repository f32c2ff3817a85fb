import numpy as np
import pytest
import xarray as xr
import rioxarray as rxr  # noqa: F401
from rasterio.transform import Affine

from sharkprio.scoring import ScoringParams

CRS = "EPSG:32616"
RESOLUTION = 1000.0
ORIGIN = (500000.0, 1000000.0)


def build_layer(data, name="value", origin=ORIGIN, resolution=RESOLUTION, crs=CRS) -> xr.DataArray:
    """Build a (y, x) layer with cell centres on a north-up grid."""
    data = np.asarray(data, dtype="float64")
    height, width = data.shape
    x0, y0 = origin
    x = x0 + resolution * (np.arange(width) + 0.5)
    y = y0 - resolution * (np.arange(height) + 0.5)
    layer = xr.DataArray(data, coords={"y": y, "x": x}, dims=("y", "x"), name=name)
    layer = layer.rio.write_crs(crs)
    layer = layer.rio.write_transform(Affine.translation(x0, y0) * Affine.scale(resolution, -resolution))
    return layer.rio.write_nodata(np.nan, encoded=False)


@pytest.fixture
def make_layer():
    return build_layer


@pytest.fixture
def params() -> ScoringParams:
    return ScoringParams(alpha=1.0, beta=1.0, a=2.0, b=1000.0, c=2e5)
