import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Dict, Any, Optional, Union

import numpy as np
import rioxarray as rxr
import xarray as xr
from rio_cogeo.cogeo import cog_translate
from rio_cogeo.profiles import cog_profiles

logger = logging.getLogger(__name__)


def load_layer(path: Union[str, Path], name: Optional[str] = None) -> xr.DataArray:
    """Load a single band raster as a 2D (y, x) DataArray with nodata masked to NaN.

    Args:
        path: Path to the raster file.
        name: Name for the layer. Defaults to the file stem.

    Returns:
        xr.DataArray with dims (y, x).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raster not found: {path}")
    data = rxr.open_rasterio(path, masked=True)
    if "band" in data.dims:
        if data.sizes["band"] != 1:
            raise ValueError(f"Expected a single band raster, {path} has {data.sizes['band']} bands")
        data = data.squeeze("band", drop=True)
    data.name = name or path.stem
    return data


def load_layers(paths: Dict[str, Union[str, Path]]) -> xr.Dataset:
    """Load several single band rasters into one Dataset keyed by layer name.

    All layers must sit on the same grid.

    Raises:
        ValueError: If the layers do not share identical coordinates.
    """
    layers = []
    for name, path in paths.items():
        logger.info("Loading layer %s from %s", name, path)
        layers.append(load_layer(path, name=name))
    try:
        layers = xr.align(*layers, join="exact")
    except ValueError as e:
        raise ValueError(f"Layers are not on a common grid: {e}") from e
    return xr.merge(layers, compat="override")


def translate_to_cog(
    src_path: Path,
    dst_path: Path,
    profile: str = "deflate",
    profile_options: Optional[Dict[str, Any]] = None,
    **options: Any
) -> None:
    """Translates a raster to a Cloud Optimized GeoTIFF (COG).

    Args:
        src_path: Path to the source raster file.
        dst_path: Path to save the output COG file.
        profile: COG profile to use (e.g., "deflate", "zstd", "lzw").
                 See rio-cogeo documentation for available profiles.
        profile_options: Dictionary of options overriding the chosen profile.
        **options: Additional keyword arguments to pass to cog_translate.
    """
    dst_profile = cog_profiles.get(profile)
    if not dst_profile:
        raise ValueError(f"Unknown COG profile: {profile}. Available: {list(cog_profiles.keys())}")

    final_dst_profile = dst_profile.copy()
    final_dst_profile.update(profile_options or {})

    dst_path.parent.mkdir(parents=True, exist_ok=True)
    cog_translate(src_path, dst_path, final_dst_profile, quiet=True, **options)


def write_raster(
    array: xr.DataArray,
    path: Union[str, Path],
    cog: bool = False,
    cog_profile: str = "deflate",
) -> Path:
    """Write a 2D DataArray to a GeoTIFF, optionally as a COG.

    NaN is written as the nodata value.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    array = array.astype("float64").rio.write_nodata(np.nan, encoded=False)
    if not cog:
        array.rio.to_raster(path)
        logger.info("Wrote raster %s", path)
        return path

    with TemporaryDirectory() as tmp_dir:
        tmp_path = Path(tmp_dir) / path.name
        array.rio.to_raster(tmp_path)
        translate_to_cog(tmp_path, path, profile=cog_profile)
    logger.info("Wrote COG %s", path)
    return path
