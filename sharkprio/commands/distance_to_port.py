import logging
from pathlib import Path

import geopandas as gpd

from sharkprio.utils.logging_utils import setup_logging
from sharkprio.raster import load_layer, distance_to_points, write_raster


def generate_distance_to_port(
    ports_path: Path,
    template_path: Path,
    output_path: Path = Path("data/rasters/distance_to_port.tif"),
    mask_to_template: bool = True,
    cog: bool = False,
    verbose: bool = False,
) -> Path:
    """
    Generates a distance-to-port raster on the grid of a template raster.

    Args:
        ports_path: Vector file of port locations (points).
        template_path: Raster defining the output grid and CRS.
        output_path: Path to save the distance raster.
        mask_to_template: Leave cells that are missing in the template missing.
        cog: Write a Cloud Optimized GeoTIFF.
        verbose: Enable verbose logging.

    Returns:
        Path to the generated raster.

    Raises:
        FileNotFoundError: If input files are not found.
        ValueError: If the port file holds no point features.
    """
    setup_logging(verbose=verbose)
    logging.info("Creating distance to port dataset...")

    if not ports_path.exists():
        logging.error(f"Ports file not found: {ports_path}")
        raise FileNotFoundError(f"Ports file not found: {ports_path}")

    template = load_layer(template_path)
    ports_gdf = gpd.read_file(ports_path)
    logging.info("Loaded %d ports from %s", len(ports_gdf), ports_path)

    distance = distance_to_points(template, ports_gdf, name="distance_to_port")
    if mask_to_template:
        distance = distance.where(template.notnull().values)

    write_raster(distance, output_path, cog=cog)
    logging.info(f"Distance to port dataset created successfully: {output_path}")
    return output_path
