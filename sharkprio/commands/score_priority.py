import logging
from pathlib import Path
from typing import Dict, Optional

from sharkprio.utils.logging_utils import setup_logging
from sharkprio.utils.io import load_config, load_scoring_params, layer_paths
from sharkprio.raster import load_layers, raster_to_frame, frame_to_raster, write_raster
from sharkprio.scoring import score_cells, ScoreStatus
from sharkprio.scoring.core import DISTANCE_COLUMN, ZONE_COLUMN


def score_priority(
    config_path: Optional[Path] = None,
    output_dir: Path = Path("outputs/priority"),
    target_zone: Optional[float] = None,
    zone_path: Optional[Path] = None,
    base_dir: Optional[Path] = None,
    cog: bool = False,
    verbose: bool = False,
) -> Dict[str, Path]:
    """
    Scores every cell of a zone for conservation priority and writes the results.

    The process involves:
    1. Loading the species probability, richness and distance layers named in the config.
    2. Loading the zone mask and flattening all layers into a cell table.
    3. Rescaling distance to port and scoring the cells of the target zone.
    4. Writing the priority and decile rasters and the scored cell table.

    Args:
        config_path: YAML config with 'scoring', 'layers' and 'zone' sections.
            Defaults to config/default.yaml in the project root.
        output_dir: Directory to save priority.tif, priority_decile.tif and scored_cells.csv.
        target_zone: Zone to score. Overrides zone.target in the config.
        zone_path: Zone mask raster. Overrides zone.layer in the config.
        base_dir: Directory relative layer paths are resolved against.
        cog: Write the rasters as Cloud Optimized GeoTIFFs.
        verbose: Enable verbose logging.

    Returns:
        Mapping of output name to path. Empty if the zone has no scorable cells.

    Raises:
        FileNotFoundError: If the config or a layer is missing.
        ValueError: If the config is incomplete or the layers are not on a common grid.
    """
    setup_logging(verbose=verbose)
    logging.info("Scoring conservation priority...")

    config = load_config(config_path)
    params = load_scoring_params(config)
    logging.info("Scoring parameters: %s", params)

    paths = layer_paths(config, base_dir=base_dir)
    zone_config = config.get("zone") or {}
    if zone_path is None and zone_config.get("layer"):
        zone_path = layer_paths({"layers": {ZONE_COLUMN: zone_config["layer"]}}, base_dir=base_dir)[ZONE_COLUMN]
    if target_zone is None:
        target_zone = zone_config.get("target")

    if zone_path is not None:
        paths[ZONE_COLUMN] = Path(zone_path)
    elif target_zone is not None:
        raise ValueError("A target zone was given without a zone layer")

    for name, path in paths.items():
        if not path.exists():
            logging.error(f"Layer '{name}' not found: {path}")
            raise FileNotFoundError(f"Layer '{name}' not found: {path}")

    layers = load_layers(paths)
    cells = raster_to_frame(layers)
    distance_scale = float(config.get("distance_scale", 1.0))
    if distance_scale != 1.0:
        logging.info("Rescaling %s by %s", DISTANCE_COLUMN, distance_scale)
        cells[DISTANCE_COLUMN] = cells[DISTANCE_COLUMN] * distance_scale

    result = score_cells(cells, params, target_zone=target_zone)
    if result.status == ScoreStatus.NO_DATA:
        logging.warning("No data to score for zone %s; nothing written", target_zone)
        return {}

    output_dir.mkdir(parents=True, exist_ok=True)
    template = layers[next(iter(layers.data_vars))]
    outputs = {
        "priority": write_raster(
            frame_to_raster(result.cells["priority"], template, name="priority"),
            output_dir / "priority.tif",
            cog=cog,
        ),
        "decile": write_raster(
            frame_to_raster(result.cells["decile"], template, name="decile"),
            output_dir / "priority_decile.tif",
            cog=cog,
        ),
    }
    table_path = output_dir / "scored_cells.csv"
    result.cells.to_csv(table_path)
    outputs["cells"] = table_path

    logging.info(f"Scored {result.n_scored} cells; outputs saved to {output_dir}")
    return outputs
