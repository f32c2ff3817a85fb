import logging
from pathlib import Path

from sharkprio.utils.logging_utils import setup_logging
from sharkprio.raster import load_layer, zonal_statistics, ZonalStat


def summarise_zones(
    values_path: Path,
    zones_path: Path,
    output_path: Path = Path("outputs/zonal_summary.csv"),
    stat: ZonalStat = ZonalStat.MEAN,
    verbose: bool = False,
) -> Path:
    """Writes a per-zone summary of a raster to CSV."""
    setup_logging(verbose=verbose)
    values = load_layer(values_path)
    zones = load_layer(zones_path)

    summary = zonal_statistics(values, zones, stat=stat)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(output_path, index=False)
    logging.info(f"Zonal {ZonalStat(stat).value} of {values_path.name} saved to {output_path}")
    return output_path
