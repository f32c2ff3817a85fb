import logging
from pathlib import Path
from typing import List, Tuple

from sharkprio.utils.logging_utils import setup_logging
from sharkprio.raster import load_layer, reclassify, write_raster


def parse_rule(rule: str) -> Tuple[float, float, float]:
    """Parse a 'low,high,new' string into a reclassification rule."""
    parts = [p.strip() for p in rule.split(",")]
    if len(parts) != 3:
        raise ValueError(f"Expected 'low,high,new', got '{rule}'")
    low, high, new = (float(p) for p in parts)
    return low, high, new


def reclassify_layer(
    input_path: Path,
    output_path: Path,
    rules: List[str],
    include_lowest: bool = False,
    cog: bool = False,
    verbose: bool = False,
) -> Path:
    """
    Reclassifies a raster with 'low,high,new' rules over (low, high] intervals.

    Args:
        input_path: Raster to reclassify.
        output_path: Path to save the reclassified raster.
        rules: Rules as 'low,high,new' strings.
        include_lowest: Include the lower bound of the first rule.
        cog: Write a Cloud Optimized GeoTIFF.
        verbose: Enable verbose logging.
    """
    setup_logging(verbose=verbose)
    parsed = [parse_rule(rule) for rule in rules]
    if not parsed:
        raise ValueError("At least one reclassification rule is required")

    layer = load_layer(input_path)
    logging.info("Reclassifying %s with %d rules", input_path, len(parsed))
    reclassified = reclassify(layer, parsed, include_lowest=include_lowest)
    write_raster(reclassified, output_path, cog=cog)
    return output_path
