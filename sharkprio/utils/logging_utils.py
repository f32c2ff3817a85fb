import logging
import sys
from typing import Sequence

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# GDAL-backed readers and writers log every block and driver call at DEBUG.
GEO_LOGGERS = ("rasterio", "rio_cogeo", "fiona", "pyogrio")


def setup_logging(
    level: int = logging.INFO,
    verbose: bool = False,
    quiet: Sequence[str] = GEO_LOGGERS,
) -> logging.Logger:
    """Log sharkprio progress to stdout.

    ``verbose`` turns on DEBUG for the sharkprio loggers only; the loggers
    named in ``quiet`` stay at WARNING either way.

    Returns:
        The top-level ``sharkprio`` logger.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
    package_logger = logging.getLogger("sharkprio")
    package_logger.setLevel(logging.DEBUG if verbose else level)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
    return package_logger
