from .logging_utils import setup_logging
from .io import load_config, load_scoring_params, default_config_path

__all__ = [
    "setup_logging",
    "load_config",
    "load_scoring_params",
    "default_config_path",
]
