from pathlib import Path
from typing import Dict, Union

import yaml
from pyhere import here

from sharkprio.scoring.core import ScoringParams

SCORING_KEYS = ("alpha", "beta", "a", "b", "c")


def default_config_path() -> Path:
    """Location of the project's default YAML configuration."""
    return Path(here("config", "default.yaml"))


def load_config(config_path: Union[str, Path, None] = None) -> Dict:
    """Loads the YAML configuration file."""
    config_path = Path(config_path) if config_path is not None else default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        config = yaml.safe_load(f)
    return config or {}


def load_scoring_params(config: Dict) -> ScoringParams:
    """Build the scoring parameters from the 'scoring' section of a config.

    Args:
        config: Parsed configuration dictionary.

    Returns:
        ScoringParams with all five coefficients set.

    Raises:
        ValueError: If the section or any of its keys is missing.
    """
    if "scoring" not in config:
        raise ValueError("No 'scoring' section in config")
    section = config["scoring"] or {}
    missing = [key for key in SCORING_KEYS if section.get(key) is None]
    if missing:
        raise ValueError(f"Missing scoring parameters: {missing}")
    return ScoringParams(**{key: float(section[key]) for key in SCORING_KEYS})


def layer_paths(config: Dict, base_dir: Union[str, Path, None] = None) -> Dict[str, Path]:
    """Resolve the 'layers' section of a config into absolute raster paths.

    Relative paths are resolved against ``base_dir`` (the project root by default).
    """
    layers = config.get("layers") or {}
    if not layers:
        raise ValueError("No 'layers' section in config")
    base = Path(base_dir) if base_dir is not None else Path(here("."))
    return {
        name: path if path.is_absolute() else base / path
        for name, path in ((name, Path(p)) for name, p in layers.items())
    }
