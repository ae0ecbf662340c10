"""Terrain configuration readers."""

from __future__ import annotations

from pathlib import Path

import yaml

from relief.config import TerrainConfig
from relief.exceptions import ConfigurationError, DataLoadError


def load_terrain_config(path: str | Path) -> TerrainConfig:
    """Read a terrain configuration from a YAML or JSON file.

    Expected layout mirrors :meth:`TerrainConfig.to_dict`; every key is
    optional and falls back to the default.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated TerrainConfig.

    Raises:
        DataLoadError: If the file cannot be read or is malformed.

    Example:
        >>> config = load_terrain_config("island.yaml")
        >>> config.resolution
        16
    """
    path = Path(path)

    if not path.exists():
        raise DataLoadError(f"File not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DataLoadError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DataLoadError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )

    try:
        config = TerrainConfig.from_dict(data)
        config.validate()
    except ConfigurationError as e:
        raise DataLoadError(f"Invalid terrain configuration in {path}: {e}") from e

    return config
