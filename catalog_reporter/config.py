import copy
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from catalog_reporter.logger import setup_logger

logger = setup_logger("catalog_reporter.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> dict[str, Any]:
    """
    Load the packaged defaults and merge an optional user YAML file over them.
    """
    with open(DEFAULT_CONFIG_PATH) as f:
        config = yaml.safe_load(f) or {}

    if path is None:
        return config

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        user_config = yaml.safe_load(f) or {}
    if not isinstance(user_config, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")

    logger.info(f"Loaded config overrides from {path}")
    return _deep_merge(config, user_config)
