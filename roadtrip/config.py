"""
Configuration for the roadtrip exporter.

Settings come from three places, later ones winning:

1. The defaults on :class:`ExportConfig`.
2. The ``export`` section of an optional YAML file.
3. ``ROADTRIP_*`` environment variables (a ``.env`` file in the
   working directory is loaded first if present).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

from .errors import RoadtripError

logger = logging.getLogger(__name__)

ENV_OVERRIDES = {
    "log_level": "ROADTRIP_LOG_LEVEL",
    "input_encoding": "ROADTRIP_INPUT_ENCODING",
    "output_encoding": "ROADTRIP_OUTPUT_ENCODING",
}


@dataclass
class ExportConfig:
    input_encoding: str = "utf-8"
    output_encoding: str = "utf-8"
    log_level: str = "INFO"
    log_format: str = "[%(levelname)s] %(message)s"


def _load_yaml(config_path: str) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise RoadtripError(f"cannot read config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise RoadtripError(f"invalid YAML in {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RoadtripError(f"config file {config_path} must contain a mapping")
    section = data.get("export", {}) or {}
    if not isinstance(section, dict):
        raise RoadtripError(f"'export' section in {config_path} must be a mapping")
    return section


def load_config(config_path: Optional[str] = None) -> ExportConfig:
    """Build an :class:`ExportConfig` from YAML and the environment.

    Args:
        config_path: Optional path to a YAML file with an ``export``
            section.

    Returns:
        The resolved configuration.

    Raises:
        RoadtripError: If the YAML file cannot be read or parsed.
    """
    load_dotenv()
    config = ExportConfig()
    known = {f.name for f in fields(ExportConfig)}
    if config_path:
        for key, value in _load_yaml(config_path).items():
            if key not in known:
                logger.warning("Ignoring unknown config key '%s'", key)
                continue
            setattr(config, key, str(value))
        logger.debug("Loaded configuration from %s", config_path)
    for attr, env_var in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            setattr(config, attr, value)
    config.log_level = config.log_level.upper()
    return config
