from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from responsive_grid.models import GridProjectConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "grid.yaml"

DEFAULT_CONFIG_TEXT = """# Responsive grid configuration

# Ordered smallest to largest; each layout applies up to its own max width.
layouts:
  S: 600px
  M: 900px
  L: 1200px
  XL: 1600px

grid:
  column_count: 12
  gutter_width: 20px
  is_fluid: true
  fixed_layout_name: L
  enhanced_experience_enabled: true

output:
  path: grid.css
  precision: 5

logging:
  level: WARNING

theme:
  name: dark
"""


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        # layouts is an ordered table, so an overlay replaces it wholesale
        if key != "layouts" and isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigFormatError(ValueError):
    """A config file whose top level is not a mapping."""

    def __init__(self, path: Path, data: Any):
        self.path = path
        super().__init__(f"{path} must contain a mapping, got {type(data).__name__}")


def parse_config_text(text: str, path: Path) -> dict[str, Any]:
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFormatError(path, data)
    return data


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    return parse_config_text(path.read_text(), path)


def load_config_data(path: Path) -> dict[str, Any]:
    """Read ``path`` and merge its ``extends`` chain beneath it."""
    data = _load_yaml(path)
    merged: dict[str, Any] = {}

    for extend_path in data.get("extends") or []:
        resolved = Path(extend_path).expanduser()
        if not resolved.is_absolute():
            resolved = (path.parent / resolved).resolve()
        logger.debug("Merging base config %s", resolved)
        merged = _deep_merge(merged, _load_yaml(resolved))

    return _deep_merge(merged, data)


def load_config(path: Path) -> GridProjectConfig:
    """Load and validate a grid.yaml file; a missing file yields defaults."""
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
    return GridProjectConfig.model_validate(load_config_data(path))
