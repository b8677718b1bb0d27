from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from responsive_grid.core.config import CONFIG_FILENAME, parse_config_text


class StylesheetFiles:
    """Config and stylesheet files relative to a project root."""

    def __init__(self, root: Path, config_name: str = CONFIG_FILENAME):
        self.root = root
        self.config_name = config_name

    @property
    def config_path(self) -> Path:
        return self.root / self.config_name

    def read_config(self) -> dict[str, Any]:
        path = self.config_path
        if path.exists():
            return parse_config_text(path.read_text(), path)
        return {}

    def write_config(self, config: dict[str, Any]) -> None:
        self.config_path.write_text(yaml.safe_dump(config, sort_keys=False))

    def resolve(self, relative_path: str | Path) -> Path:
        path = Path(relative_path).expanduser()
        if path.is_absolute():
            return path
        return self.root / path

    def write_stylesheet(self, relative_path: str | Path, content: str) -> Path:
        """Write CSS through a temporary sibling so readers never see a partial file."""
        path = self.resolve(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)
        return path
