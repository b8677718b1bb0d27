from __future__ import annotations

from pathlib import Path

import pytest

from responsive_grid.models import GridConfig, LayoutTable


@pytest.fixture
def table() -> LayoutTable:
    """Three-layout table used by most resolver tests."""
    return LayoutTable.from_mapping({"S": 600, "M": 900, "L": 1200})


@pytest.fixture
def grid() -> GridConfig:
    return GridConfig(column_count=12, gutter_width="20px")


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Project directory holding a minimal grid.yaml."""
    (tmp_path / "grid.yaml").write_text(
        "layouts:\n  S: 600px\n  M: 900px\n  L: 1200px\n\ngrid:\n  column_count: 12\n"
    )
    return tmp_path
