from __future__ import annotations

import pytest
from rich.theme import Theme

from responsive_grid.cli.theme import DEFAULT_THEME, THEMES, ThemeManager


def test_theme_manager_falls_back_to_default() -> None:
    manager = ThemeManager("no-such-theme")
    assert manager.get_theme_name() == DEFAULT_THEME


def test_theme_manager_set_theme() -> None:
    manager = ThemeManager()
    manager.set_theme("light")

    assert manager.get_theme_name() == "light"
    with pytest.raises(ValueError, match="Invalid theme"):
        manager.set_theme("neon")


def test_available_themes_match_table() -> None:
    assert ThemeManager.get_available_themes() == list(THEMES)
    assert ThemeManager.is_valid_theme("high-contrast")
    assert not ThemeManager.is_valid_theme("neon")


def test_every_theme_defines_grid_styles() -> None:
    for name in ThemeManager.get_available_themes():
        theme = ThemeManager(name).get_theme()
        assert isinstance(theme, Theme)
        for style in ("error", "success", "grid.layout", "grid.width", "grid.query", "grid.token"):
            assert style in theme.styles
