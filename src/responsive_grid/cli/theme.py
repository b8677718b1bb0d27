from __future__ import annotations

from rich.theme import Theme

THEMES: dict[str, dict[str, str]] = {
    "dark": {
        "error": "bright_red",
        "success": "bright_green",
        "warning": "bright_yellow",
        "info": "bright_cyan",
        "dim": "dim white",
        "accent": "cyan",
        "table_header": "cyan",
        # Grid report styles
        "grid.layout": "bold bright_magenta",
        "grid.width": "bright_white",
        "grid.query": "green",
        "grid.token": "yellow",
    },
    "light": {
        "error": "red",
        "success": "green",
        "warning": "yellow",
        "info": "blue",
        "dim": "dim black",
        "accent": "blue",
        "table_header": "blue",
        "grid.layout": "bold magenta",
        "grid.width": "black",
        "grid.query": "dark_green",
        "grid.token": "dark_orange",
    },
    "high-contrast": {
        "error": "#f48771",
        "success": "#89d185",
        "warning": "#dcdcaa",
        "info": "#4ec9b0",
        "dim": "dim #cccccc",
        "accent": "#4fc1ff",
        "table_header": "#4fc1ff",
        "grid.layout": "bold #ffffff",
        "grid.width": "#ffffff",
        "grid.query": "#89d185",
        "grid.token": "#dcdcaa",
    },
}

DEFAULT_THEME = "dark"


class ThemeManager:
    """Holds the active CLI theme and builds Rich Theme objects."""

    def __init__(self, theme_name: str = DEFAULT_THEME):
        """Initialize with a theme name, falling back to the default."""
        self.theme_name = theme_name if theme_name in THEMES else DEFAULT_THEME
        self._theme = self._create_theme(self.theme_name)

    @staticmethod
    def get_available_themes() -> list[str]:
        """Get list of available theme names."""
        return list(THEMES.keys())

    @staticmethod
    def is_valid_theme(theme_name: str) -> bool:
        """Check if a theme name is valid."""
        return theme_name in THEMES

    def _create_theme(self, theme_name: str) -> Theme:
        """Create a Rich Theme object from the theme table."""
        if theme_name not in THEMES:
            theme_name = DEFAULT_THEME
        return Theme(THEMES[theme_name], inherit=True)

    def get_theme(self) -> Theme:
        """Get the current Rich Theme object."""
        return self._theme

    def set_theme(self, theme_name: str) -> None:
        """Change the current theme."""
        if not self.is_valid_theme(theme_name):
            available = ", ".join(self.get_available_themes())
            raise ValueError(f"Invalid theme: {theme_name}. Available: {available}")
        self.theme_name = theme_name
        self._theme = self._create_theme(theme_name)

    def get_theme_name(self) -> str:
        """Get the current theme name."""
        return self.theme_name
