from __future__ import annotations

from collections.abc import Sequence


class GridError(Exception):
    """Base error for grid generation."""


class UnknownLayoutError(GridError):
    """Raised when a referenced layout name is absent from the layout table."""

    def __init__(self, layout_name: str, available: Sequence[str] = ()):
        self.layout_name = layout_name
        self.available = tuple(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Unknown layout {layout_name!r} (known layouts: {known})")


class InvalidSpanError(GridError):
    """Raised for a non-positive colspan or column count."""

    def __init__(self, colspan: int, total_columns: int):
        self.colspan = colspan
        self.total_columns = total_columns
        super().__init__(
            f"Invalid span {colspan}/{total_columns}: colspan and column count must be positive"
        )
