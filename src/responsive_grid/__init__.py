"""Responsive grid stylesheet generator."""

from __future__ import annotations

from responsive_grid.core.base import GridError, InvalidSpanError, UnknownLayoutError
from responsive_grid.core.emitter import render_stylesheet
from responsive_grid.core.resolver import (
    LayoutResolver,
    breakpoint_range_for,
    column_width_percent,
    emit_colspan_rules,
    emit_gutter_removal,
    emit_portion_rules,
    generate,
    max_width_for,
)
from responsive_grid.models import GridConfig, LayoutTable, PortionName, Stylesheet

__version__ = "0.1.0"

__all__ = [
    "GridConfig",
    "GridError",
    "InvalidSpanError",
    "LayoutResolver",
    "LayoutTable",
    "PortionName",
    "Stylesheet",
    "UnknownLayoutError",
    "breakpoint_range_for",
    "column_width_percent",
    "emit_colspan_rules",
    "emit_gutter_removal",
    "emit_portion_rules",
    "generate",
    "max_width_for",
    "render_stylesheet",
]
