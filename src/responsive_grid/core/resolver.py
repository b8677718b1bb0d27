"""Layout resolution: from a layout table and grid config to ordered style rules.

Every function here is pure. Element opt-in uses a whitespace-separated
attribute whose tokens are ``{layout prefix}{colspan or portion}``: the token
``S4`` means "4 columns at layout S" and ``4`` alone means "4 columns at all
layouts".
"""

from __future__ import annotations

import logging

from responsive_grid.core.base import InvalidSpanError, UnknownLayoutError
from responsive_grid.models import (
    GUTTER_TOKENS,
    PORTION_FRACTIONS,
    BreakpointRange,
    Declaration,
    GridConfig,
    GutterSide,
    LayoutTable,
    Length,
    MediaCondition,
    PortionName,
    Rule,
    RuleBlock,
    Stylesheet,
)

logger = logging.getLogger(__name__)

DEFAULT_GRID = GridConfig()

ZERO = Length(value=0)


def max_width_for(layout_name: str, table: LayoutTable) -> Length:
    index = table.index_of(layout_name)
    if index is None:
        raise UnknownLayoutError(layout_name, table.names())
    return table.layouts[index].max_width


def column_width_percent(colspan: int, total_columns: int) -> float:
    """Width of ``colspan`` columns as a percentage of the row, unrounded."""
    if colspan <= 0 or total_columns <= 0:
        raise InvalidSpanError(colspan, total_columns)
    return colspan / total_columns * 100


def breakpoint_range_for(layout_name: str, table: LayoutTable) -> BreakpointRange:
    """Range from the previous layout's width up to this layout's own width.

    The first layout has no lower bound and the last (largest) has no upper bound.
    """
    index = table.index_of(layout_name)
    if index is None:
        raise UnknownLayoutError(layout_name, table.names())
    layouts = table.layouts
    return BreakpointRange(
        layout=layout_name,
        from_layout=layouts[index - 1].name if index > 0 else None,
        until_layout=layout_name if index < len(layouts) - 1 else None,
    )


def media_condition_for(
    breakpoint_range: BreakpointRange, table: LayoutTable
) -> MediaCondition | None:
    min_width = (
        max_width_for(breakpoint_range.from_layout, table)
        if breakpoint_range.from_layout is not None
        else None
    )
    max_width = (
        max_width_for(breakpoint_range.until_layout, table)
        if breakpoint_range.until_layout is not None
        else None
    )
    if min_width is None and max_width is None:
        return None
    return MediaCondition(min_width=min_width, max_width=max_width)


def _range_contains(breakpoint_range: BreakpointRange, width: Length, table: LayoutTable) -> bool:
    if breakpoint_range.from_layout is not None:
        if width.value <= max_width_for(breakpoint_range.from_layout, table).value:
            return False
    if breakpoint_range.until_layout is not None:
        if width.value > max_width_for(breakpoint_range.until_layout, table).value:
            return False
    return True


def attribute_selector(attribute: str, token: str) -> str:
    escaped = token.replace("\\", "\\\\").replace('"', '\\"')
    return f'[{attribute}~="{escaped}"]'


def _token(layout_name: str | None, suffix: str | int) -> str:
    return f"{layout_name or ''}{suffix}"


def _percent(value: float) -> Length:
    return Length(value=value, unit="%")


def emit_portion_rules(
    layout_name: str | None = None, config: GridConfig = DEFAULT_GRID
) -> tuple[Rule, ...]:
    rules: list[Rule] = []
    for portion in PortionName:
        if portion is PortionName.HIDE:
            declarations = (
                Declaration(property="display", value="none"),
                Declaration(property="width", value=ZERO),
            )
        elif portion is PortionName.FULL_WIDTH:
            declarations = (
                Declaration(property="display", value="block"),
                Declaration(property="width", value="auto"),
            )
        else:
            fraction = PORTION_FRACTIONS[portion]
            declarations = (
                Declaration(property="display", value="block"),
                Declaration(property="width", value=_percent(float(fraction * 100))),
            )
        selector = attribute_selector(config.column_attribute, _token(layout_name, portion))
        rules.append(Rule(selector=selector, declarations=declarations))
    return tuple(rules)


def emit_colspan_rules(
    layout_name: str | None = None,
    total_columns: int | None = None,
    config: GridConfig = DEFAULT_GRID,
) -> tuple[Rule, ...]:
    total = config.column_count if total_columns is None else total_columns
    if total <= 0:
        raise InvalidSpanError(1, total)
    rules: list[Rule] = []
    for colspan in range(1, total + 1):
        rules.append(
            Rule(
                selector=attribute_selector(config.column_attribute, _token(layout_name, colspan)),
                declarations=(
                    Declaration(property="display", value="block"),
                    Declaration(
                        property="width", value=_percent(column_width_percent(colspan, total))
                    ),
                ),
            )
        )
    return tuple(rules)


def emit_gutter_removal(
    side: GutterSide | None = None,
    layout_name: str | None = None,
    config: GridConfig = DEFAULT_GRID,
) -> tuple[Rule, ...]:
    """Drop a column's gutter padding and its nested row's matching margin."""
    sides = [side] if side is not None else [GutterSide.LEFT, GutterSide.RIGHT]
    selector = attribute_selector(config.column_attribute, _token(layout_name, GUTTER_TOKENS[side]))
    return (
        Rule(
            selector=selector,
            declarations=tuple(
                Declaration(property=f"padding-{item}", value=ZERO) for item in sides
            ),
        ),
        Rule(
            selector=f"{selector} > [{config.row_attribute}]",
            declarations=tuple(
                Declaration(property=f"margin-{item}", value=ZERO) for item in sides
            ),
        ),
    )


def emit_base_rules(table: LayoutTable, config: GridConfig = DEFAULT_GRID) -> tuple[Rule, ...]:
    """Container centering, row clearfix and column box model."""
    half_gutter = config.gutter_width.scaled(0.5)
    negative_half_gutter = config.gutter_width.scaled(-0.5)
    if config.is_fluid:
        container_width = Declaration(property="max-width", value=table.last.max_width)
    else:
        container_width = Declaration(
            property="width", value=max_width_for(config.fixed_layout_name, table)
        )
    row = f"[{config.row_attribute}]"
    return (
        Rule(
            selector=f"[{config.container_attribute}]",
            declarations=(
                Declaration(property="margin-left", value="auto"),
                Declaration(property="margin-right", value="auto"),
                container_width,
            ),
        ),
        Rule(
            selector=row,
            declarations=(
                Declaration(property="margin-left", value=negative_half_gutter),
                Declaration(property="margin-right", value=negative_half_gutter),
            ),
        ),
        Rule(
            selector=f"{row}::after",
            declarations=(
                Declaration(property="content", value='""'),
                Declaration(property="display", value="table"),
                Declaration(property="clear", value="both"),
            ),
        ),
        Rule(
            selector=f"[{config.column_attribute}]",
            declarations=(
                Declaration(property="box-sizing", value="border-box"),
                Declaration(property="float", value="left"),
                Declaration(property="width", value=_percent(100)),
                Declaration(property="min-height", value=Length(value=1)),
                Declaration(property="padding-left", value=half_gutter),
                Declaration(property="padding-right", value=half_gutter),
            ),
        ),
    )


def _layout_rules(
    layout_name: str | None, total_columns: int, config: GridConfig
) -> tuple[Rule, ...]:
    rules: list[Rule] = []
    rules.extend(emit_portion_rules(layout_name, config))
    rules.extend(emit_colspan_rules(layout_name, total_columns, config))
    for side in (GutterSide.LEFT, GutterSide.RIGHT, None):
        rules.extend(emit_gutter_removal(side, layout_name, config))
    return tuple(rules)


def _describe_range(breakpoint_range: BreakpointRange) -> str:
    parts = [f"Layout {breakpoint_range.layout}"]
    if breakpoint_range.from_layout is not None:
        parts.append(f"from {breakpoint_range.from_layout}")
    if breakpoint_range.until_layout is not None:
        parts.append(f"until {breakpoint_range.until_layout}")
    return " ".join(parts)


def generate(table: LayoutTable, config: GridConfig = DEFAULT_GRID) -> Stylesheet:
    """Build the full stylesheet for ``table`` and ``config``.

    Layout blocks follow table order. In fluid mode each layout is scoped to its
    breakpoint window; otherwise only the layout whose window holds the fixed
    layout's width is emitted, unscoped.
    """
    total = config.column_count
    if total <= 0:
        raise InvalidSpanError(1, total)

    fixed_width = max_width_for(config.fixed_layout_name, table)
    static_width = None if config.is_fluid else fixed_width

    blocks: list[RuleBlock] = []
    if config.enhanced_experience_enabled:
        blocks.append(RuleBlock(rules=emit_base_rules(table, config), comment="Base grid"))
    blocks.append(RuleBlock(rules=_layout_rules(None, total, config), comment="All layouts"))

    for layout in table.layouts:
        breakpoint_range = breakpoint_range_for(layout.name, table)
        logger.debug(
            "Layout %s: from=%s until=%s",
            layout.name,
            breakpoint_range.from_layout,
            breakpoint_range.until_layout,
        )
        if static_width is None:
            condition = media_condition_for(breakpoint_range, table)
        elif _range_contains(breakpoint_range, static_width, table):
            condition = None
        else:
            logger.debug("Skipping layout %s outside fixed width %s", layout.name, static_width)
            continue
        blocks.append(
            RuleBlock(
                condition=condition,
                rules=_layout_rules(layout.name, total, config),
                comment=_describe_range(breakpoint_range),
            )
        )

    sheet = Stylesheet(blocks=tuple(blocks))
    logger.info(
        "Generated %d rules in %d blocks for %d layouts (%s)",
        len(sheet.rules()),
        len(sheet.blocks),
        len(table.layouts),
        "fluid" if config.is_fluid else f"fixed at {config.fixed_layout_name}",
    )
    return sheet


class LayoutResolver:
    """Binds a layout table and grid config to the resolution functions."""

    def __init__(self, table: LayoutTable, config: GridConfig | None = None):
        self.table = table
        self.config = config or GridConfig()

    def max_width_for(self, layout_name: str) -> Length:
        return max_width_for(layout_name, self.table)

    def column_width_percent(self, colspan: int) -> float:
        return column_width_percent(colspan, self.config.column_count)

    def breakpoint_range_for(self, layout_name: str) -> BreakpointRange:
        return breakpoint_range_for(layout_name, self.table)

    def media_condition_for(self, layout_name: str) -> MediaCondition | None:
        return media_condition_for(self.breakpoint_range_for(layout_name), self.table)

    def breakpoint_ranges(self) -> list[BreakpointRange]:
        return [self.breakpoint_range_for(layout.name) for layout in self.table.layouts]

    def emit_portion_rules(self, layout_name: str | None = None) -> tuple[Rule, ...]:
        if layout_name is not None:
            self.max_width_for(layout_name)
        return emit_portion_rules(layout_name, self.config)

    def emit_colspan_rules(self, layout_name: str | None = None) -> tuple[Rule, ...]:
        if layout_name is not None:
            self.max_width_for(layout_name)
        return emit_colspan_rules(layout_name, self.config.column_count, self.config)

    def emit_gutter_removal(
        self, side: GutterSide | None = None, layout_name: str | None = None
    ) -> tuple[Rule, ...]:
        if layout_name is not None:
            self.max_width_for(layout_name)
        return emit_gutter_removal(side, layout_name, self.config)

    def generate(self) -> Stylesheet:
        return generate(self.table, self.config)
