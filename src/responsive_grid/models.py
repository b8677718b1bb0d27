from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from fractions import Fraction
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LENGTH_RE = re.compile(
    r"^\s*(?P<value>-?(?:\d+(?:\.\d+)?|\.\d+))\s*(?P<unit>[a-z%]*)\s*$", re.IGNORECASE
)


class PortionName(StrEnum):
    """Named fractions of the full row width."""

    HIDE = "hide"
    FULL_WIDTH = "full-width"
    ONE_HALF = "one-half"
    TWO_QUARTERS = "two-quarters"
    ONE_THIRD = "one-third"
    TWO_THIRDS = "two-thirds"
    ONE_QUARTER = "one-quarter"
    THREE_QUARTERS = "three-quarters"


PORTION_FRACTIONS: dict[PortionName, Fraction] = {
    PortionName.ONE_HALF: Fraction(1, 2),
    PortionName.TWO_QUARTERS: Fraction(2, 4),
    PortionName.ONE_THIRD: Fraction(1, 3),
    PortionName.TWO_THIRDS: Fraction(2, 3),
    PortionName.ONE_QUARTER: Fraction(1, 4),
    PortionName.THREE_QUARTERS: Fraction(3, 4),
}


class GutterSide(StrEnum):
    LEFT = "left"
    RIGHT = "right"


GUTTER_TOKENS: dict[GutterSide | None, str] = {
    GutterSide.LEFT: "no-gutter-left",
    GutterSide.RIGHT: "no-gutter-right",
    None: "no-gutter",
}

# Non-numeric token suffixes; a layout name is their prefix in attribute tokens.
NAMED_TOKENS: frozenset[str] = frozenset(
    [portion.value for portion in PortionName] + list(GUTTER_TOKENS.values())
)


class Length(BaseModel):
    """A CSS length such as ``600px`` or ``33.3%``."""

    value: float
    unit: str = "px"

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _parse_shorthand(cls, data: Any) -> Any:
        if isinstance(data, bool):
            raise ValueError("length must be a number or a string like '600px'")
        if isinstance(data, int | float):
            return {"value": data}
        if isinstance(data, str):
            match = LENGTH_RE.match(data)
            if not match:
                raise ValueError(f"invalid length: {data!r}")
            unit = match.group("unit").lower() or "px"
            return {"value": float(match.group("value")), "unit": unit}
        return data

    def scaled(self, factor: float) -> Length:
        return Length(value=self.value * factor, unit=self.unit)

    def __str__(self) -> str:
        return f"{self.value:g}{self.unit}"


class Layout(BaseModel):
    """A named viewport-size bucket and its maximum width."""

    name: str = Field(..., min_length=1, pattern=r"^[A-Za-z][A-Za-z0-9_-]*$")
    max_width: Length

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _usable_as_prefix(cls, value: str) -> str:
        # "S1" + "2" would read the same as "S" + "12"
        if value[-1].isdigit():
            raise ValueError(f"layout name must not end with a digit: {value!r}")
        if value in NAMED_TOKENS:
            raise ValueError(f"layout name is reserved as a grid token: {value!r}")
        return value

    @field_validator("max_width")
    @classmethod
    def _non_negative(cls, value: Length) -> Length:
        if value.value < 0:
            raise ValueError("layout max_width must be non-negative")
        return value


class LayoutTable(BaseModel):
    """Ordered layouts; order defines breakpoint adjacency.

    Accepts either a list of layouts or a ``name -> width`` mapping, in which
    case the mapping's order is the table order.
    """

    layouts: tuple[Layout, ...] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _from_mapping(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "layouts" not in data:
            return {
                "layouts": [{"name": name, "max_width": width} for name, width in data.items()]
            }
        if isinstance(data, list | tuple):
            return {"layouts": data}
        return data

    @model_validator(mode="after")
    def _check_order(self) -> LayoutTable:
        seen: set[str] = set()
        previous: Layout | None = None
        for layout in self.layouts:
            if layout.name in seen:
                raise ValueError(f"duplicate layout name: {layout.name!r}")
            seen.add(layout.name)
            if previous is not None:
                if layout.max_width.unit != previous.max_width.unit:
                    raise ValueError(
                        f"layout {layout.name!r} uses unit {layout.max_width.unit!r}, "
                        f"expected {previous.max_width.unit!r}"
                    )
                if layout.max_width.value <= previous.max_width.value:
                    raise ValueError(
                        f"layout widths must be strictly increasing: "
                        f"{previous.name}={previous.max_width} >= {layout.name}={layout.max_width}"
                    )
            previous = layout
        return self

    @classmethod
    def from_mapping(cls, widths: Mapping[str, Any]) -> LayoutTable:
        return cls.model_validate(dict(widths))

    def names(self) -> list[str]:
        return [layout.name for layout in self.layouts]

    def index_of(self, name: str) -> int | None:
        for index, layout in enumerate(self.layouts):
            if layout.name == name:
                return index
        return None

    @property
    def first(self) -> Layout:
        return self.layouts[0]

    @property
    def last(self) -> Layout:
        return self.layouts[-1]


DEFAULT_LAYOUTS: dict[str, str] = {
    "S": "600px",
    "M": "900px",
    "L": "1200px",
    "XL": "1600px",
}


def default_layout_table() -> LayoutTable:
    return LayoutTable.from_mapping(DEFAULT_LAYOUTS)


class GridConfig(BaseModel):
    """Grid parameters shared by every layout."""

    column_count: int = Field(
        default=12,
        description="Number of grid columns; non-positive values fail generation",
    )
    gutter_width: Length = Field(default_factory=lambda: Length(value=20))
    is_fluid: bool = Field(
        default=True,
        description="Scope layout rules by media queries; False emits the fixed layout only",
    )
    fixed_layout_name: str = Field(
        default="L",
        description="Layout used statically when is_fluid is False",
    )
    enhanced_experience_enabled: bool = Field(
        default=True,
        description="Emit base container/row/column rules",
    )
    column_attribute: str = Field(default="data-col", min_length=1)
    row_attribute: str = Field(default="data-row", min_length=1)
    container_attribute: str = Field(default="data-container", min_length=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("gutter_width")
    @classmethod
    def _non_negative_gutter(cls, value: Length) -> Length:
        if value.value < 0:
            raise ValueError("gutter_width must be non-negative")
        return value


class BreakpointRange(BaseModel):
    """Where a layout's styles apply, expressed as neighbouring layout names."""

    layout: str
    from_layout: str | None = None
    until_layout: str | None = None

    model_config = ConfigDict(frozen=True)


class Declaration(BaseModel):
    property: str
    value: str | Length

    model_config = ConfigDict(frozen=True)


class Rule(BaseModel):
    selector: str
    declarations: tuple[Declaration, ...] = ()

    model_config = ConfigDict(frozen=True)

    def get(self, prop: str) -> str | Length | None:
        for declaration in self.declarations:
            if declaration.property == prop:
                return declaration.value
        return None


class MediaCondition(BaseModel):
    min_width: Length | None = None
    max_width: Length | None = None

    model_config = ConfigDict(frozen=True)


class RuleBlock(BaseModel):
    """Rules sharing one media condition; no condition means unscoped."""

    condition: MediaCondition | None = None
    rules: tuple[Rule, ...] = ()
    comment: str | None = None

    model_config = ConfigDict(frozen=True)


class Stylesheet(BaseModel):
    blocks: tuple[RuleBlock, ...] = ()

    model_config = ConfigDict(frozen=True)

    def rules(self) -> list[Rule]:
        return [rule for block in self.blocks for rule in block.rules]


class OutputConfig(BaseModel):
    """Stylesheet output settings."""

    path: str = "grid.css"
    precision: int = Field(default=5, ge=0, le=10, description="Decimal places for numbers")
    indent: str = "  "
    banner: bool = True


class LoggingConfig(BaseModel):
    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level


class ThemeConfig(BaseModel):
    """CLI theme configuration."""

    name: str = "dark"


class GridProjectConfig(BaseModel):
    """Root configuration for grid.yaml."""

    extends: list[str] = Field(default_factory=list)
    layouts: LayoutTable = Field(default_factory=default_layout_table)
    grid: GridConfig = Field(default_factory=GridConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
