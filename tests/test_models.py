from __future__ import annotations

import pytest
from pydantic import ValidationError

from responsive_grid.models import (
    DEFAULT_LAYOUTS,
    GridConfig,
    GridProjectConfig,
    LayoutTable,
    Length,
    LoggingConfig,
    OutputConfig,
)


@pytest.mark.parametrize(
    ("raw", "value", "unit"),
    [
        (600, 600.0, "px"),
        (37.5, 37.5, "px"),
        ("600px", 600.0, "px"),
        ("37.5em", 37.5, "em"),
        ("50%", 50.0, "%"),
        (" 12 PX ", 12.0, "px"),
        ("-10px", -10.0, "px"),
    ],
)
def test_length_parsing(raw, value: float, unit: str) -> None:
    length = Length.model_validate(raw)

    assert length.value == value
    assert length.unit == unit


@pytest.mark.parametrize("raw", ["wide", "px", "", True])
def test_length_rejects_garbage(raw) -> None:
    with pytest.raises(ValidationError):
        Length.model_validate(raw)


def test_layout_table_preserves_mapping_order() -> None:
    table = LayoutTable.from_mapping({"S": "600px", "M": "900px", "L": "1200px"})

    assert table.names() == ["S", "M", "L"]
    assert table.first.name == "S"
    assert table.last.max_width == Length(value=1200)
    assert table.index_of("M") == 1
    assert table.index_of("XL") is None


def test_layout_table_accepts_list() -> None:
    table = LayoutTable.model_validate(
        [{"name": "S", "max_width": 480}, {"name": "M", "max_width": "768px"}]
    )
    assert table.names() == ["S", "M"]


def test_layout_table_rejects_duplicate_names() -> None:
    with pytest.raises(ValidationError, match="duplicate layout name"):
        LayoutTable.model_validate(
            [{"name": "S", "max_width": 480}, {"name": "S", "max_width": 768}]
        )


@pytest.mark.parametrize("widths", [{"S": 900, "M": 600}, {"S": 600, "M": 600}])
def test_layout_table_requires_increasing_widths(widths) -> None:
    with pytest.raises(ValidationError, match="strictly increasing"):
        LayoutTable.from_mapping(widths)


def test_layout_table_rejects_mixed_units() -> None:
    with pytest.raises(ValidationError, match="unit"):
        LayoutTable.from_mapping({"S": "40em", "M": "900px"})


def test_layout_table_rejects_empty_and_bad_names() -> None:
    with pytest.raises(ValidationError):
        LayoutTable.from_mapping({})
    with pytest.raises(ValidationError):
        LayoutTable.from_mapping({"extra small": 400})
    with pytest.raises(ValidationError):
        LayoutTable.from_mapping({"S": "-1px"})


@pytest.mark.parametrize("name", ["S*/", "M */ .x {", "S.wide", "1x", "-S", "S\"]"])
def test_layout_name_must_be_identifier(name: str) -> None:
    with pytest.raises(ValidationError, match="pattern"):
        LayoutTable.from_mapping({name: 600})


def test_layout_name_must_not_end_with_digit() -> None:
    # S + 12 and S1 + 2 would both be the token S12
    with pytest.raises(ValidationError, match="end with a digit"):
        LayoutTable.from_mapping({"S": 600, "S1": 900})


@pytest.mark.parametrize("name", ["hide", "full-width", "one-third", "no-gutter", "no-gutter-left"])
def test_layout_name_reserved_tokens(name: str) -> None:
    with pytest.raises(ValidationError, match="reserved"):
        LayoutTable.from_mapping({name: 600})


def test_layout_name_allows_letters_inside() -> None:
    table = LayoutTable.from_mapping({"x2s": 320, "S_m": 600, "wide-XL": 1600})
    assert table.names() == ["x2s", "S_m", "wide-XL"]


def test_layout_table_is_frozen() -> None:
    table = LayoutTable.from_mapping({"S": 600})

    with pytest.raises(ValidationError):
        table.layouts = ()


def test_grid_config_defaults() -> None:
    config = GridConfig()

    assert config.column_count == 12
    assert config.gutter_width == Length(value=20)
    assert config.is_fluid is True
    assert config.enhanced_experience_enabled is True
    assert config.column_attribute == "data-col"


def test_grid_config_rejects_negative_gutter() -> None:
    with pytest.raises(ValidationError, match="gutter_width"):
        GridConfig(gutter_width="-4px")


def test_project_config_defaults() -> None:
    config = GridProjectConfig()

    assert config.layouts.names() == list(DEFAULT_LAYOUTS)
    assert config.output.path == "grid.css"
    assert config.logging.level == "WARNING"
    assert config.theme.name == "dark"


def test_output_precision_bounds() -> None:
    with pytest.raises(ValidationError):
        OutputConfig(precision=11)


def test_logging_level_normalised() -> None:
    assert LoggingConfig(level="debug").level == "DEBUG"
    with pytest.raises(ValidationError):
        LoggingConfig(level="loud")
