"""Serialise a Stylesheet into CSS text."""

from __future__ import annotations

import json

from responsive_grid.models import Declaration, Length, MediaCondition, Rule, RuleBlock, Stylesheet

DEFAULT_PRECISION = 5
DEFAULT_INDENT = "  "


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def format_length(length: Length, precision: int = DEFAULT_PRECISION) -> str:
    number = format_number(length.value, precision)
    if number == "0":
        return "0"
    return f"{number}{length.unit}"


def format_value(value: str | Length, precision: int = DEFAULT_PRECISION) -> str:
    if isinstance(value, Length):
        return format_length(value, precision)
    return value


def format_declaration(declaration: Declaration, precision: int = DEFAULT_PRECISION) -> str:
    return f"{declaration.property}: {format_value(declaration.value, precision)};"


def format_media_condition(condition: MediaCondition, precision: int = DEFAULT_PRECISION) -> str:
    features: list[str] = []
    if condition.min_width is not None:
        features.append(f"(min-width: {format_length(condition.min_width, precision)})")
    if condition.max_width is not None:
        features.append(f"(max-width: {format_length(condition.max_width, precision)})")
    return "@media " + " and ".join(features)


def format_comment(text: str) -> str:
    # a literal "*/" would close the comment early
    return "/* " + text.replace("*/", "* /") + " */"


def render_rule(
    rule: Rule,
    precision: int = DEFAULT_PRECISION,
    indent: str = DEFAULT_INDENT,
    depth: int = 0,
) -> str:
    prefix = indent * depth
    lines = [f"{prefix}{rule.selector} {{"]
    lines.extend(
        f"{prefix}{indent}{format_declaration(declaration, precision)}"
        for declaration in rule.declarations
    )
    lines.append(f"{prefix}}}")
    return "\n".join(lines)


def render_block(
    block: RuleBlock,
    precision: int = DEFAULT_PRECISION,
    indent: str = DEFAULT_INDENT,
) -> str:
    lines: list[str] = []
    if block.comment:
        lines.append(format_comment(block.comment))
    if block.condition is None:
        lines.extend(render_rule(rule, precision, indent) for rule in block.rules)
        return "\n".join(lines)

    lines.append(f"{format_media_condition(block.condition, precision)} {{")
    lines.extend(render_rule(rule, precision, indent, depth=1) for rule in block.rules)
    lines.append("}")
    return "\n".join(lines)


def render_stylesheet(
    sheet: Stylesheet,
    precision: int = DEFAULT_PRECISION,
    indent: str = DEFAULT_INDENT,
    banner: str | None = None,
) -> str:
    """Render blocks separated by blank lines, with an optional leading comment."""
    parts: list[str] = []
    if banner:
        parts.append(format_comment(banner))
    parts.extend(render_block(block, precision, indent) for block in sheet.blocks)
    return "\n\n".join(parts) + "\n"


def stylesheet_to_json(sheet: Stylesheet) -> str:
    return json.dumps(sheet.model_dump(mode="json"), indent=2)
