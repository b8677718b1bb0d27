from __future__ import annotations

from pathlib import Path

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from responsive_grid.cli.theme import DEFAULT_THEME, ThemeManager
from responsive_grid.core.base import GridError
from responsive_grid.core.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG_TEXT,
    ConfigFormatError,
    load_config,
    parse_config_text,
)
from responsive_grid.core.emitter import (
    format_length,
    format_media_condition,
    format_number,
    render_stylesheet,
    stylesheet_to_json,
)
from responsive_grid.core.resolver import LayoutResolver
from responsive_grid.logging_config import setup_logging
from responsive_grid.models import GridProjectConfig
from responsive_grid.storage.files import StylesheetFiles

app = typer.Typer(help="Responsive grid - Generate breakpoint-aware grid stylesheets")
theme_app = typer.Typer(help="Manage CLI themes")

_theme_manager = ThemeManager(DEFAULT_THEME)
console = Console(theme=_theme_manager.get_theme())
_verbose = False

CONFIG_OPTION_HELP = "Path to grid.yaml"


def _apply_theme(theme_name: str) -> None:
    global console
    if not ThemeManager.is_valid_theme(theme_name):
        return
    if theme_name != _theme_manager.get_theme_name():
        _theme_manager.set_theme(theme_name)
        console = Console(theme=_theme_manager.get_theme())


def _fail(message: str) -> typer.Exit:
    console.print(f"[error]{escape(message)}[/error]")
    return typer.Exit(1)


def _load_project(config_path: Path) -> GridProjectConfig:
    try:
        project = load_config(config_path)
    except yaml.YAMLError as exc:
        raise _fail(f"Could not parse {config_path}: {exc}") from None
    except ConfigFormatError as exc:
        raise _fail(str(exc)) from None
    except ValidationError as exc:
        raise _fail(f"Invalid configuration in {config_path}:\n{exc}") from None

    setup_logging("DEBUG" if _verbose else project.logging.level)
    _apply_theme(project.theme.name)
    return project


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    global _verbose
    _verbose = verbose


@app.command()
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing"),
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
):
    """Write a starter grid.yaml."""
    if config.exists() and not force:
        console.print(
            f"[warning]{escape(str(config))} already exists. Use --force to overwrite.[/warning]"
        )
        raise typer.Exit(1)

    config.parent.mkdir(parents=True, exist_ok=True)
    config.write_text(DEFAULT_CONFIG_TEXT)
    console.print(
        Panel.fit(
            f"[success]✓ Created {escape(str(config))}[/success]\n\n"
            "Next: edit the layouts, then run [accent]responsive-grid build[/accent]",
            title="Grid initialized",
        )
    )


@app.command()
def build(
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (defaults to output.path)"
    ),
    stdout: bool = typer.Option(False, "--stdout", help="Print CSS instead of writing a file"),
    as_json: bool = typer.Option(False, "--json", help="Print the rule model as JSON"),
):
    """Generate the grid stylesheet."""
    project = _load_project(config)
    resolver = LayoutResolver(project.layouts, project.grid)
    try:
        sheet = resolver.generate()
    except GridError as exc:
        raise _fail(str(exc)) from None

    if as_json:
        typer.echo(stylesheet_to_json(sheet))
        return

    banner = None
    if project.output.banner:
        names = ", ".join(project.layouts.names())
        mode = "fluid" if project.grid.is_fluid else f"fixed at {project.grid.fixed_layout_name}"
        banner = (
            f"Responsive grid: {project.grid.column_count} columns, layouts {names} ({mode})"
        )
    css = render_stylesheet(
        sheet,
        precision=project.output.precision,
        indent=project.output.indent,
        banner=banner,
    )

    if stdout:
        typer.echo(css, nl=False)
        return

    files = StylesheetFiles(config.parent)
    target = files.write_stylesheet(
        output.resolve() if output is not None else project.output.path, css
    )
    console.print(
        f"[success]✓ Wrote {len(sheet.rules())} rules to {escape(str(target))}[/success]"
    )


@app.command()
def layouts(
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
):
    """Show layouts and their breakpoint ranges."""
    project = _load_project(config)
    resolver = LayoutResolver(project.layouts, project.grid)
    precision = project.output.precision

    table = Table(title="Layouts")
    table.add_column("Layout", style="grid.layout")
    table.add_column("Max width", style="grid.width")
    table.add_column("From")
    table.add_column("Until")
    table.add_column("Media query", style="grid.query")

    for breakpoint_range in resolver.breakpoint_ranges():
        condition = resolver.media_condition_for(breakpoint_range.layout)
        table.add_row(
            breakpoint_range.layout,
            format_length(resolver.max_width_for(breakpoint_range.layout), precision),
            breakpoint_range.from_layout or "-",
            breakpoint_range.until_layout or "-",
            format_media_condition(condition, precision) if condition else "(all widths)",
        )

    console.print(table)
    if not project.grid.is_fluid:
        console.print(
            f"[dim]Fixed layout: {escape(project.grid.fixed_layout_name)} "
            "(media queries are not emitted)[/dim]"
        )


@app.command()
def columns(
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
    layout: str | None = typer.Option(None, "--layout", "-l", help="Layout prefix for tokens"),
):
    """Show colspan tokens and their widths."""
    project = _load_project(config)
    resolver = LayoutResolver(project.layouts, project.grid)
    try:
        if layout is not None:
            resolver.max_width_for(layout)
        widths = [
            (colspan, resolver.column_width_percent(colspan))
            for colspan in range(1, project.grid.column_count + 1)
        ]
        if not widths:
            resolver.column_width_percent(1)
    except GridError as exc:
        raise _fail(str(exc)) from None

    title = f"Columns at {layout}" if layout else "Columns (all layouts)"
    table = Table(title=escape(title))
    table.add_column("Token", style="grid.token")
    table.add_column("Columns", justify="right")
    table.add_column("Width", justify="right", style="grid.width")
    for colspan, percent in widths:
        table.add_row(
            escape(f"{layout or ''}{colspan}"),
            str(colspan),
            f"{format_number(percent, project.output.precision)}%",
        )
    console.print(table)


@theme_app.command("list")
def theme_list(
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
):
    """List all available themes."""
    current_theme = _current_theme_name(config)

    table = Table(title="Available Themes")
    table.add_column("Name", style="table_header")
    table.add_column("Status")
    for theme_name in ThemeManager.get_available_themes():
        status = "[success]✓ Current[/success]" if theme_name == current_theme else ""
        table.add_row(theme_name, status)
    console.print(table)


@theme_app.command("set")
def theme_set(
    name: str = typer.Argument(..., help="Theme name to set"),
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
):
    """Set the active theme in grid.yaml."""
    if not ThemeManager.is_valid_theme(name):
        available = ", ".join(ThemeManager.get_available_themes())
        console.print(f"[error]Invalid theme: {escape(name)}[/error]")
        console.print(f"[dim]Available themes: {available}[/dim]")
        raise typer.Exit(1)

    if not config.exists():
        raise _fail(f"{config} not found. Run 'responsive-grid init' first.")

    files = StylesheetFiles(config.parent, config_name=config.name)
    try:
        config_dict = files.read_config()
    except (yaml.YAMLError, ConfigFormatError) as exc:
        raise _fail(f"Could not update {config}: {exc}") from None
    if not isinstance(config_dict.get("theme"), dict):
        config_dict["theme"] = {}
    config_dict["theme"]["name"] = name
    files.write_config(config_dict)

    _apply_theme(name)
    console.print(f"[success]✓ Theme set to '{name}'[/success]")


@theme_app.command("show")
def theme_show(
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help=CONFIG_OPTION_HELP),
):
    """Show the current theme."""
    console.print(f"Current theme: [accent]{escape(_current_theme_name(config))}[/accent]")


def _current_theme_name(config: Path) -> str:
    if not config.exists():
        return DEFAULT_THEME
    try:
        data = parse_config_text(config.read_text(), config)
    except (yaml.YAMLError, ConfigFormatError):
        return DEFAULT_THEME
    theme = data.get("theme") or {}
    return theme.get("name", DEFAULT_THEME) if isinstance(theme, dict) else DEFAULT_THEME


app.add_typer(theme_app, name="theme")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
