"""
Genkan command line interface.

Commands:
    build    - Generate output/index.html from config.toml (default command)
    init     - Create a starter config.toml, themes/ and output/
    validate - Check a configuration without generating anything

Examples:\n

    genkan                                   # Build with defaults

    genkan build -c site.toml -o public      # Custom config and output directory

    genkan init my-links                     # Start a new project

    genkan validate -c site.toml             # Check a config
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from genkan.contexts.configuration import (
    ConfigLoadError,
    ConfigValidationError,
    load_config,
    validate_config,
)
from genkan.contexts.rendering import (
    Generator,
    OutputWriteError,
    ScaffoldError,
    ThemeFileError,
    ThemeNotFoundError,
    ThemeRenderError,
    find_theme_path,
    init_project,
)
from genkan.contexts.rendering.logger import setup_rendering_logger
from genkan.contexts.rendering.themes import theme_search_roots
from genkan.utils.diagnostics import Severity, count_by_severity
from genkan.utils.timestamp import format_elapsed, now

load_dotenv()

DEFAULT_CONFIG = Path("config.toml")
DEFAULT_OUTPUT_DIR = Path("output")
OUTPUT_FILENAME = "index.html"

# Fatal errors reported as a one-line message with exit code 1
BUILD_ERRORS = (
    ConfigLoadError,
    ConfigValidationError,
    ThemeNotFoundError,
    ThemeFileError,
    ThemeRenderError,
    OutputWriteError,
)

app = typer.Typer(
    help="Generate a self-contained link page from a TOML profile",
    add_completion=False,
    invoke_without_command=True,
)


def build_log_dir() -> Optional[Path]:
    """Timestamped log directory under GENKAN_LOGS_PATH, or None when unset."""
    logs_path = os.getenv("GENKAN_LOGS_PATH")
    if not logs_path:
        return None
    return Path(logs_path) / f"build_{now()}"


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(ctx: typer.Context):
    """Build with default options when no command is provided."""
    if ctx.invoked_subcommand is None:
        build(config=DEFAULT_CONFIG, output=DEFAULT_OUTPUT_DIR, verbose=False)


@app.command("build")
def build(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the TOML configuration file"),
    ] = DEFAULT_CONFIG,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output directory (index.html is written here)"),
    ] = DEFAULT_OUTPUT_DIR,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output"),
    ] = False,
):
    """
    Generate the link page.

    Examples:\n

        $ genkan build                           # config.toml -> output/index.html

        $ genkan build -c site.toml -o public    # site.toml -> public/index.html
    """
    log_file = setup_rendering_logger(build_log_dir(), config_path=config, verbose=verbose)

    try:
        genkan_config = load_config(config)
        validate_config(genkan_config)
        theme_path = find_theme_path(
            genkan_config.theme.name, theme_search_roots(config.resolve().parent)
        )
        result = Generator(genkan_config, theme_path, output / OUTPUT_FILENAME).generate()
    except BUILD_ERRORS as e:
        _fail(e)

    warnings = count_by_severity(result.diagnostics, Severity.WARNING)
    typer.secho(f"\n✓ Generated page at: {result.output_path}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Assets embedded: {result.assets_embedded}")
    if result.assets_degraded:
        typer.secho(f"  Assets kept as references: {result.assets_degraded}", fg=typer.colors.YELLOW)
    if warnings:
        typer.secho(f"  Warnings: {warnings}", fg=typer.colors.YELLOW)
    typer.echo(f"  Time: {format_elapsed(result.elapsed_s)}")
    if log_file:
        typer.echo(f"  Log: {log_file}")


@app.command("init")
def init(
    path: Annotated[
        Path,
        typer.Argument(help="Project directory (default: current directory)"),
    ] = Path("."),
):
    """
    Create a starter project.

    Writes config.toml and creates themes/ and output/. Refuses to overwrite
    an existing config.toml.
    """
    try:
        created = init_project(path)
    except ScaffoldError as e:
        _fail(e)

    typer.secho(f"✓ Initialized Genkan project in {path}", fg=typer.colors.GREEN, bold=True)
    for created_path in created:
        typer.echo(f"  created {created_path}")
    typer.echo("\nNext steps:")
    typer.echo(f"  1. Edit {path / 'config.toml'}")
    typer.echo("  2. Run: genkan build")


@app.command("validate")
def validate(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the TOML configuration file"),
    ] = DEFAULT_CONFIG,
):
    """Check that a configuration loads, passes validation and names an existing theme."""
    try:
        genkan_config = load_config(config)
        diagnostics = validate_config(genkan_config)
        theme_path = find_theme_path(
            genkan_config.theme.name, theme_search_roots(config.resolve().parent)
        )
    except (ConfigLoadError, ConfigValidationError, ThemeNotFoundError) as e:
        _fail(e)

    for diagnostic in diagnostics:
        typer.secho(f"  ! {diagnostic}", fg=typer.colors.YELLOW)

    typer.secho("✓ Configuration is valid", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Links: {len(genkan_config.links)}")
    typer.echo(f"  Theme: {genkan_config.theme.name} ({theme_path})")


if __name__ == "__main__":
    app()
