"""
cslogger CLI - Main entry point
"""

import logging
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

import cslogger
from cslogger.cli.utils.loaders import load_settings_file
from cslogger.core.config.resolver import resolve_settings
from cslogger.core.config.settings import LoggerSettings
from cslogger.core.exceptions.custom_exceptions import ConfigurationError
from cslogger.core.levels import name_of, rank_of
from cslogger.core.logging.logger import get_logger, setup_logging
from cslogger.pipeline.registry import PipelineRegistry

# Initialize CLI app
app = typer.Typer(
    name="cslogger",
    help="Check and exercise cslogger configurations",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# Initialize console and logger
console = Console()
logger = get_logger(__name__)


def _fail(error: ConfigurationError) -> NoReturn:
    console.print(f"[red]Invalid configuration:[/red] {error.message}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show cslogger's own diagnostics"
    ),
) -> None:
    """
    cslogger CLI - inspect level resolution and emit test lines

    Run 'cslogger --help' for available commands.
    """
    try:
        setup_logging()
    except ConfigurationError as e:
        _fail(e)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


@app.command()
def version() -> None:
    """Show cslogger version information"""
    table = Table(title="cslogger Version Information")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("cslogger", cslogger.__version__)
    table.add_row("Python", "3.9+")

    console.print(table)


@app.command()
def levels(
    config: str = typer.Argument(..., help="Settings file (JSON or YAML)"),
    modules: Optional[List[str]] = typer.Argument(
        None, help="Module names to resolve"
    ),
) -> None:
    """Show the transport level and the effective level of each module"""
    try:
        resolved = resolve_settings(LoggerSettings.parse(load_settings_file(config)))
    except ConfigurationError as e:
        _fail(e)

    table = Table(title=f"Levels for {resolved.app_name}")
    table.add_column("Module", style="cyan")
    table.add_column("Level", style="green")
    table.add_column("Source", style="yellow")

    table.add_row("(default)", name_of(resolved.default_level), "level")
    for module, level in resolved.module_levels.items():
        table.add_row(module, name_of(level), "levels")
    for module in modules or []:
        if module in resolved.module_levels:
            continue
        table.add_row(module, name_of(resolved.effective_level(module)), "default")

    console.print(table)
    console.print(f"Transport level: [bold]{name_of(resolved.transport_level)}[/bold]")


@app.command()
def emit(
    config: str = typer.Argument(..., help="Settings file (JSON or YAML)"),
    module: str = typer.Argument(..., help="Logger (module) name"),
    level: str = typer.Argument(..., help="fatal, error, warn, info, debug or trace"),
    message: str = typer.Argument(..., help="Message or format string"),
    args: Optional[List[str]] = typer.Argument(None, help="Format arguments"),
) -> None:
    """Initialize from a settings file and emit one line through a logger"""
    registry = PipelineRegistry()
    try:
        registry.init(load_settings_file(config))
    except ConfigurationError as e:
        _fail(e)

    named = registry.create_logger(module)
    method = getattr(named, name_of(rank_of(level)))
    method(message, *(args or []))
    registry.shutdown()


if __name__ == "__main__":
    app()
