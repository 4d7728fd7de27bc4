"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ..logging_config import setup_logging
from ._common import console

app = typer.Typer(
    name="devinsight",
    help="DevInsight - code and cognitive analytics with ranked insights",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit", is_eager=True),
):
    """
    Analyze code evolution, technical debt, architecture and cognitive-system
    health, and turn them into prioritized insights.
    """
    if version:
        console.print(f"[bold cyan]DevInsight[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)
    setup_logging(verbose=verbose, quiet=quiet)


# Import subcommands to register them
from .code import architecture as _architecture, debt as _debt, quality as _quality  # noqa: F401, E402
from .cognitive import health as _health  # noqa: F401, E402
from .insights import insights as _insights  # noqa: F401, E402


def main() -> None:
    app()
