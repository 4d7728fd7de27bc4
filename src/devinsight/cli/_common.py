"""Shared CLI helpers."""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from rich.console import Console

from ..api import Engines, build_engines, open_store
from ..config import load_config
from ..exceptions import DevInsightError
from ..logging_config import get_logger
from ..sources import MetricsFile
from ..storage import SQLiteStore

console = Console()
logger = get_logger(__name__)

SEVERITY_STYLE = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "dim",
    "healthy": "green",
    "degraded": "yellow",
}

# Reused by every command so the options read the same everywhere.
METRICS_OPTION = typer.Option(
    ...,
    "--metrics",
    "-m",
    help="JSON file of collected code and telemetry signals",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
CONFIG_OPTION = typer.Option(
    None,
    "-c",
    "--config",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
JSON_OPTION = typer.Option(False, "--json", help="Output in machine-readable JSON format")


def styled(level: str) -> str:
    style = SEVERITY_STYLE.get(level, "")
    return f"[{style}]{level}[/{style}]" if style else level


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


@contextmanager
def open_engines(metrics: Path, config_file: Optional[Path] = None, **overrides) -> Iterator[Engines]:
    """Load config and metrics, wire the three engines, and close storage afterwards."""
    config = load_config(config_file=config_file, **overrides)
    source = MetricsFile.load(metrics)
    store = open_store(config)
    try:
        yield build_engines(source, source, config, store)
    finally:
        if isinstance(store, SQLiteStore):
            store.close()


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn DevInsight errors into a one-line message and exit code 1."""
    try:
        yield
    except typer.Exit:
        raise
    except DevInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)
