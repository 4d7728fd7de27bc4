"""Insights command: prioritized, actionable findings."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..insights import insight_score
from . import app
from ._common import CONFIG_OPTION, JSON_OPTION, METRICS_OPTION, cli_errors, console, open_engines, print_json, styled


@app.command()
def insights(
    metrics: Path = METRICS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Maximum insights to show (default: from config)", min=1
    ),
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Workspace to analyze"),
):
    """
    Generate insights and show the highest-ranked ones.

    Ranking is priority weight x impact x confidence.

    [bold cyan]Examples:[/bold cyan]

      devinsight insights --metrics signals.json

      devinsight insights --metrics signals.json --limit 3 --json
    """
    with cli_errors(), open_engines(metrics, config, default_workspace=workspace) as engines:
        ranked = engines.insights.get_prioritized_insights(limit)
        skipped = engines.insights.skipped

        if json_output:
            print_json({"insights": [i.to_dict() for i in ranked], "skipped": skipped})
            return

        console.print()
        console.print(f"[bold cyan]INSIGHTS[/bold cyan] -- {len(ranked)} shown")
        console.print()

        if not ranked:
            console.print("[green]No insights fired. Everything is within thresholds.[/green]")
        else:
            table = Table(show_header=True, show_lines=True, pad_edge=True)
            table.add_column("Priority")
            table.add_column("Category")
            table.add_column("Insight", min_width=30)
            table.add_column("Score", justify="right")
            for insight in ranked:
                table.add_row(
                    styled(insight.priority),
                    insight.category,
                    f"[bold]{insight.title}[/bold]\n{insight.description}",
                    f"{insight_score(insight):.0f}",
                )
            console.print(table)

        for name in skipped:
            console.print(f"[yellow]Skipped {name}: collaborator unavailable[/yellow]")
