"""Cognitive health command."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import CONFIG_OPTION, JSON_OPTION, METRICS_OPTION, cli_errors, console, open_engines, print_json, styled


@app.command()
def health(
    metrics: Path = METRICS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
    fail_on_critical: bool = typer.Option(
        False, "--fail-on-critical", help="Exit 1 if the cognitive system is critical"
    ),
):
    """
    Show cognitive-system health and optimization recommendations.

    [bold cyan]Examples:[/bold cyan]

      devinsight health --metrics signals.json

      devinsight health --metrics signals.json --json --fail-on-critical
    """
    with cli_errors(), open_engines(metrics, config) as engines:
        result = engines.cognitive.get_cognitive_system_health()
        recommendations = engines.cognitive.get_optimization_recommendations()
        snapshot = engines.cognitive.get_performance_history()[-1]

        if json_output:
            print_json(
                {
                    "health": result.to_dict(),
                    "snapshot": snapshot.to_dict(),
                    "recommendations": recommendations,
                }
            )
        else:
            console.print()
            console.print(
                f"[bold cyan]COGNITIVE HEALTH[/bold cyan] -- {styled(result.status)} (score {result.score:.0f})"
            )
            console.print()
            for issue in result.issues:
                console.print(f"  [red]-[/red] {issue}")
            if result.issues:
                console.print()
            for rec in recommendations:
                console.print(f"  [cyan]>[/cyan] {rec}")

        if fail_on_critical and result.status == "critical":
            raise typer.Exit(1)
