"""Code analytics commands: debt, architecture, quality."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from . import app
from ._common import CONFIG_OPTION, JSON_OPTION, METRICS_OPTION, cli_errors, console, open_engines, print_json, styled


def _score_style(score: Optional[float]) -> str:
    if score is None:
        return "[dim]n/a[/dim]"
    if score >= 80:
        return f"[green]{score:.1f}[/green]"
    if score >= 60:
        return f"[yellow]{score:.1f}[/yellow]"
    return f"[red]{score:.1f}[/red]"


@app.command()
def debt(
    workspace: Optional[str] = typer.Argument(None, help="Workspace id (default: from config)"),
    metrics: Path = METRICS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Show the technical-debt breakdown for a workspace.

    [bold cyan]Examples:[/bold cyan]

      devinsight debt --metrics signals.json

      devinsight debt backend --metrics signals.json --json
    """
    with cli_errors(), open_engines(metrics, config) as engines:
        analysis = engines.code.analyze_technical_debt(workspace or engines.config.default_workspace)

        if json_output:
            print_json(analysis.to_dict())
            return

        console.print()
        console.print(
            f"[bold cyan]TECHNICAL DEBT[/bold cyan] -- {analysis.total_debt:.1f}h, trend {analysis.trend}"
        )
        console.print()

        table = Table(show_header=True, pad_edge=True)
        table.add_column("Category", min_width=14)
        table.add_column("Hours", justify="right")
        for category, hours in analysis.debt_by_category.items():
            table.add_row(category, f"{hours:.1f}")
        for category in analysis.missing_categories:
            table.add_row(category, "[dim]unavailable[/dim]")
        console.print(table)

        if analysis.critical_issues:
            console.print()
            console.print(f"[bold red]{len(analysis.critical_issues)} critical issue(s)[/bold red]")
            for issue in analysis.critical_issues:
                console.print(f"  {issue.location}: {issue.description}")

        if analysis.recommendations:
            console.print()
            for rec in analysis.recommendations:
                console.print(f"  [cyan]>[/cyan] {rec}")


@app.command()
def architecture(
    workspace: Optional[str] = typer.Argument(None, help="Workspace id (default: from config)"),
    metrics: Path = METRICS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Show architecture quality scores, weak points and strengths.

    [bold cyan]Examples:[/bold cyan]

      devinsight architecture --metrics signals.json
    """
    with cli_errors(), open_engines(metrics, config) as engines:
        result = engines.code.assess_architecture_quality(workspace or engines.config.default_workspace)

        if json_output:
            print_json(result.to_dict())
            return

        console.print()
        console.print(f"[bold cyan]ARCHITECTURE[/bold cyan] -- overall {_score_style(result.overall_score)}")
        console.print()

        table = Table(show_header=True, pad_edge=True)
        table.add_column("Aspect", min_width=16)
        table.add_column("Score", justify="right")
        for aspect in ("modularity", "cohesion", "coupling", "maintainability", "testability"):
            value = getattr(result, aspect)
            # Coupling is displayed raw; lower is better.
            cell = f"{value:.1f}" if aspect == "coupling" and value is not None else _score_style(value)
            table.add_row(aspect, cell)
        console.print(table)

        for point in result.weak_points:
            console.print(f"  [red]-[/red] {point}")
        for point in result.strengths:
            console.print(f"  [green]+[/green] {point}")


@app.command()
def quality(
    path: str = typer.Argument(..., help="File or directory to score"),
    metrics: Path = METRICS_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    json_output: bool = JSON_OPTION,
):
    """
    Show the composite code quality score and its sub-scores.

    [bold cyan]Examples:[/bold cyan]

      devinsight quality src/app.py --metrics signals.json
    """
    with cli_errors(), open_engines(metrics, config) as engines:
        breakdown = engines.code.get_code_quality_breakdown(path)

        if json_output:
            print_json(breakdown.to_dict())
            return

        console.print()
        console.print(f"[bold cyan]QUALITY[/bold cyan] {path} -- {_score_style(breakdown.score)}")
        console.print()

        table = Table(show_header=True, pad_edge=True)
        table.add_column("Aspect", min_width=14)
        table.add_column("Score", justify="right")
        for aspect, score in breakdown.sub_scores.items():
            table.add_row(aspect, _score_style(score))
        for aspect in breakdown.missing_aspects:
            table.add_row(aspect, styled("unavailable"))
        console.print(table)
