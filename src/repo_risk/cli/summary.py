"""Summary CLI command -- count files per risk tier."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import RepoRiskError
from ..logging_config import setup_logging
from ..risk import calculate_risk_scores, summarize_by_level
from . import app
from ._common import console, resolve_config, resolve_metrics
from ._display import render_summary_table


@app.command()
def summary(
    ctx: typer.Context,
    metrics_file: Optional[Path] = typer.Option(
        None,
        "--metrics",
        "-m",
        help="Read pre-aggregated file metrics (JSON) instead of running git",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
):
    """
    Count files in each risk tier (critical, high, medium, low).

    [bold cyan]Examples:[/bold cyan]

      repo-risk summary

      repo-risk -C ../other-repo summary --json
    """
    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        file_metrics = resolve_metrics(ctx, settings, metrics_file)
        counts = summarize_by_level(calculate_risk_scores(file_metrics, settings.risk))
    except RepoRiskError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps({level.value: count for level, count in counts.items()}, indent=2))
        return

    console.print()
    console.print(f"[bold cyan]RISK SUMMARY[/bold cyan] -- {sum(counts.values())} files")
    console.print()
    console.print(render_summary_table(counts))
