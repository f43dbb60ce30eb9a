"""Scores CLI command -- per-file risk scores with factor breakdown."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import RepoRiskError
from ..logging_config import setup_logging
from ..risk import calculate_risk_scores
from . import app
from ._common import console, resolve_config, resolve_metrics
from ._display import render_scores_table, weights_legend


@app.command()
def scores(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Show only the first N files",
        min=1,
    ),
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
    Show the risk score and normalized factors of every file.

    Files keep the aggregator's order (by path for git input, file order
    for --metrics input).

    [bold cyan]Examples:[/bold cyan]

      repo-risk scores

      repo-risk scores --json --metrics metrics.json
    """
    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        file_metrics = resolve_metrics(ctx, settings, metrics_file)
        results = calculate_risk_scores(file_metrics, settings.risk)
    except RepoRiskError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if limit is not None:
        results = results[:limit]

    if json_output:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    console.print()
    console.print(f"[bold cyan]RISK SCORES[/bold cyan] -- {len(results)} files")
    console.print()
    console.print(render_scores_table(results))
    console.print()
    console.print(weights_legend(settings.risk))
