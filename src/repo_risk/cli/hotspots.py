"""Hotspots CLI command -- rank the riskiest files in a repository."""

import json
from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..exceptions import RepoRiskError
from ..logging_config import setup_logging
from ..risk import RiskLevel, identify_hotspots
from . import app
from ._common import console, resolve_config, resolve_metrics
from ._display import render_hotspots_table, weights_legend


@app.command()
def hotspots(
    ctx: typer.Context,
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Minimum risk score in [0, 1] (default: 0.5 or config)",
    ),
    level: Optional[str] = typer.Option(
        None,
        "--level",
        "-l",
        help="Only show hotspots in this risk tier",
        click_type=click.Choice([lvl.value for lvl in RiskLevel], case_sensitive=False),
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum hotspots to show (default: 20 or config)",
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
        help="Show every reason and recommendation",
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
    Rank files whose risk score meets a threshold.

    Files are ordered by score (highest first), then by path. Each hotspot
    lists the factors that pushed its score up.

    [bold cyan]Examples:[/bold cyan]

      repo-risk hotspots

      repo-risk hotspots --threshold 0.7 --limit 10

      repo-risk hotspots --level critical --json

      repo-risk hotspots --metrics metrics.json
    """
    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        file_metrics = resolve_metrics(ctx, settings, metrics_file)

        found = identify_hotspots(
            file_metrics,
            threshold=settings.hotspot_threshold if threshold is None else threshold,
            risk_level=level,
            limit=settings.max_hotspots if limit is None else limit,
            config=settings.risk,
        )
    except RepoRiskError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps([h.to_dict() for h in found], indent=2))
        return

    console.print()
    if not found:
        console.print("[green]No hotspots above the threshold.[/green]")
        return

    console.print(
        f"[bold cyan]HOTSPOTS[/bold cyan] -- {len(found)} of {len(file_metrics)} files"
    )
    console.print()
    console.print(render_hotspots_table(found, verbose=verbose))
    console.print()
    console.print(weights_legend(settings.risk))
