"""Trends CLI command -- compare risk across saved metric snapshots."""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ..exceptions import RepoRiskError
from ..logging_config import setup_logging
from ..risk import predict_risk_trends
from ..risk.loader import read_metrics_file
from . import app
from ._common import console, resolve_config
from ._display import render_trends_table


@app.command()
def trends(
    snapshots: List[Path] = typer.Argument(
        ...,
        help="Metric snapshots (JSON), one per earlier analysis run",
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
    Predict whether each file's risk is increasing, decreasing or stable.

    Files need at least two snapshots to get a trend.

    [bold cyan]Examples:[/bold cyan]

      repo-risk trends jan.json feb.json mar.json

      repo-risk trends snapshots/*.json --json
    """
    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        results = predict_risk_trends(
            [read_metrics_file(path) for path in snapshots], settings.risk
        )
    except RepoRiskError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps([t.to_dict() for t in results], indent=2))
        return

    console.print()
    if not results:
        console.print("[yellow]No file appears in two or more snapshots.[/yellow]")
        return

    console.print(f"[bold cyan]RISK TRENDS[/bold cyan] -- {len(results)} files")
    console.print()
    console.print(render_trends_table(results))
