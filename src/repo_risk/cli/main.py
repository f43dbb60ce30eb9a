"""Root callback: global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from . import app
from ._common import console


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(
        None,
        "-C",
        "--path",
        help="Repository root to analyze (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Find risky files from git history: churn, ownership spread, change volume
    and bug-fix density.

    [bold cyan]Examples:[/bold cyan]

      repo-risk hotspots

      repo-risk -C /path/to/repo hotspots --level critical --json

      repo-risk summary
    """
    target = Path(path) if path else Path.cwd()
    ctx.ensure_object(dict)
    ctx.obj["path"] = target

    if version:
        from .. import __version__

        console.print(f"[bold cyan]repo-risk[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
