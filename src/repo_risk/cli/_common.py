"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..api import collect_file_metrics
from ..config import AnalysisConfig, load_config
from ..risk import FileMetrics
from ..risk.loader import read_metrics_file

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    **overrides,
) -> AnalysisConfig:
    """Build configuration from CLI options. None-valued options are ignored."""
    cleaned = {key: value for key, value in overrides.items() if value is not None}
    if verbose:
        cleaned["verbose"] = True
    return load_config(config_file=config, **cleaned)


def resolve_metrics(
    ctx: typer.Context,
    config: AnalysisConfig,
    metrics_file: Optional[Path] = None,
) -> list[FileMetrics]:
    """File metrics from --metrics, or from the git history of the -C path."""
    if metrics_file is not None:
        return read_metrics_file(metrics_file)
    target = (ctx.obj or {}).get("path", Path.cwd())
    return collect_file_metrics(Path(target).resolve(), config)
