"""CLI entry point -- registers all subcommands."""

import typer

from ._common import console  # noqa: F401

app = typer.Typer(
    name="repo-risk",
    help="repo-risk - Git history risk and hotspot analyzer",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .hotspots import hotspots as _hotspots  # noqa: F401, E402
from .scores import scores as _scores  # noqa: F401, E402
from .summary import summary as _summary  # noqa: F401, E402
from .trends import trends as _trends  # noqa: F401, E402
