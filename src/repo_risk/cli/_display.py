"""Rich rendering of risk scores, hotspots and trends.

Display only: every number shown here comes from the risk engine.
"""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from ..config import RiskConfig
from ..risk import Hotspot, RiskLevel, RiskScore, RiskTrend, Trend

LEVEL_STYLES: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "bold red",
    RiskLevel.HIGH: "red",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.LOW: "green",
}

TREND_MARKS: dict[Trend, str] = {
    Trend.INCREASING: "[red]↑ increasing[/red]",
    Trend.DECREASING: "[green]↓ decreasing[/green]",
    Trend.STABLE: "[dim]→ stable[/dim]",
}


def format_level(level: RiskLevel) -> str:
    style = LEVEL_STYLES[level]
    return f"[{style}]{level.value}[/{style}]"


def truncate_path(path: str, width: int = 48) -> str:
    if len(path) > width:
        return "..." + path[-(width - 3):]
    return path


def render_hotspots_table(hotspots: list[Hotspot], verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("#", justify="right", style="bold")
    table.add_column("File", style="cyan", min_width=24)
    table.add_column("Score", justify="right")
    table.add_column("Level")
    table.add_column("Commits", justify="right")
    table.add_column("Authors", justify="right")
    table.add_column("Changes", justify="right")
    table.add_column("Bug fixes", justify="right")
    table.add_column("Why")

    for hs in hotspots:
        why = hs.reasons if verbose else hs.reasons[:1]
        if verbose and hs.recommendations:
            why = why + tuple(f"[dim]→ {rec}[/dim]" for rec in hs.recommendations)
        table.add_row(
            str(hs.rank),
            escape(truncate_path(hs.file_path)),
            f"{hs.risk_score:.3f}",
            format_level(hs.risk_level),
            str(hs.metrics.commit_count),
            str(hs.metrics.author_count),
            str(hs.metrics.total_changes),
            str(hs.metrics.bug_commits) if hs.metrics.bug_commits else "-",
            "\n".join(why) if why else "[dim]-[/dim]",
        )
    return table


def render_scores_table(scores: list[RiskScore]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("File", style="cyan", min_width=24)
    table.add_column("Score", justify="right")
    table.add_column("Level")
    table.add_column("Freq", justify="right")
    table.add_column("Authors", justify="right")
    table.add_column("Volume", justify="right")
    table.add_column("Bug ratio", justify="right")

    for rs in scores:
        f = rs.factors
        table.add_row(
            escape(truncate_path(rs.file_path)),
            f"{rs.score:.3f}",
            format_level(rs.risk_level),
            f"{f.change_frequency:.2f}",
            f"{f.author_diversity:.2f}",
            f"{f.change_volume:.2f}",
            f"{f.bug_ratio:.2f}",
        )
    return table


def render_summary_table(summary: dict[RiskLevel, int]) -> Table:
    total = sum(summary.values())
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("Level")
    table.add_column("Files", justify="right")
    table.add_column("Share", justify="right")

    for level, count in summary.items():
        share = f"{count / total:.0%}" if total else "-"
        table.add_row(format_level(level), str(count), share)
    return table


def render_trends_table(trends: list[RiskTrend]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("File", style="cyan", min_width=24)
    table.add_column("Trend")
    table.add_column("Confidence", justify="right")
    table.add_column("Scores")

    for tr in trends:
        scores = " → ".join(f"{score:.2f}" for _, score in tr.historical_scores)
        table.add_row(
            escape(truncate_path(tr.file_path)),
            TREND_MARKS[tr.trend],
            f"{tr.confidence:.0%}",
            scores,
        )
    return table


def weights_legend(risk: RiskConfig) -> str:
    return (
        "[dim]Score combines: commit frequency ({:.0%}), contributors ({:.0%}), "
        "change volume ({:.0%}), bug-fix ratio ({:.0%})[/dim]"
    ).format(
        risk.frequency_weight,
        risk.diversity_weight,
        risk.volume_weight,
        risk.bug_ratio_weight,
    )
