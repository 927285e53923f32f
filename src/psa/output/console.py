"""Rich terminal view of an AnalysisResult."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from psa.output.scoring import (
    CATEGORY_LABELS,
    IMPACT_LABELS,
    STATUS_LABELS,
    UI_SCALE,
    format_fetch_time,
    score_status,
)
from psa.schemas.config import ScoreScale
from psa.schemas.report import AnalysisResult

STATUS_STYLES = {"good": "green", "needs-improvement": "yellow", "poor": "red"}
IMPACT_STYLES = {"high": "bold white on red", "medium": "bold black on yellow", "low": "bold white on blue"}


def score_bar(score: int, width: int = 20, scale: ScoreScale = UI_SCALE) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    color = STATUS_STYLES[score_status(score, scale)]

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * (width - filled), style="dim")
    bar.append(f" {score}/100", style=f"bold {color}")
    return bar


def print_result(
    result: AnalysisResult,
    console: Console,
    *,
    scale: ScoreScale = UI_SCALE,
    limit: int | None = 10,
) -> None:
    """Print the analysis to ``console``; ``limit`` caps the recommendation list."""
    console.print()
    console.print(Panel(
        f"[bold]{escape(result.final_url or result.url)}[/bold]\n"
        f"[dim]Fetched at {result.fetch_time or '—'}[/dim]",
        title="PageSpeed Analysis",
        border_style="magenta",
    ))

    # Scores
    console.print()
    for label, value in result.scores.labelled():
        console.print(f"  {label:<15}", end="")
        console.print(score_bar(value, width=25, scale=scale))

    # Core Web Vitals
    vitals = result.core_web_vitals.present()
    if vitals:
        table = Table(title="Core Web Vitals", box=box.SIMPLE, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Threshold", justify="right")
        table.add_column("Status")
        for label, vital in vitals:
            style = STATUS_STYLES[vital.status]
            table.add_row(
                f"{vital.name} ({label})",
                Text(f"{vital.value} {vital.unit}".strip(), style=style),
                f"{vital.threshold} {vital.unit}".strip(),
                f"[{style}]● {STATUS_LABELS[vital.status]}[/]",
            )
        console.print()
        console.print(table)

    # Technical info
    info = result.technical_info
    tech = Table(title="Technical Information", box=box.SIMPLE, show_header=False)
    tech.add_column("Field", style="dim")
    tech.add_column("Value")
    tech.add_row("Server response time", format_fetch_time(info.server_response_time))
    tech.add_row("DOM loaded", format_fetch_time(info.dom_content_loaded))
    tech.add_row("Page load time", format_fetch_time(info.page_load_time))
    console.print(tech)

    # Recommendations
    recs = result.recommendations
    if recs:
        shown = recs if limit is None else recs[:limit]
        console.print(f"[bold]Recommendations[/bold] [dim]({len(recs)} total)[/dim]\n")
        for index, rec in enumerate(shown, 1):
            badge = Text(f" {IMPACT_LABELS[rec.impact]:<4} ", style=IMPACT_STYLES[rec.impact])
            line = Text(f"{index:>3}. ")
            line.append_text(badge)
            line.append(f" {rec.title} ", style="bold")
            line.append(f"[{CATEGORY_LABELS[rec.category]}]", style="dim")
            console.print(line)
        if len(shown) < len(recs):
            console.print(f"[dim]     … and {len(recs) - len(shown)} more (see the exported report)[/dim]")
    else:
        console.print("[green]No recommendations — every actionable audit passed.[/green]")
    console.print()
