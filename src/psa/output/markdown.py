"""Markdown report builder — renders AnalysisResult to a structured Markdown document."""

from __future__ import annotations

from psa.output.scoring import (
    CATEGORY_LABELS,
    IMPACT_LABELS,
    STATUS_LABELS,
    UI_SCALE,
    status_label,
)
from psa.schemas.config import ScoreScale
from psa.schemas.report import AnalysisResult


def render_markdown_report(
    result: AnalysisResult,
    *,
    generated_at: str = "",
    scale: ScoreScale = UI_SCALE,
) -> str:
    """Render an AnalysisResult into a Markdown string."""
    sections: list[str] = []

    # Title
    site = result.final_url or result.url
    sections.append(f"# Web Analysis Report: {site}\n")
    if generated_at:
        sections.append(f"*Generated: {generated_at}*\n")

    # Scores
    sections.append("## Score Summary\n")
    sections.append("| Category | Score | Status |")
    sections.append("|----------|-------|--------|")
    for label, score in result.scores.labelled():
        sections.append(f"| {label} | {score}/100 | {status_label(score, scale)} |")
    sections.append("")

    # Core Web Vitals
    vitals = result.core_web_vitals.present()
    if vitals:
        sections.append("## Core Web Vitals\n")
        sections.append("| Metric | Value | Threshold | Status |")
        sections.append("|--------|-------|-----------|--------|")
        for label, vital in vitals:
            value = f"{vital.value} {vital.unit}".strip()
            threshold = f"{vital.threshold} {vital.unit}".strip()
            status_icon = {"good": "🟢", "needs-improvement": "🟡", "poor": "🔴"}[vital.status]
            sections.append(
                f"| {vital.name} ({label}) | {value} | {threshold} | {status_icon} {STATUS_LABELS[vital.status]} |"
            )
        sections.append("")

    # Technical info
    info = result.technical_info
    sections.append("## Technical Information\n")
    sections.append(f"- **Site URL:** {result.final_url or 'N/A'}")
    sections.append(f"- **Analysis time:** {result.fetch_time or 'N/A'}")
    sections.append(f"- **Server response time:** {info.server_response_time:.2f} ms")
    sections.append(f"- **DOM loaded:** {info.dom_content_loaded:.2f} ms")
    sections.append(f"- **Page load time:** {info.page_load_time:.2f} ms")
    sections.append("")

    # Recommendations, grouped by category
    if result.recommendations:
        sections.append("## Recommendations by Category\n")
        for category, recs in result.recommendations_by_category().items():
            if not recs:
                continue
            sections.append(f"### {CATEGORY_LABELS[category]} ({len(recs)})\n")
            for index, rec in enumerate(recs, 1):
                sections.append(f"{index}. **[{IMPACT_LABELS[rec.impact]}]** {rec.title} (`{rec.id}`)")
                sections.append(f"   {_one_line(rec.description)}")
            sections.append("")

    # Footer
    sections.append("---\n")
    sections.append("*Powered by Google PageSpeed Insights*")

    return "\n".join(sections)


def _one_line(text: str) -> str:
    """Collapse whitespace so multi-line descriptions stay inside a list item."""
    return " ".join(text.split())
