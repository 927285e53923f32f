"""Static HTML dashboard generator — renders AnalysisResult to a self-contained HTML file."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

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

_TEMPLATE_DIR = Path(__file__).parent / "templates"

_MD_LINK = re.compile(r"\[([^\]]+)\]\((https?://[^)\s]+)\)")


def _md_links_to_html(text: str) -> Markup:
    """Escape ``text`` and turn Markdown ``[label](url)`` links into anchors.

    Lighthouse audit descriptions end with a "Learn more" link in this form.
    """
    parts: list[str] = []
    last = 0
    for match in _MD_LINK.finditer(text):
        parts.append(str(escape(text[last:match.start()])))
        parts.append(
            f'<a href="{escape(match.group(2))}" target="_blank" rel="noopener">'
            f"{escape(match.group(1))}</a>"
        )
        last = match.end()
    parts.append(str(escape(text[last:])))
    return Markup("".join(parts))


def render_dashboard(
    result: AnalysisResult,
    *,
    generated_at: str = "",
    scale: ScoreScale = UI_SCALE,
) -> str:
    """Render an AnalysisResult into a self-contained HTML dashboard.

    Score colours follow ``scale`` (the on-screen 85/50 scale by default).
    """
    env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)
    env.filters["md_links"] = _md_links_to_html
    template = env.get_template("dashboard.html")

    scores = [
        {"label": label, "value": value, "status": score_status(value, scale)}
        for label, value in result.scores.labelled()
    ]

    vitals = [
        {"label": label, **vital.model_dump()}
        for label, vital in result.core_web_vitals.present()
    ]

    groups = [
        {"category": category, "label": CATEGORY_LABELS[category], "recommendations": [r.model_dump() for r in recs]}
        for category, recs in result.recommendations_by_category().items()
        if recs
    ]

    return template.render(
        site=result.final_url or result.url,
        requested_url=result.url,
        fetch_time=result.fetch_time,
        generated_at=generated_at,
        scores=scores,
        vitals=vitals,
        technical_info=result.technical_info.model_dump(),
        groups=groups,
        status_labels=STATUS_LABELS,
        impact_labels=IMPACT_LABELS,
        format_ms=format_fetch_time,
    )
