"""Score colour scales and display formatting shared by the renderers.

Two scales exist on purpose: on-screen views call a score "good" from 85,
the exported PDF only from 90.  Both are configurable independently.
"""

from __future__ import annotations

import math

from psa.normalizer.vitals import round_half_up
from psa.schemas.config import ScoreScale

UI_SCALE = ScoreScale(good=85, medium=50)
EXPORT_SCALE = ScoreScale(good=90, medium=50)

STATUS_LABELS = {
    "good": "Good",
    "needs-improvement": "Needs improvement",
    "poor": "Poor",
}

IMPACT_LABELS = {"high": "HIGH", "medium": "MED", "low": "LOW"}

CATEGORY_LABELS = {
    "performance": "Performance",
    "accessibility": "Accessibility",
    "seo": "SEO",
    "practices": "Best Practices",
}


def score_status(score: float = 0, scale: ScoreScale = UI_SCALE) -> str:
    """Bucket a 0-100 score into good / needs-improvement / poor."""
    if score >= scale.good:
        return "good"
    if score >= scale.medium:
        return "needs-improvement"
    return "poor"


def status_label(score: float = 0, scale: ScoreScale = UI_SCALE) -> str:
    return STATUS_LABELS[score_status(score, scale)]


def format_fetch_time(value: str | float | None) -> str:
    """Format a millisecond duration as ``"N ms"`` or ``"N.NN s"``.

    Non-numeric values are passed through unchanged; empty values become "—".
    """
    if value is None or value == "":
        return "—"
    try:
        ms = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(ms):
        return str(value)
    if ms < 1000:
        return f"{round_half_up(ms)} ms"
    return f"{ms / 1000:.2f} s"
