"""Pydantic models for the normalized analysis result."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Impact = Literal["high", "medium", "low"]
Category = Literal["performance", "accessibility", "seo", "practices"]
VitalStatus = Literal["good", "needs-improvement", "poor"]

IMPACT_ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}
CATEGORY_ORDER: dict[str, int] = {
    "performance": 0,
    "accessibility": 1,
    "seo": 2,
    "practices": 3,
}


class Recommendation(BaseModel):
    """An actionable audit the page did not fully pass."""

    id: str  # Lighthouse audit id, e.g. "unused-javascript"
    title: str
    description: str
    impact: Impact
    category: Category


class CoreWebVital(BaseModel):
    """A single Core Web Vital measurement with its computed status."""

    name: str  # e.g. "Largest Contentful Paint"
    value: int | float
    threshold: int | float
    unit: str = ""  # "ms", or "" for CLS
    status: VitalStatus


class CoreWebVitals(BaseModel):
    lcp: CoreWebVital | None = None
    fcp: CoreWebVital | None = None
    cls: CoreWebVital | None = None

    def present(self) -> list[tuple[str, CoreWebVital]]:
        """Return ``(label, vital)`` pairs for the vitals that were measured."""
        pairs = [("LCP", self.lcp), ("FCP", self.fcp), ("CLS", self.cls)]
        return [(label, vital) for label, vital in pairs if vital is not None]


class CategoryScores(BaseModel):
    """Category scores, 0-100."""

    performance: int = 0
    accessibility: int = 0
    seo: int = 0
    best_practices: int = 0

    def labelled(self) -> list[tuple[str, int]]:
        return [
            ("Performance", self.performance),
            ("Accessibility", self.accessibility),
            ("SEO", self.seo),
            ("Best Practices", self.best_practices),
        ]


class TechnicalInfo(BaseModel):
    """Timing summary pulled from the ``metrics`` audit.

    Field names follow the report UI; the values come from ``speedIndex``,
    ``domContentLoaded`` and ``firstMeaningfulPaint`` respectively.
    """

    server_response_time: float = 0.0
    dom_content_loaded: float = 0.0
    page_load_time: float = 0.0


class AnalysisResult(BaseModel):
    """The normalized output of one PageSpeed analysis."""

    url: str = ""
    final_url: str = ""
    fetch_time: str = ""
    scores: CategoryScores = CategoryScores()
    core_web_vitals: CoreWebVitals = CoreWebVitals()
    recommendations: list[Recommendation] = []
    technical_info: TechnicalInfo = TechnicalInfo()
    full_report: dict[str, Any] = Field(default_factory=dict)

    def recommendations_by_category(self) -> dict[str, list[Recommendation]]:
        """Group recommendations by category, in fixed category order."""
        grouped: dict[str, list[Recommendation]] = {c: [] for c in CATEGORY_ORDER}
        for rec in self.recommendations:
            grouped[rec.category].append(rec)
        return grouped
