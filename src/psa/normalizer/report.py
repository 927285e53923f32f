"""Report normalizer — maps a raw PageSpeed payload to an ``AnalysisResult``."""

from __future__ import annotations

import logging
import re
from typing import Any

from psa.errors import MalformedResponseError
from psa.normalizer.audits import Audit, as_mapping, is_number
from psa.normalizer.recommendations import RecommendationStrategy, get_strategy
from psa.normalizer.vitals import extract_core_web_vitals, round_half_up
from psa.schemas.report import AnalysisResult, CategoryScores, TechnicalInfo

logger = logging.getLogger(__name__)

# CategoryScores field -> Lighthouse category key
_SCORE_FIELDS = {
    "performance": "performance",
    "accessibility": "accessibility",
    "seo": "seo",
    "best_practices": "best-practices",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def extract_scores(lighthouse: dict[str, Any]) -> CategoryScores:
    """Scale each 0-1 category score to an integer 0-100; missing means 0."""
    categories = as_mapping(lighthouse.get("categories"))
    scores: dict[str, int] = {}
    for field, key in _SCORE_FIELDS.items():
        score = as_mapping(categories.get(key)).get("score")
        scores[field] = round_half_up(score * 100) if is_number(score) else 0
    return CategoryScores(**scores)


def parse_leading_int(value: object) -> int:
    """Parse the leading integer of ``value``, e.g. ``"2024-05-01T..."`` -> 2024.

    Returns 0 when there is no leading integer.
    """
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def extract_technical_info(lighthouse: dict[str, Any], audits: dict[str, Audit]) -> TechnicalInfo:
    """Read the timing summary from the first item of the ``metrics`` audit.

    The mapping is literal: ``speedIndex`` feeds ``server_response_time`` and
    ``firstMeaningfulPaint`` feeds ``page_load_time``.  When no page-load value
    is found, the leading integer of ``fetchTime`` is used instead.
    """
    server_response_time = 0.0
    dom_content_loaded = 0.0
    page_load_time = 0.0

    metrics = audits.get("metrics")
    if metrics is not None and metrics.details_items:
        item = metrics.details_items[0]
        server_response_time = _number_or_zero(item.get("speedIndex"))
        dom_content_loaded = _number_or_zero(item.get("domContentLoaded"))
        page_load_time = _number_or_zero(item.get("firstMeaningfulPaint"))

    fetch_time = lighthouse.get("fetchTime")
    if not page_load_time and fetch_time:
        page_load_time = float(parse_leading_int(fetch_time))

    return TechnicalInfo(
        server_response_time=server_response_time,
        dom_content_loaded=dom_content_loaded,
        page_load_time=page_load_time,
    )


def _number_or_zero(value: object) -> float:
    return float(value) if is_number(value) else 0.0


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def materialize_audits(lighthouse: dict[str, Any]) -> dict[str, Audit]:
    """Build the typed audit view, preserving payload order."""
    raw_audits = as_mapping(lighthouse.get("audits"))
    return {
        audit_id: Audit.from_raw(audit_id, record)
        for audit_id, record in raw_audits.items()
        if isinstance(audit_id, str)
    }


def normalize_report(
    raw: dict[str, Any],
    *,
    strategy: str | RecommendationStrategy = "direct-scan",
) -> AnalysisResult:
    """Normalize a raw PageSpeed response.

    Raises ``MalformedResponseError`` when ``lighthouseResult`` is absent.
    Pure: the same payload always yields an identical result.
    """
    lighthouse = raw.get("lighthouseResult") if isinstance(raw, dict) else None
    if not isinstance(lighthouse, dict):
        raise MalformedResponseError("Invalid API response: No lighthouse result")

    if isinstance(strategy, str):
        strategy = get_strategy(strategy)

    audits = materialize_audits(lighthouse)
    logger.debug("Normalizing report with %d audits (%s)", len(audits), strategy.name)

    return AnalysisResult(
        url=_text(lighthouse.get("requestedUrl")),
        final_url=_text(lighthouse.get("finalUrl")),
        fetch_time=_text(lighthouse.get("fetchTime")),
        scores=extract_scores(lighthouse),
        core_web_vitals=extract_core_web_vitals(audits),
        recommendations=strategy.extract(lighthouse, audits),
        technical_info=extract_technical_info(lighthouse, audits),
        full_report=raw,
    )
