"""Pipeline entry point: URL in, normalized ``AnalysisResult`` out."""

from __future__ import annotations

import logging

from psa.errors import InvalidInputError
from psa.normalizer import normalize_report
from psa.schemas.config import AnalyzerConfig
from psa.schemas.report import AnalysisResult
from psa.shared.pagespeed_client import AnalysisClient, make_client
from psa.shared.urls import normalize_url, validate_url

logger = logging.getLogger(__name__)


async def analyze_url(
    url: str,
    config: AnalyzerConfig,
    *,
    client: AnalysisClient | None = None,
) -> AnalysisResult:
    """Analyze ``url`` and return the normalized result.

    1. Normalizes the URL (adds ``https://`` when no scheme is given)
    2. Validates it — ``InvalidInputError`` before any network call
    3. Checks backend credentials — ``MissingConfigurationError``
    4. Fetches the raw report and normalizes it
    """
    normalized = normalize_url(url)
    if not validate_url(normalized):
        raise InvalidInputError("Invalid URL format")

    client = client or make_client(config)
    client.ensure_configured()

    raw = await client.fetch(normalized)
    result = normalize_report(raw, strategy=config.normalizer)
    logger.info(
        "Analysis of %s complete: performance=%d, %d recommendations",
        result.final_url or normalized,
        result.scores.performance,
        len(result.recommendations),
    )
    return result
