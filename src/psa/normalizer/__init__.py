"""Report normalizer — raw PageSpeed payload in, ``AnalysisResult`` out."""

from psa.normalizer.recommendations import (
    STRATEGIES,
    CategoryDrivenStrategy,
    DirectScanStrategy,
    RecommendationStrategy,
    get_strategy,
)
from psa.normalizer.report import normalize_report

__all__ = [
    "STRATEGIES",
    "CategoryDrivenStrategy",
    "DirectScanStrategy",
    "RecommendationStrategy",
    "get_strategy",
    "normalize_report",
]
