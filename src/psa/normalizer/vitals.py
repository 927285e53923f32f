"""Core Web Vitals extraction and status computation."""

from __future__ import annotations

import math

from psa.normalizer.audits import Audit
from psa.normalizer.tables import THRESHOLDS, TOLERANCE_FACTOR
from psa.schemas.report import CoreWebVital, CoreWebVitals


def round_half_up(value: float, digits: int = 0) -> int | float:
    """Round with halves going up (towards +inf), unlike ``round()``.

    ``digits=0`` returns an int.
    """
    if digits == 0:
        return math.floor(value + 0.5)
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def vital_status(value: float, threshold: float) -> str:
    """Classify a lower-is-better measurement against its threshold.

    The boundary itself belongs to the better bucket: ``value == threshold``
    is good and ``value == threshold * 1.5`` still needs improvement.
    """
    if value <= threshold:
        return "good"
    if value <= threshold * TOLERANCE_FACTOR:
        return "needs-improvement"
    return "poor"


# (result field, audit id, display name, threshold key, unit, decimals)
_VITALS = (
    ("lcp", "largest-contentful-paint", "Largest Contentful Paint", "LCP", "ms", 0),
    ("fcp", "first-contentful-paint", "First Contentful Paint", "FCP", "ms", 0),
    ("cls", "cumulative-layout-shift", "Cumulative Layout Shift", "CLS", "", 3),
)


def extract_core_web_vitals(audits: dict[str, Audit]) -> CoreWebVitals:
    """Build LCP/FCP/CLS from their audits; a missing audit omits the vital."""
    vitals: dict[str, CoreWebVital] = {}
    for field, audit_id, name, key, unit, decimals in _VITALS:
        audit = audits.get(audit_id)
        if audit is None or audit.numeric_value is None:
            continue
        value = round_half_up(audit.numeric_value, decimals)
        threshold = THRESHOLDS[key]
        vitals[field] = CoreWebVital(
            name=name,
            value=value,
            threshold=threshold,
            unit=unit,
            status=vital_status(value, threshold),
        )
    return CoreWebVitals(**vitals)
