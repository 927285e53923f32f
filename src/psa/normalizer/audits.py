"""Typed view over a raw Lighthouse audit record."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict

# Display modes whose score carries no actionable signal.
ADVISORY_MODES = frozenset({"notApplicable", "manual", "informative"})


def is_number(value: object) -> bool:
    """True for real numbers; bools are rejected even though they subclass int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def as_mapping(value: object) -> dict[str, Any]:
    """Return ``value`` if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


class Audit(BaseModel):
    """One Lighthouse audit, materialized once per normalization call."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    description: str = ""
    score: float | None = None  # only set when the payload carries a real number
    raw_score: Any = None
    score_display_mode: str | None = None
    numeric_value: float | None = None
    details_items: list[dict[str, Any]] = []

    @classmethod
    def from_raw(cls, audit_id: str, record: object) -> "Audit":
        data = as_mapping(record)
        raw_score = data.get("score")
        numeric_value = data.get("numericValue")
        mode = data.get("scoreDisplayMode")
        items = as_mapping(data.get("details")).get("items")
        return cls(
            id=audit_id,
            title=_text(data.get("title")),
            description=_text(data.get("description")),
            score=raw_score if is_number(raw_score) else None,
            raw_score=raw_score,
            score_display_mode=mode if isinstance(mode, str) else None,
            numeric_value=numeric_value if is_number(numeric_value) else None,
            details_items=[i for i in items if isinstance(i, dict)] if isinstance(items, list) else [],
        )

    @property
    def is_perfect(self) -> bool:
        return self.score is not None and self.score == 1

    @property
    def is_advisory(self) -> bool:
        return self.score_display_mode in ADVISORY_MODES

    @property
    def is_actionable(self) -> bool:
        """Whether this audit should become a recommendation."""
        if self.is_perfect or self.is_advisory:
            return False
        return bool(self.title) and bool(self.description)

    def impact(self) -> str:
        """Derive the severity tier from the score and display mode."""
        if self.score is not None:
            if self.score < 0.5:
                return "high"
            if self.score < 0.9:
                return "medium"
            return "low"

        # Strict: a score serialized as text never counts as zero.
        if self.score_display_mode == "binary" and is_number(self.raw_score) and self.raw_score == 0:
            return "high"

        return "medium"
