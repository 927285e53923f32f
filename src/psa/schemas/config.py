"""Configuration schema — validates psa-config.yml."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator, model_validator

from psa.normalizer import STRATEGIES

DEFAULT_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
DEFAULT_CATEGORIES = ["performance", "accessibility", "seo", "best-practices"]


class ScoreScale(BaseModel):
    """Two cut-offs splitting 0-100 scores into good / medium / poor."""

    good: int = 85
    medium: int = 50

    @model_validator(mode="after")
    def check_ordering(self) -> "ScoreScale":
        if not 0 <= self.medium <= self.good <= 100:
            raise ValueError(
                f"Score scale must satisfy 0 <= medium <= good <= 100 (got {self.medium}/{self.good})"
            )
        return self


class AnalyzerConfig(BaseModel):
    """Top-level configuration loaded from psa-config.yml.

    ``backend: google`` calls the PageSpeed Insights API directly and needs an
    API key; ``backend: proxy`` calls ``proxy_url`` with the URL only.
    """

    backend: Literal["google", "proxy"] = "google"
    api_url: str = DEFAULT_API_URL
    proxy_url: str = ""
    api_key: str = ""  # falls back to PAGESPEED_API_KEY

    # Request parameters (google backend only)
    strategy: Literal["mobile", "desktop"] = "mobile"
    locale: str = "es"
    categories: list[str] = DEFAULT_CATEGORIES

    # Which recommendation adapter the normalizer uses
    normalizer: str = "direct-scan"

    timeout: float = 60.0

    # Output
    output_directory: str = "./output"

    # Colour scales: on-screen views vs. exported PDF
    ui_scale: ScoreScale = ScoreScale(good=85, medium=50)
    export_scale: ScoreScale = ScoreScale(good=90, medium=50)

    @field_validator("normalizer")
    @classmethod
    def check_normalizer(cls, v: str) -> str:
        if v not in STRATEGIES:
            raise ValueError(
                f"normalizer must be one of: {', '.join(STRATEGIES)} (got {v!r})"
            )
        return v

    @field_validator("categories")
    @classmethod
    def check_categories(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one category is required")
        unknown = [c for c in v if c not in DEFAULT_CATEGORIES]
        if unknown:
            raise ValueError(f"Unknown categories: {', '.join(unknown)}")
        return v

    @model_validator(mode="after")
    def check_proxy_url(self) -> "AnalyzerConfig":
        if self.backend == "proxy" and not self.proxy_url:
            raise ValueError("'proxy_url' is required when backend is 'proxy'")
        return self
