"""YAML config loader — reads psa-config.yml into AnalyzerConfig."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from psa.schemas.config import AnalyzerConfig

API_KEY_ENV = "PAGESPEED_API_KEY"


def load_config(path: str | Path | None = None) -> AnalyzerConfig:
    """Load and validate a config file, or build the defaults when ``path`` is None.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.  The API key
    falls back to the ``PAGESPEED_API_KEY`` environment variable.
    """
    raw: dict = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        loaded = yaml.safe_load(path.read_text())
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must be a YAML mapping, got {type(loaded).__name__}")
        raw = loaded

    # YAML loads lists with only commented-out items as None; drop the key so
    # the default applies.  Also strip empty-string or None items.
    if "categories" in raw:
        if raw["categories"] is None:
            del raw["categories"]
        elif isinstance(raw["categories"], list):
            raw["categories"] = [item for item in raw["categories"] if item]

    if not raw.get("api_key"):
        raw["api_key"] = os.getenv(API_KEY_ENV, "")

    return AnalyzerConfig(**raw)
