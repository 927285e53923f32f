"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from psa.normalizer import normalize_report
from psa.schemas.report import AnalysisResult

# Root of the test fixtures
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def raw_report() -> dict[str, Any]:
    """A fresh copy of the sample PageSpeed response."""
    return json.loads((FIXTURES_DIR / "pagespeed_response.json").read_text())


@pytest.fixture
def sample_result(raw_report: dict[str, Any]) -> AnalysisResult:
    """The sample response, normalized."""
    return normalize_report(raw_report)


@pytest.fixture(autouse=True)
def no_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PAGESPEED_API_KEY from leaking into config tests."""
    monkeypatch.delenv("PAGESPEED_API_KEY", raising=False)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "psa-config.yml"
    cfg.write_text(
        """\
api_key: "test-key"
strategy: desktop
output_directory: "{out}"
""".format(out=str(tmp_path / "output"))
    )
    return cfg


@pytest.fixture
def make_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build an httpx MockTransport that records requests and replies with ``response``."""

    def _make(
        response: httpx.Response | None = None,
        *,
        json_body: Any = None,
        error: Exception | None = None,
    ) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if error is not None:
                raise error
            if response is not None:
                return response
            return httpx.Response(200, json=json_body)

        return httpx.MockTransport(handler), seen

    return _make
