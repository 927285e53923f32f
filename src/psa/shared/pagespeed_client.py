"""Async HTTP clients for the two analysis backends.

``PageSpeedClient`` calls the Google PageSpeed Insights v5 API with an API key
and explicit category/strategy/locale parameters.  ``ProxyClient`` calls a
deployment proxy that takes the URL only.  Both return the raw JSON payload;
normalization happens elsewhere.

No retry or backoff: every failure is raised to the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from psa.errors import MalformedResponseError, MissingConfigurationError, UpstreamError
from psa.schemas.config import DEFAULT_API_URL, DEFAULT_CATEGORIES, AnalyzerConfig

logger = logging.getLogger(__name__)

Params = list[tuple[str, str]]


def _error_detail(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an API error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
    return ""


class AnalysisClient(ABC):
    """Base class for analysis backends.

    Subclasses implement:
    - ``name`` — backend identifier
    - ``endpoint`` — URL the GET request goes to
    - ``build_params(url)`` — query parameters for a normalized URL
    """

    def __init__(
        self,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier."""

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL the analysis request is sent to."""

    @abstractmethod
    def build_params(self, url: str) -> Params:
        """Return query parameters for ``url``."""

    def ensure_configured(self) -> None:
        """Raise ``MissingConfigurationError`` if a credential is missing."""

    async def fetch(self, url: str) -> dict[str, Any]:
        """Run one analysis and return the decoded JSON payload.

        Raises ``UpstreamError`` on a non-2xx status or transport failure and
        ``MalformedResponseError`` when the body is not a JSON object.
        """
        self.ensure_configured()
        logger.info("Requesting %s analysis for %s", self.name, url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
                response = await http.get(self.endpoint, params=self.build_params(url))
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.name, exc)
            raise UpstreamError(f"PageSpeed API Error: {str(exc) or 'Unknown error'}") from exc

        if not response.is_success:
            detail = (
                _error_detail(response)
                or f"Request failed with status code {response.status_code}"
            )
            logger.warning("%s returned HTTP %d: %s", self.name, response.status_code, detail)
            raise UpstreamError(
                f"PageSpeed API Error: {detail}", status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            raise MalformedResponseError("Invalid API response: No lighthouse result") from None
        if not isinstance(data, dict):
            raise MalformedResponseError("Invalid API response: No lighthouse result")
        return data


class PageSpeedClient(AnalysisClient):
    """Google PageSpeed Insights v5."""

    def __init__(
        self,
        api_key: str = "",
        *,
        api_url: str = DEFAULT_API_URL,
        strategy: str = "mobile",
        locale: str = "es",
        categories: list[str] | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key
        self.api_url = api_url
        self.strategy = strategy
        self.locale = locale
        self.categories = list(categories or DEFAULT_CATEGORIES)

    @property
    def name(self) -> str:
        return "google"

    @property
    def endpoint(self) -> str:
        return self.api_url

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise MissingConfigurationError(
                "API key not configured. Please set PAGESPEED_API_KEY in .env"
            )

    def build_params(self, url: str) -> Params:
        params: Params = [
            ("url", url),
            ("key", self.api_key),
            ("strategy", self.strategy),
            ("locale", self.locale),
        ]
        params.extend(("category", c) for c in self.categories)
        return params


class ProxyClient(AnalysisClient):
    """A deployment proxy that forwards the URL and returns the same payload."""

    def __init__(
        self,
        proxy_url: str,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.proxy_url = proxy_url

    @property
    def name(self) -> str:
        return "proxy"

    @property
    def endpoint(self) -> str:
        return self.proxy_url

    def build_params(self, url: str) -> Params:
        return [("url", url)]


def make_client(
    config: AnalyzerConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalysisClient:
    """Build the client for ``config.backend``."""
    if config.backend == "proxy":
        return ProxyClient(config.proxy_url, timeout=config.timeout, transport=transport)
    return PageSpeedClient(
        config.api_key,
        api_url=config.api_url,
        strategy=config.strategy,
        locale=config.locale,
        categories=config.categories,
        timeout=config.timeout,
        transport=transport,
    )
