"""Error taxonomy for the analysis pipeline.

Every failure is terminal for the current request: nothing is retried and no
partial ``AnalysisResult`` is ever returned.  The CLI catches ``AnalyzerError``
and prints ``kind`` alongside the message.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    MISSING_CONFIGURATION = "MissingConfiguration"
    UPSTREAM_ERROR = "UpstreamError"
    MALFORMED_RESPONSE = "MalformedResponse"


class AnalyzerError(Exception):
    """Base class for all pipeline errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(AnalyzerError):
    """The URL could not be parsed after normalization."""

    kind = ErrorKind.INVALID_INPUT


class MissingConfigurationError(AnalyzerError):
    """A required credential is absent for the selected backend."""

    kind = ErrorKind.MISSING_CONFIGURATION


class UpstreamError(AnalyzerError):
    """The analysis API returned a non-2xx status or could not be reached."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(AnalyzerError):
    """The response parsed but has no ``lighthouseResult`` node."""

    kind = ErrorKind.MALFORMED_RESPONSE
