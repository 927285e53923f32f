"""URL input handling — canonicalize user input before it reaches the API."""

from __future__ import annotations

from urllib.parse import urlsplit

# Schemes that must carry a host to be meaningful.
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

# Code points a host may never contain.
_FORBIDDEN_HOST_CHARS = set(" \t\n\r#%/<>?@[\\]^|")


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme, defaulting to https."""
    if not url.startswith(("http://", "https://")):
        return "https://" + url
    return url


def validate_url(url: str) -> bool:
    """Return True when ``url`` parses as an absolute URL.

    Any parse failure (missing scheme, missing or malformed host, bad port)
    yields False rather than raising.  Whitespace is rejected in the scheme
    and host only; a space in the path or query is left for the HTTP client
    to percent-encode.
    """
    if not url:
        return False

    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError:
        return False

    if not parts.scheme or not parts.scheme[0].isalpha():
        return False

    if parts.scheme.lower() in _HOST_SCHEMES:
        host = parts.hostname or ""
        if not host:
            return False
        if any(ch.isspace() for ch in host):
            return False
        # IPv6 literals were already checked by urlsplit.
        if ":" not in host and any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
            return False

    return True


def is_valid_input(url: str) -> bool:
    """Check raw user input the way the form does: normalize, then validate."""
    return validate_url(normalize_url(url))
