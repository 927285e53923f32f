"""Static lookup tables used by the report normalizer."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Core Web Vitals thresholds (LCP/FCP in milliseconds, CLS unitless).
THRESHOLDS: Mapping[str, float] = MappingProxyType({
    "LCP": 2500,
    "FCP": 1800,
    "CLS": 0.1,
})

# Multiplier on the threshold below which a vital "needs improvement".
TOLERANCE_FACTOR = 1.5

# Lighthouse category key -> internal category, in report order.
CATEGORY_KEYS: Mapping[str, str] = MappingProxyType({
    "performance": "performance",
    "accessibility": "accessibility",
    "seo": "seo",
    "best-practices": "practices",
})

_PERFORMANCE = (
    "unused-css",
    "unused-javascript",
    "modern-image-formats",
    "offscreen-images",
    "render-blocking-resources",
    "render-blocking-insight",
    "cumulative-layout-shift",
    "first-contentful-paint",
    "largest-contentful-paint",
    "speed-index",
    "interactive",
    "bootup-time",
    "mainthread-work-breakdown",
    "unminified-javascript",
    "unminified-css",
    "total-byte-weight",
    "total-blocking-time",
    "image-delivery-insight",
    "cache-insight",
    "font-display-insight",
    "network-server-latency",
    "legacy-javascript-insight",
    "duplicated-javascript-insight",
    "server-response-time",
    "redirects",
    "lcp-discovery-insight",
    "lcp-breakdown-insight",
    "network-dependency-tree-insight",
    "resource-summary",
    "network-rtt",
    "third-parties-insight",
    "forced-reflow-insight",
    "dom-size-insight",
    # metrics and diagnostics
    "metrics",
    "diagnostics",
    "main-thread-tasks",
    "user-timings",
)

_ACCESSIBILITY = (
    "color-contrast",
    "form-field-labels",
    "keyboard-navigation",
    "aria-allowed-role",
    "aria-hidden-focus",
    "aria-required-attr",
    "aria-required-children",
    "aria-required-parent",
    "aria-roles",
    "aria-valid-attr",
    "aria-valid-attr-value",
    "aria-allowed-attr",
    "aria-hidden-body",
    "aria-deprecated-role",
    "aria-conditional-attr",
    "aria-prohibited-attr",
    "image-alt",
    "input-image-alt",
    "link-name",
    "button-name",
    "form-field-multiple-labels",
    "select-name",
    "target-size",
    "html-has-lang",
    "html-lang-valid",
    "html-xml-lang-mismatch",
    "meta-viewport",
    "frame-title",
    "logical-tab-order",
    "use-landmarks",
    "heading-order",
    "list",
    "listitem",
    "definition-list",
    "dlitem",
    "video-caption",
    "label",
    "link-text",
    "empty-heading",
    "bypass",
    "focus-traps",
    "managed-focus",
    "interactive-element-affordance",
    "custom-controls-roles",
    "custom-controls-labels",
    "visual-order-follows-dom",
    "offscreen-content-hidden",
    "crawlable-anchors",
    "identical-links-same-purpose",
    "aria-input-field-name",
    "aria-meter-name",
    "aria-progressbar-name",
    "aria-toggle-field-name",
    "aria-command-name",
    "aria-dialog-name",
    "aria-text",
    "aria-treeitem-name",
    "label-content-name-mismatch",
    "object-alt",
    "table-duplicate-name",
    "table-fake-caption",
    "td-has-header",
    "td-headers-attr",
    "th-has-data-cells",
    "paste-preventing-inputs",
    "tabindex",
    "skip-link",
    "viewport-insight",
)

_SEO = (
    "meta-description",
    "font-size",
    "robots-txt",
    "canonical",
    "hreflang",
    "http-status-code",
    "is-crawlable",
    "redirects-http",
    "structured-data",
    "seo-content",
    "seo-crawl",
    "seo-mobile",
)

_PRACTICES = (
    "https",
    "no-vulnerable-libraries",
    "doctype",
    "errors-in-console",
    "valid-source-maps",
    "inspector-issues",
    "deprecations",
    "notification-on-start",
    "charset",
    "image-aspect-ratio",
    "image-size-responsive",
    "unsized-images",
    "clickjacking-mitigation",
    "csp-xss",
    "trusted-types-xss",
    "has-hsts",
    "origin-isolation",
    "third-party-cookies",
)


def _build_category_map() -> Mapping[str, str]:
    table: dict[str, str] = {}
    for category, ids in (
        ("performance", _PERFORMANCE),
        ("accessibility", _ACCESSIBILITY),
        ("seo", _SEO),
        ("practices", _PRACTICES),
    ):
        for audit_id in ids:
            table[audit_id] = category
    return MappingProxyType(table)


# Known audit id -> internal category.  Built once at import, read-only.
CATEGORY_MAP: Mapping[str, str] = _build_category_map()

# Substring heuristics for ids missing from CATEGORY_MAP, checked in order.
INFERENCE_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("accessibility", ("aria", "a11y", "contrast", "alt")),
    ("seo", ("seo", "crawl", "robots")),
    ("performance", ("performance", "image", "font", "cache")),
)


def infer_category(audit_id: str) -> str:
    """Classify an audit id: lookup table first, then substring patterns."""
    known = CATEGORY_MAP.get(audit_id)
    if known is not None:
        return known
    for category, needles in INFERENCE_PATTERNS:
        if any(needle in audit_id for needle in needles):
            return category
    return "practices"
