"""Recommendation extraction — two payload adapters behind one interface.

``DirectScanStrategy`` walks every audit and classifies it with the static
lookup table; ``CategoryDrivenStrategy`` follows each category's
``auditRefs``.  Both share filtering, impact assignment and ordering, so they
agree whenever the payload's category metadata is complete.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator

from psa.normalizer.audits import Audit, as_mapping
from psa.normalizer.tables import CATEGORY_KEYS, infer_category
from psa.schemas.report import CATEGORY_ORDER, IMPACT_ORDER, Recommendation

logger = logging.getLogger(__name__)


def sort_key(rec: Recommendation) -> tuple[int, int, str, str]:
    """Impact, then category, then case-insensitive title; id breaks exact ties."""
    return (
        IMPACT_ORDER[rec.impact],
        CATEGORY_ORDER[rec.category],
        rec.title.casefold(),
        rec.id,
    )


def sort_recommendations(recs: list[Recommendation]) -> list[Recommendation]:
    return sorted(recs, key=sort_key)


class RecommendationStrategy(ABC):
    """Abstract base class for recommendation extraction.

    Subclasses implement:
    - ``name`` — identifier used in config and on the CLI
    - ``iter_candidates(lighthouse, audits)`` — yields ``(audit, category)``
      pairs to consider, before filtering
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used to select this strategy."""

    @abstractmethod
    def iter_candidates(
        self, lighthouse: dict[str, Any], audits: dict[str, Audit],
    ) -> Iterator[tuple[Audit, str]]:
        """Yield each candidate audit with its resolved category."""

    def extract(self, lighthouse: dict[str, Any], audits: dict[str, Audit]) -> list[Recommendation]:
        """Filter, classify and order the candidates."""
        recs: list[Recommendation] = []
        skipped = 0
        for audit, category in self.iter_candidates(lighthouse, audits):
            if not audit.is_actionable:
                skipped += 1
                continue
            recs.append(Recommendation(
                id=audit.id,
                title=audit.title,
                description=audit.description,
                impact=audit.impact(),
                category=category,
            ))

        logger.debug(
            "%s: %d recommendations, %d audits skipped", self.name, len(recs), skipped,
        )
        return sort_recommendations(recs)


class DirectScanStrategy(RecommendationStrategy):
    """Consider every audit in the payload."""

    @property
    def name(self) -> str:
        return "direct-scan"

    def iter_candidates(
        self, lighthouse: dict[str, Any], audits: dict[str, Audit],
    ) -> Iterator[tuple[Audit, str]]:
        for audit_id, audit in audits.items():
            yield audit, infer_category(audit_id)


class CategoryDrivenStrategy(RecommendationStrategy):
    """Consider only audits referenced from a known category.

    An audit referenced by several categories is emitted once, under the
    first category in report order.
    """

    @property
    def name(self) -> str:
        return "category-driven"

    def iter_candidates(
        self, lighthouse: dict[str, Any], audits: dict[str, Audit],
    ) -> Iterator[tuple[Audit, str]]:
        categories = as_mapping(lighthouse.get("categories"))
        seen: set[str] = set()
        for key, category in CATEGORY_KEYS.items():
            refs = as_mapping(categories.get(key)).get("auditRefs")
            if not isinstance(refs, list):
                continue
            for ref in refs:
                audit_id = as_mapping(ref).get("id")
                if not isinstance(audit_id, str) or audit_id in seen:
                    continue
                audit = audits.get(audit_id)
                if audit is None:
                    continue
                seen.add(audit_id)
                yield audit, category


STRATEGIES: dict[str, type[RecommendationStrategy]] = {
    "direct-scan": DirectScanStrategy,
    "category-driven": CategoryDrivenStrategy,
}


def get_strategy(name: str) -> RecommendationStrategy:
    """Instantiate a strategy by name.

    Raises ``ValueError`` for unknown names.
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown normalizer strategy {name!r} (expected one of: {', '.join(STRATEGIES)})"
        ) from None
