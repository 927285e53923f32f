"""Tests for audit filtering, impact assignment and the two extraction strategies."""

from __future__ import annotations

from typing import Any

import pytest

from psa.normalizer import (
    STRATEGIES,
    CategoryDrivenStrategy,
    DirectScanStrategy,
    get_strategy,
    normalize_report,
)
from psa.normalizer.audits import Audit
from psa.normalizer.recommendations import sort_recommendations
from psa.schemas.report import Recommendation


def _audit(**fields: Any) -> Audit:
    record = {"title": "Some audit", "description": "Does a thing."}
    record.update(fields)
    return Audit.from_raw("some-audit", record)


def _rec(rec_id: str, title: str, impact: str = "medium", category: str = "performance") -> Recommendation:
    return Recommendation(id=rec_id, title=title, description="d", impact=impact, category=category)


class TestAuditFilter:
    def test_perfect_score_is_skipped(self) -> None:
        assert not _audit(score=1).is_actionable

    @pytest.mark.parametrize("mode", ["notApplicable", "manual", "informative"])
    def test_advisory_modes_are_skipped(self, mode: str) -> None:
        assert not _audit(score=0.2, scoreDisplayMode=mode).is_actionable

    def test_missing_title_is_skipped(self) -> None:
        assert not _audit(score=0.2, title="").is_actionable

    def test_missing_description_is_skipped(self) -> None:
        assert not Audit.from_raw("x", {"title": "T", "score": 0.2}).is_actionable

    def test_null_score_is_actionable(self) -> None:
        assert _audit(score=None, scoreDisplayMode="numeric").is_actionable

    def test_non_dict_record(self) -> None:
        audit = Audit.from_raw("x", "not-a-record")
        assert audit.title == ""
        assert not audit.is_actionable


class TestImpact:
    @pytest.mark.parametrize(
        "score,expected",
        [(0, "high"), (0.49, "high"), (0.5, "medium"), (0.89, "medium"), (0.9, "low"), (0.99, "low")],
    )
    def test_numeric_score(self, score: float, expected: str) -> None:
        assert _audit(score=score).impact() == expected

    def test_null_score_is_medium(self) -> None:
        assert _audit(score=None).impact() == "medium"

    def test_binary_zero_is_high(self) -> None:
        assert _audit(score=0, scoreDisplayMode="binary").impact() == "high"

    def test_binary_zero_as_text_is_medium(self) -> None:
        audit = _audit(score="0", scoreDisplayMode="binary")
        assert audit.score is None
        assert audit.impact() == "medium"

    def test_binary_null_is_medium(self) -> None:
        assert _audit(score=None, scoreDisplayMode="binary").impact() == "medium"

    def test_bool_score_is_not_numeric(self) -> None:
        audit = _audit(score=True)
        assert audit.score is None
        assert audit.impact() == "medium"


class TestSorting:
    def test_impact_then_category_then_title(self) -> None:
        recs = [
            _rec("d", "Low perf", impact="low"),
            _rec("c", "Medium seo", category="seo"),
            _rec("b", "Medium perf"),
            _rec("a", "High practices", impact="high", category="practices"),
        ]
        assert [r.id for r in sort_recommendations(recs)] == ["a", "b", "c", "d"]

    def test_title_comparison_ignores_case(self) -> None:
        recs = [_rec("b", "Banana fix"), _rec("a", "apple fix")]
        assert [r.title for r in sort_recommendations(recs)] == ["apple fix", "Banana fix"]

    def test_id_breaks_exact_ties(self) -> None:
        recs = [_rec("zeta", "Same"), _rec("alpha", "Same")]
        assert [r.id for r in sort_recommendations(recs)] == ["alpha", "zeta"]


class TestStrategies:
    def test_registry(self) -> None:
        assert set(STRATEGIES) == {"direct-scan", "category-driven"}
        assert isinstance(get_strategy("direct-scan"), DirectScanStrategy)
        assert isinstance(get_strategy("category-driven"), CategoryDrivenStrategy)

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ValueError, match="direct-scan, category-driven"):
            get_strategy("nope")

    def test_strategies_agree_on_complete_payload(self, raw_report: dict[str, Any]) -> None:
        direct = normalize_report(raw_report, strategy="direct-scan")
        driven = normalize_report(raw_report, strategy="category-driven")
        assert direct.recommendations == driven.recommendations

    def test_category_driven_ignores_unreferenced_audits(self, raw_report: dict[str, Any]) -> None:
        raw_report["lighthouseResult"]["audits"]["render-blocking-resources"] = {
            "title": "Eliminate render-blocking resources",
            "description": "Resources are blocking the first paint of your page.",
            "score": 0.4,
            "scoreDisplayMode": "metricSavings",
        }
        direct = normalize_report(raw_report, strategy="direct-scan")
        driven = normalize_report(raw_report, strategy="category-driven")
        assert "render-blocking-resources" in [r.id for r in direct.recommendations]
        assert "render-blocking-resources" not in [r.id for r in driven.recommendations]

    def test_category_driven_uses_reporting_category(self) -> None:
        raw = {
            "lighthouseResult": {
                "categories": {
                    "performance": {"auditRefs": [{"id": "font-size"}]},
                    "seo": {"auditRefs": [{"id": "font-size"}]},
                },
                "audits": {
                    "font-size": {"title": "Legible fonts", "description": "Too small.", "score": 0.4},
                },
            }
        }
        recs = normalize_report(raw, strategy="category-driven").recommendations
        assert len(recs) == 1
        assert recs[0].category == "performance"

        direct = normalize_report(raw, strategy="direct-scan").recommendations
        assert direct[0].category == "seo"

    def test_category_driven_skips_dangling_refs(self) -> None:
        raw = {
            "lighthouseResult": {
                "categories": {"seo": {"auditRefs": [{"id": "missing-audit"}, {"weight": 1}, "junk"]}},
                "audits": {},
            }
        }
        assert normalize_report(raw, strategy="category-driven").recommendations == []

    def test_unknown_audit_uses_inferred_category(self) -> None:
        raw = {
            "lighthouseResult": {
                "audits": {
                    "aria-foo": {"title": "ARIA thing", "description": "Fix it.", "score": 0},
                    "mystery": {"title": "Mystery", "description": "Fix it too.", "score": 0},
                },
            }
        }
        recs = {r.id: r for r in normalize_report(raw).recommendations}
        assert recs["aria-foo"].category == "accessibility"
        assert recs["mystery"].category == "practices"
