"""Tests for the PDF exporter."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from psa.output.pdf import PdfReport, _plain, generate_pdf_report, report_file_name, sanitize_file_name
from psa.schemas.report import AnalysisResult, Recommendation

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _many_recommendations(count: int) -> list[Recommendation]:
    return [
        Recommendation(
            id=f"audit-{index:03d}",
            title=f"Recommendation number {index}",
            description="A fairly long description that keeps going. " * 8,
            impact="medium",
            category="performance",
        )
        for index in range(count)
    ]


class TestFileNames:
    def test_sanitize(self) -> None:
        assert sanitize_file_name("https://www.example.com/path?q=1") == "www-example-com-path-q-1"

    def test_sanitize_truncates(self) -> None:
        name = sanitize_file_name("https://" + "a" * 100 + ".com")
        assert name == "a" * 30

    def test_report_file_name(self) -> None:
        assert report_file_name("https://example.com", NOW) == "lighthouse-report-example-com-1714521600000.pdf"

    def test_plain_drops_link_targets(self) -> None:
        assert _plain("Fix it.  [Learn more](https://web.dev/x/).") == "Fix it. Learn more."


class TestPdfReport:
    def test_render_returns_pdf_bytes(self, sample_result: AnalysisResult) -> None:
        report = PdfReport(now=NOW)
        data = report.render(sample_result)
        assert data.startswith(b"%PDF")
        assert report.page_count == 1

    def test_empty_result(self) -> None:
        data = PdfReport(now=NOW).render(AnalysisResult())
        assert data.startswith(b"%PDF")

    def test_long_reports_paginate(self, sample_result: AnalysisResult) -> None:
        result = sample_result.model_copy(update={"recommendations": _many_recommendations(40)})
        report = PdfReport(now=NOW)
        report.render(result)
        assert report.page_count > 1

    def test_save(self, sample_result: AnalysisResult, tmp_path: Path) -> None:
        path = PdfReport(now=NOW).save(sample_result, tmp_path / "out")
        assert path.parent == tmp_path / "out"
        assert path.name == "lighthouse-report-example-com-1714521600000.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_generate_pdf_report(self, sample_result: AnalysisResult, tmp_path: Path) -> None:
        path = generate_pdf_report(sample_result, tmp_path)
        assert path.exists()
        assert path.name.startswith("lighthouse-report-example-com-")
        assert path.suffix == ".pdf"
