"""Tests for the Markdown report and the terminal view."""

from __future__ import annotations

from rich.console import Console

from psa.output.console import print_result, score_bar
from psa.output.markdown import render_markdown_report
from psa.output.scoring import EXPORT_SCALE
from psa.schemas.report import AnalysisResult


class TestMarkdownReport:
    def test_title_and_footer(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result, generated_at="2024-05-01T12:00:00")
        assert md.startswith("# Web Analysis Report: https://example.com/")
        assert "*Generated: 2024-05-01T12:00:00*" in md
        assert md.rstrip().endswith("*Powered by Google PageSpeed Insights*")

    def test_score_table(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result)
        assert "## Score Summary" in md
        assert "| Performance | 87/100 | Good |" in md
        assert "| Accessibility | 50/100 | Needs improvement |" in md
        assert "| Best Practices | 75/100 | Needs improvement |" in md

    def test_scale_changes_status(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result, scale=EXPORT_SCALE)
        assert "| Performance | 87/100 | Needs improvement |" in md

    def test_core_web_vitals(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result)
        assert "| Largest Contentful Paint (LCP) | 3000 ms | 2500 ms | 🟡 Needs improvement |" in md
        assert "| Cumulative Layout Shift (CLS) | 0.051 | 0.1 | 🟢 Good |" in md

    def test_technical_information(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result)
        assert "- **Server response time:** 1530.20 ms" in md
        assert "- **DOM loaded:** 850.00 ms" in md
        assert "- **Page load time:** 2100.00 ms" in md

    def test_recommendations_grouped(self, sample_result: AnalysisResult) -> None:
        md = render_markdown_report(sample_result)
        assert "### Performance (2)" in md
        assert "1. **[HIGH]** Reduce unused JavaScript (`unused-javascript`)" in md
        assert "2. **[MED]** Largest Contentful Paint (`largest-contentful-paint`)" in md
        assert "### SEO (1)" in md
        assert "### Best Practices (1)" in md
        assert md.index("### Performance") < md.index("### Accessibility") < md.index("### SEO")

    def test_no_recommendations_section_when_empty(self) -> None:
        md = render_markdown_report(AnalysisResult(url="https://example.com"))
        assert "## Recommendations" not in md
        assert "## Core Web Vitals" not in md
        assert "# Web Analysis Report: https://example.com" in md


class TestConsoleView:
    def _render(self, result: AnalysisResult, **kwargs) -> str:
        console = Console(record=True, width=140)
        print_result(result, console, **kwargs)
        return console.export_text()

    def test_prints_sections(self, sample_result: AnalysisResult) -> None:
        text = self._render(sample_result)
        assert "https://example.com/" in text
        assert "Core Web Vitals" in text
        assert "Reduce unused JavaScript" in text
        assert "5 total" in text

    def test_limit(self, sample_result: AnalysisResult) -> None:
        text = self._render(sample_result, limit=2)
        assert "and 3 more" in text
        assert "Document uses legible font sizes" not in text

    def test_empty_result(self) -> None:
        text = self._render(AnalysisResult(url="https://example.com"))
        assert "No recommendations" in text

    def test_score_bar(self) -> None:
        bar = score_bar(50, width=10)
        assert bar.plain == "█████░░░░░ 50/100"
