"""PDF report exporter — draws an AnalysisResult onto an A4 reportlab canvas.

Layout is tracked with a top-down cursor (``self.y``, in points from the top
edge) and converted to reportlab's bottom-up coordinates at draw time.
"""

from __future__ import annotations

import io
import logging
import re
from datetime import datetime
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from psa.output.scoring import CATEGORY_LABELS, EXPORT_SCALE, IMPACT_LABELS, score_status
from psa.schemas.config import ScoreScale
from psa.schemas.report import AnalysisResult, CoreWebVital, Recommendation

logger = logging.getLogger(__name__)

PURPLE = colors.Color(88 / 255, 28 / 255, 135 / 255)
LIGHT_PURPLE = colors.Color(168 / 255, 85 / 255, 247 / 255)
WHITE = colors.white
GREY_TEXT = colors.Color(100 / 255, 100 / 255, 100 / 255)
DARK_TEXT = colors.Color(50 / 255, 50 / 255, 50 / 255)
BODY_TEXT = colors.Color(80 / 255, 80 / 255, 80 / 255)
PANEL_BG = colors.Color(245 / 255, 245 / 255, 245 / 255)
GROUP_BG = colors.Color(245 / 255, 245 / 255, 250 / 255)

GREEN = colors.Color(22 / 255, 163 / 255, 74 / 255)
AMBER = colors.Color(202 / 255, 138 / 255, 4 / 255)
RED = colors.Color(220 / 255, 38 / 255, 38 / 255)
BLUE = colors.Color(59 / 255, 130 / 255, 246 / 255)

# (box background, score text) per score status
SCORE_COLORS = {
    "good": (colors.Color(220 / 255, 252 / 255, 231 / 255), GREEN),
    "needs-improvement": (colors.Color(254 / 255, 243 / 255, 199 / 255), AMBER),
    "poor": (colors.Color(254 / 255, 226 / 255, 226 / 255), RED),
}
STATUS_COLORS = {"good": GREEN, "needs-improvement": AMBER, "poor": RED}
IMPACT_COLORS = {"high": RED, "medium": AMBER, "low": BLUE}

MARGIN = 20 * mm
TOP_MARGIN = 20 * mm
BOTTOM_MARGIN = 25 * mm
HEADER_HEIGHT = 45 * mm
FOOTER_HEIGHT = 15 * mm
MAX_DESCRIPTION_LINES = 2

_MD_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")


def sanitize_file_name(url: str) -> str:
    """Turn a URL into a short file-name fragment."""
    stripped = re.sub(r"^https?://", "", url)
    return re.sub(r"[^a-z0-9]", "-", stripped, flags=re.IGNORECASE).lower()[:30]


def report_file_name(url: str, now: datetime) -> str:
    return f"lighthouse-report-{sanitize_file_name(url)}-{int(now.timestamp() * 1000)}.pdf"


def _plain(text: str) -> str:
    """Drop Markdown link targets and collapse whitespace."""
    return " ".join(_MD_LINK.sub(r"\1", text).split())


class PdfReport:
    """Builds the paginated PDF for one analysis.

    Usage::

        pdf_bytes = PdfReport().render(result)
        path = PdfReport().save(result, Path("./output"))
    """

    def __init__(self, *, scale: ScoreScale = EXPORT_SCALE, now: datetime | None = None) -> None:
        self.scale = scale
        self.now = now or datetime.now()
        self.width, self.height = A4
        self.y = TOP_MARGIN
        self.page_count = 0
        self._canvas: canvas.Canvas | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, result: AnalysisResult) -> bytes:
        """Draw the full report and return the PDF bytes."""
        buffer = io.BytesIO()
        self._canvas = canvas.Canvas(buffer, pagesize=A4)
        self._canvas.setTitle(f"Web Analysis Report — {result.final_url or result.url}")
        self.page_count = 1

        self._add_header()
        self._add_scores(result)
        self._add_core_web_vitals(result)
        self._add_technical_info(result)
        self._add_recommendations(result)
        self._add_footer()

        self._canvas.showPage()
        self._canvas.save()
        self._canvas = None
        logger.debug("Rendered PDF report with %d page(s)", self.page_count)
        return buffer.getvalue()

    def save(self, result: AnalysisResult, directory: str | Path) -> Path:
        """Render and write the PDF into ``directory``; returns the file path."""
        out_dir = Path(directory)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / report_file_name(result.url or result.final_url, self.now)
        path.write_bytes(self.render(result))
        return path

    # ------------------------------------------------------------------
    # Layout bookkeeping
    # ------------------------------------------------------------------

    @property
    def c(self) -> canvas.Canvas:
        assert self._canvas is not None, "render() not running"
        return self._canvas

    def _to_pdf_y(self, top: float) -> float:
        return self.height - top

    def _check_page_break(self, required: float) -> None:
        """Start a new page when fewer than ``required`` points remain above the bottom margin."""
        if self.y + required > self.height - BOTTOM_MARGIN:
            self._add_footer()
            self.c.showPage()
            self.page_count += 1
            self.y = TOP_MARGIN

    def _fill_rect(self, x: float, top: float, w: float, h: float, color, radius: float = 0) -> None:
        self.c.setFillColor(color)
        if radius:
            self.c.roundRect(x, self._to_pdf_y(top + h), w, h, radius, stroke=0, fill=1)
        else:
            self.c.rect(x, self._to_pdf_y(top + h), w, h, stroke=0, fill=1)

    def _text(
        self,
        text: str,
        x: float,
        top: float,
        *,
        size: float,
        color,
        bold: bool = False,
        align: str = "left",
    ) -> None:
        self.c.setFillColor(color)
        self.c.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        if align == "center":
            self.c.drawCentredString(x, self._to_pdf_y(top), text)
        else:
            self.c.drawString(x, self._to_pdf_y(top), text)

    @staticmethod
    def _truncate(text: str, max_width: float, *, font: str, size: float) -> str:
        if stringWidth(text, font, size) <= max_width:
            return text
        truncated = text
        while truncated and stringWidth(truncated + "...", font, size) > max_width:
            truncated = truncated[:-1]
        return truncated + "..."

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _add_header(self) -> None:
        self._fill_rect(0, 0, self.width, HEADER_HEIGHT, PURPLE)
        self._text("Web Analysis Report", self.width / 2, 18 * mm, size=20, color=WHITE, bold=True, align="center")
        self._text(
            "Powered by Google PageSpeed Insights",
            self.width / 2, 32 * mm, size=9, color=WHITE, align="center",
        )
        self.y = HEADER_HEIGHT + 10 * mm

    def _add_footer(self) -> None:
        top = self.height - FOOTER_HEIGHT
        self._fill_rect(0, top, self.width, FOOTER_HEIGHT, PURPLE)
        stamp = self.now.strftime("%B %d, %Y %H:%M")
        self._text(
            f"Generated on {stamp} · page {self.page_count}",
            self.width / 2, top + 9 * mm, size=8, color=WHITE, align="center",
        )

    def _add_section_title(self, title: str) -> None:
        self._text(title, MARGIN, self.y, size=14, color=PURPLE, bold=True)
        self.c.setStrokeColor(LIGHT_PURPLE)
        self.c.setLineWidth(0.5 * mm)
        line_y = self._to_pdf_y(self.y + 2 * mm)
        self.c.line(MARGIN, line_y, self.width - MARGIN, line_y)
        self.y += 12 * mm

    def _add_scores(self, result: AnalysisResult) -> None:
        self._add_section_title("Score Summary")

        gap = 5 * mm
        box_width = (self.width - MARGIN * 2 - gap * 3) / 4
        box_height = 35 * mm

        for index, (label, value) in enumerate(result.scores.labelled()):
            x = MARGIN + index * (box_width + gap)
            bg, fg = SCORE_COLORS[score_status(value, self.scale)]
            self._fill_rect(x, self.y, box_width, box_height, bg, radius=3 * mm)
            self._text(label, x + box_width / 2, self.y + 12 * mm, size=10, color=GREY_TEXT, align="center")
            self._text(f"{value} /100", x + box_width / 2, self.y + 25 * mm, size=16, color=fg, bold=True, align="center")

        self.y += box_height + 15 * mm

    def _add_core_web_vitals(self, result: AnalysisResult) -> None:
        vitals = result.core_web_vitals.present()
        if not vitals:
            return

        self._check_page_break(60 * mm)
        self._add_section_title("Core Web Vitals")

        for _label, vital in vitals:
            self._add_vital_row(vital)

        self.y += 8 * mm

    def _add_vital_row(self, vital: CoreWebVital) -> None:
        color = STATUS_COLORS[vital.status]
        self._text(f"{vital.name}:", MARGIN, self.y, size=10, color=DARK_TEXT, bold=True)
        self._text(f"{vital.value} {vital.unit}".strip(), MARGIN + 70 * mm, self.y, size=10, color=color)
        self.c.setFillColor(color)
        self.c.circle(self.width - MARGIN - 5 * mm, self._to_pdf_y(self.y - 2 * mm), 2 * mm, stroke=0, fill=1)
        self.y += 10 * mm

    def _add_technical_info(self, result: AnalysisResult) -> None:
        self._check_page_break(70 * mm)
        self._add_section_title("Technical Information")

        self._fill_rect(MARGIN, self.y, self.width - MARGIN * 2, 55 * mm, PANEL_BG, radius=3 * mm)
        self.y += 10 * mm

        info = result.technical_info
        rows = [
            ("Site URL:", result.final_url),
            ("Analysis time:", result.fetch_time),
            ("Server response time:", f"{info.server_response_time:.2f} ms"),
            ("DOM loaded:", f"{info.dom_content_loaded:.2f} ms"),
            ("Page load time:", f"{info.page_load_time:.2f} ms"),
        ]
        max_width = self.width - MARGIN * 2 - 10 * mm - 80 * mm
        for label, value in rows:
            self._text(label, MARGIN + 5 * mm, self.y, size=9, color=GREY_TEXT)
            value = self._truncate(value or "—", max_width, font="Helvetica-Bold", size=9)
            self._text(value, MARGIN + 85 * mm, self.y, size=9, color=DARK_TEXT, bold=True)
            self.y += 8 * mm

        self.y += 10 * mm

    def _add_recommendations(self, result: AnalysisResult) -> None:
        if not result.recommendations:
            return

        self._check_page_break(40 * mm)
        self._add_section_title("Recommendations by Category")

        for category, recs in result.recommendations_by_category().items():
            if not recs:
                continue

            self._check_page_break(30 * mm)
            self._fill_rect(MARGIN, self.y, self.width - MARGIN * 2, 8 * mm, GROUP_BG, radius=2 * mm)
            self._text(
                f"{CATEGORY_LABELS[category]} ({len(recs)})",
                MARGIN + 3 * mm, self.y + 5.5 * mm, size=11, color=PURPLE, bold=True,
            )
            self.y += 16 * mm

            for index, rec in enumerate(recs, 1):
                self._add_recommendation_row(index, rec)

            self.y += 5 * mm

    def _add_recommendation_row(self, index: int, rec: Recommendation) -> None:
        self._check_page_break(22 * mm)
        indent = 3 * mm

        self._fill_rect(MARGIN + indent, self.y - 3 * mm, 15 * mm, 6 * mm, IMPACT_COLORS[rec.impact], radius=2 * mm)
        self._text(
            IMPACT_LABELS[rec.impact], MARGIN + indent + 7.5 * mm, self.y + 1 * mm,
            size=7, color=WHITE, bold=True, align="center",
        )

        title_width = self.width - MARGIN * 2 - 20 * mm - indent
        title = self._truncate(f"{index}. {rec.title}", title_width, font="Helvetica-Bold", size=9)
        self._text(title, MARGIN + indent + 20 * mm, self.y + 1 * mm, size=9, color=DARK_TEXT, bold=True)
        self.y += 7 * mm

        desc_width = self.width - MARGIN * 2 - 5 * mm - indent
        lines = simpleSplit(_plain(rec.description), "Helvetica", 7.5, desc_width)
        if len(lines) > MAX_DESCRIPTION_LINES:
            lines = lines[:MAX_DESCRIPTION_LINES]
            lines[-1] = self._truncate(lines[-1] + "...", desc_width, font="Helvetica", size=7.5)
        for offset, line in enumerate(lines):
            self._text(line, MARGIN + indent + 5 * mm, self.y + offset * 3.5 * mm, size=7.5, color=BODY_TEXT)

        self.y += len(lines) * 3.5 * mm + 5 * mm


def generate_pdf_report(
    result: AnalysisResult,
    directory: str | Path,
    *,
    scale: ScoreScale = EXPORT_SCALE,
) -> Path:
    """Convenience wrapper: render ``result`` and save it under ``directory``."""
    return PdfReport(scale=scale).save(result, directory)
