"""PDF page layout with the reportlab canvas API.

Blocking functions; the report renderer runs them in worker threads.
"""

from __future__ import annotations

import io

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ai_culture_diagnostic.core.models import DiagnosticResult, DimensionAnalysis

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
PRIMARY_COLOR = colors.HexColor("#3690d8")
BOX_COLOR = colors.HexColor("#eaf3fb")

DEFAULT_DIAGNOSTIC_TITLE = "Diagnóstico de Maturidade em IA e Cultura Organizacional"
DEFAULT_RADAR_TITLE = "Gráfico Radar"


class _PageWriter:
    """Top-down cursor over a canvas that starts a new page when full."""

    def __init__(self, c: canvas.Canvas) -> None:
        self.c = c
        self.width, self.height = A4
        self.margin = 0.75 * inch
        self.y = self.height - self.margin

    @property
    def text_width(self) -> float:
        return self.width - 2 * self.margin

    def new_page(self) -> None:
        self.c.showPage()
        self.y = self.height - self.margin

    def ensure(self, space: float) -> None:
        if self.y - space < self.margin:
            self.new_page()

    def gap(self, dy: float = 8) -> None:
        self.y -= dy

    def heading(self, text: str, size: int = 14) -> None:
        self.ensure(size + 12)
        self.c.setFillColor(PRIMARY_COLOR)
        self.c.setFont(BOLD_FONT, size)
        self.c.drawString(self.margin, self.y, text)
        self.c.setFillColor(colors.black)
        self.y -= size + 8

    def paragraph(self, text: str, size: int = 10, font: str = BODY_FONT, indent: float = 0) -> None:
        leading = size * 1.4
        for block in text.split("\n"):
            lines = simpleSplit(block, font, size, self.text_width - indent) or [""]
            for line in lines:
                self.ensure(leading)
                self.c.setFont(font, size)
                self.c.drawString(self.margin + indent, self.y, line)
                self.y -= leading

    def bullets(self, items: tuple[str, ...] | list[str], size: int = 10) -> None:
        for item in items:
            self.paragraph(f"• {item}", size=size, indent=8)
            self.gap(2)

    def box(self, text: str, size: int = 11) -> None:
        leading = size * 1.4
        lines = simpleSplit(text, BOLD_FONT, size, self.text_width - 20)
        box_height = len(lines) * leading + 14
        self.ensure(box_height)
        top = self.y
        self.c.setFillColor(BOX_COLOR)
        self.c.setStrokeColor(PRIMARY_COLOR)
        self.c.rect(self.margin, top - box_height, self.text_width, box_height, fill=1)
        self.c.setFillColor(colors.black)
        self.c.setFont(BOLD_FONT, size)
        baseline = top - 7 - size
        for line in lines:
            self.c.drawString(self.margin + 10, baseline, line)
            baseline -= leading
        self.y = top - box_height - 10

    def image(self, png: bytes, size: float = 4.5 * inch) -> None:
        self.ensure(size)
        x = self.margin + (self.text_width - size) / 2
        self.c.drawImage(
            ImageReader(io.BytesIO(png)),
            x,
            self.y - size,
            width=size,
            height=size,
            preserveAspectRatio=True,
            mask="auto",
        )
        self.y -= size + 10


def _dimension_section(
    page: _PageWriter,
    title: str,
    score: int,
    analysis: DimensionAnalysis,
    chart_png: bytes,
) -> None:
    page.new_page()
    page.heading(title)
    page.paragraph(f"Pontuação: {score} / 40  |  Nível: {analysis.level}", font=BOLD_FONT)
    if analysis.description:
        page.paragraph(analysis.description)
    page.gap()
    page.image(chart_png)
    page.paragraph(analysis.diagnostic_text)


def diagnostic_pdf(
    result: DiagnosticResult,
    ai_chart_png: bytes,
    culture_chart_png: bytes,
    title: str | None = None,
) -> bytes:
    """Lay out the full diagnostic report.

    Args:
        result: Workflow result to present.
        ai_chart_png: AI maturity radar chart.
        culture_chart_png: Culture alignment radar chart.
        title: Document title (default Portuguese title if omitted).

    Returns:
        PDF bytes.
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    doc_title = title or DEFAULT_DIAGNOSTIC_TITLE
    c.setTitle(doc_title)
    page = _PageWriter(c)

    page.heading(doc_title, size=16)
    if result.company_name:
        page.paragraph(f"Empresa: {result.company_name}", font=BOLD_FONT, size=11)
    page.paragraph(f"Gerado em: {result.generated_at.strftime('%d/%m/%Y %H:%M')} UTC", size=9)
    page.gap(12)

    page.heading("Resultado Geral", size=13)
    page.paragraph(f"Maturidade em IA: {result.ai.score} / 40  ({result.ai.level})")
    page.paragraph(f"Cultura Organizacional: {result.culture.score} / 40  ({result.culture.level})")
    page.gap()
    page.box(f"{result.diagnostic_key}: {result.diagnostic_text}")

    page.heading("O que isso significa para sua empresa", size=13)
    for sentence in result.meaning:
        page.paragraph(sentence)
        page.gap(4)

    _dimension_section(page, "Maturidade em IA", result.ai.score, result.ai_analysis, ai_chart_png)
    _dimension_section(
        page, "Cultura Organizacional", result.culture.score, result.culture_analysis, culture_chart_png
    )

    page.new_page()
    page.heading("Análise Combinada")
    if result.bundle.strengths:
        page.heading("Pontos Fortes", size=12)
        page.bullets(result.bundle.strengths)
        page.gap()
    if result.bundle.improvement_areas:
        page.heading("Áreas de Melhoria", size=12)
        page.bullets(result.bundle.improvement_areas)
        page.gap()
    page.heading("Recomendações", size=12)
    page.bullets(result.bundle.recommendations)

    c.save()
    return buffer.getvalue()


def radar_pdf(chart_png: bytes, title: str | None = None) -> bytes:
    """One-page PDF holding a single radar chart."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    doc_title = title or DEFAULT_RADAR_TITLE
    c.setTitle(doc_title)
    page = _PageWriter(c)
    page.heading(doc_title, size=16)
    page.gap()
    page.image(chart_png, size=6 * inch)
    c.save()
    return buffer.getvalue()
