"""Rendering collaborator: matplotlib charts laid out into reportlab PDFs.

Every render runs in a worker thread under a timeout. Any failure, timeout
included, surfaces as ``TransientRenderError`` so the job runtime retries it.
"""

import asyncio
from typing import Callable, TypeVar

from ai_culture_diagnostic.adapters.chart_renderer import render_radar_png
from ai_culture_diagnostic.adapters.pdf_renderer import diagnostic_pdf, radar_pdf
from ai_culture_diagnostic.core.models import ChartSpec, DiagnosticResult
from ai_culture_diagnostic.errors import TransientRenderError
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ReportRenderer:
    """Implements IReportRenderer on top of matplotlib and reportlab.

    Args:
        timeout_seconds: Upper bound for one render call.
    """

    def __init__(self, timeout_seconds: float = 30.0) -> None:
        self._timeout = timeout_seconds

    async def _run(self, operation: str, func: Callable[..., T], *args: object) -> T:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), self._timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("Render timed out", operation=operation, timeout_seconds=self._timeout)
            raise TransientRenderError(
                f"{operation} exceeded {self._timeout}s render timeout"
            ) from exc
        except Exception as exc:
            logger.warning("Render failed", operation=operation, error=str(exc))
            raise TransientRenderError(f"{operation} failed: {exc}") from exc

    def _diagnostic_document(
        self,
        result: DiagnosticResult,
        ai_chart: ChartSpec,
        culture_chart: ChartSpec,
        title: str | None,
    ) -> bytes:
        return diagnostic_pdf(
            result,
            render_radar_png(ai_chart),
            render_radar_png(culture_chart),
            title,
        )

    def _radar_document(self, chart: ChartSpec, title: str | None) -> bytes:
        return radar_pdf(render_radar_png(chart), title or chart.title or None)

    async def render_diagnostic_pdf(
        self,
        result: DiagnosticResult,
        ai_chart: ChartSpec,
        culture_chart: ChartSpec,
        title: str | None = None,
    ) -> bytes:
        return await self._run(
            "diagnostic_pdf", self._diagnostic_document, result, ai_chart, culture_chart, title
        )

    async def render_radar_pdf(self, chart: ChartSpec, title: str | None = None) -> bytes:
        return await self._run("radar_pdf", self._radar_document, chart, title)

    async def render_radar_image(self, chart: ChartSpec) -> bytes:
        return await self._run("radar_image", render_radar_png, chart)
