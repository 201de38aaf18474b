"""Abstract interfaces (Protocol classes) for the diagnostic service.

The workflow and the job processors depend on these interfaces, not on the
concrete matplotlib/reportlab/httpx adapters. Tests substitute fakes.
"""

from typing import Any, Mapping, Protocol, runtime_checkable

from ai_culture_diagnostic.core.models import ChartSpec, DiagnosticResult


@runtime_checkable
class IReportRenderer(Protocol):
    """Rendering collaborator: charts and PDF layout.

    Implementations raise ``TransientRenderError`` on any rendering failure.
    """

    async def render_diagnostic_pdf(
        self,
        result: DiagnosticResult,
        ai_chart: ChartSpec,
        culture_chart: ChartSpec,
        title: str | None = None,
    ) -> bytes:
        """Lay out the full diagnostic report and return the PDF bytes."""
        ...

    async def render_radar_pdf(self, chart: ChartSpec, title: str | None = None) -> bytes:
        """Render a single radar chart into a one-page PDF."""
        ...

    async def render_radar_image(self, chart: ChartSpec) -> bytes:
        """Render a radar chart as PNG bytes."""
        ...


@runtime_checkable
class IArtifactStore(Protocol):
    """Scratch persistence for documents produced by background jobs."""

    async def save(self, content: bytes, file_name: str | None = None) -> tuple[str, str]:
        """Write content and return (file_name, location)."""
        ...


@runtime_checkable
class IStatusNotifier(Protocol):
    """Best-effort delivery of job status events to a callback URL."""

    async def notify(self, callback_url: str, event: dict[str, Any]) -> bool:
        """POST the event; return False instead of raising on failure."""
        ...

    async def notify_progress(
        self, payload: Mapping[str, Any], job_id: str, progress: int, message: str
    ) -> bool:
        """Send a processing event to the payload's callback address."""
        ...

    async def notify_completed(
        self, payload: Mapping[str, Any], job_id: str, message: str, **result_fields: Any
    ) -> bool:
        """Send a completed event with result fields."""
        ...

    async def notify_failed(
        self, payload: Mapping[str, Any], job_id: str, progress: int, message: str
    ) -> bool:
        """Send a failed event with the error message."""
        ...
