"""Test fixtures for ai-culture-diagnostic.

Rendering and status callbacks are replaced by in-memory fakes that satisfy
the ``IReportRenderer`` / ``IStatusNotifier`` protocols, so the API and job
tests exercise the real workflow and queue runtime without matplotlib,
reportlab or network access.
"""

import asyncio
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any, Mapping

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ai_culture_diagnostic.core.models import ChartSpec, DiagnosticResult
from ai_culture_diagnostic.errors import TransientRenderError
from ai_culture_diagnostic.main import create_app
from ai_culture_diagnostic.settings import Settings

FAKE_PDF = b"%PDF-1.4 fake diagnostic document"
FAKE_PNG = b"\x89PNG\r\n\x1a\n fake radar chart"


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class FakeRenderer:
    """IReportRenderer that returns fixed bytes and records its calls.

    Set ``failures`` to make the next N render calls raise
    ``TransientRenderError``, or ``hang_seconds`` to make every call stall
    before answering.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.failures = 0
        self.hang_seconds = 0.0

    async def _maybe_fail(self, operation: str) -> None:
        if self.hang_seconds:
            await asyncio.sleep(self.hang_seconds)
        if self.failures > 0:
            self.failures -= 1
            raise TransientRenderError(f"{operation} failed: simulated outage")

    async def render_diagnostic_pdf(
        self,
        result: DiagnosticResult,
        ai_chart: ChartSpec,
        culture_chart: ChartSpec,
        title: str | None = None,
    ) -> bytes:
        self.calls.append(("diagnostic_pdf", (result, ai_chart, culture_chart, title)))
        await self._maybe_fail("diagnostic_pdf")
        return FAKE_PDF

    async def render_radar_pdf(self, chart: ChartSpec, title: str | None = None) -> bytes:
        self.calls.append(("radar_pdf", (chart, title)))
        await self._maybe_fail("radar_pdf")
        return FAKE_PDF

    async def render_radar_image(self, chart: ChartSpec) -> bytes:
        self.calls.append(("radar_image", chart))
        await self._maybe_fail("radar_image")
        return FAKE_PNG


class RecordingNotifier:
    """IStatusNotifier that records every event instead of POSTing it."""

    def __init__(self) -> None:
        self.events: list[dict[str, Any]] = []

    async def notify(self, url: str, event: dict[str, Any]) -> bool:
        self.events.append({"url": url, **event})
        return True

    async def notify_progress(
        self, payload: Mapping[str, Any], job_id: str, progress: int, message: str
    ) -> bool:
        url = payload.get("statusUpdateUrl") or payload.get("callbackUrl")
        if not url:
            return False
        return await self.notify(
            url, {"jobId": job_id, "progress": progress, "status": "processing", "message": message}
        )

    async def notify_completed(
        self, payload: Mapping[str, Any], job_id: str, message: str, **result_fields: Any
    ) -> bool:
        url = payload.get("callbackUrl") or payload.get("statusUpdateUrl")
        if not url:
            return False
        return await self.notify(
            url,
            {"jobId": job_id, "progress": 100, "status": "completed", "message": message, **result_fields},
        )

    async def notify_failed(
        self, payload: Mapping[str, Any], job_id: str, progress: int, message: str
    ) -> bool:
        url = payload.get("callbackUrl") or payload.get("statusUpdateUrl")
        if not url:
            return False
        return await self.notify(
            url, {"jobId": job_id, "progress": progress, "status": "failed", "message": message}
        )

    def progress_values(self) -> list[int]:
        return [event["progress"] for event in self.events if event["status"] == "processing"]


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


def build_submission(
    ai_values: list[int | str],
    culture_values: list[int | str],
    **metadata: Any,
) -> dict[str, Any]:
    """Build a form submission from per-question answers.

    Args:
        ai_values: Ten answers for pergunta_1 .. pergunta_10.
        culture_values: Ten answers for pergunta_11 .. pergunta_20.
        **metadata: Extra submission keys (empresa, ia_score, ...).

    Returns:
        Submission mapping as sent in ``formData``.
    """
    submission: dict[str, Any] = {}
    for index, value in enumerate(list(ai_values) + list(culture_values), start=1):
        submission[f"pergunta_{index}"] = str(value)
    submission.update(metadata)
    return submission


@pytest.fixture()
def submission_factory() -> Callable[..., dict[str, Any]]:
    """Factory for form submissions (see ``build_submission``)."""
    return build_submission


@pytest.fixture()
def sample_submission() -> dict[str, Any]:
    """AI 30 (Inovadora) / culture 21 (Moderadamente Aberta)."""
    return build_submission([3] * 10, [2] * 9 + [3], empresa="Acme Ltda")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_renderer() -> FakeRenderer:
    """Fresh FakeRenderer."""
    return FakeRenderer()


@pytest.fixture()
def recording_notifier() -> RecordingNotifier:
    """Fresh RecordingNotifier."""
    return RecordingNotifier()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings with fast retries, retained completed jobs and a tmp artifact dir."""
    return Settings(
        environment="test",
        log_level="WARNING",
        artifact_dir=str(tmp_path / "artifacts"),
        queue_backoff_base_seconds=0.01,
        queue_limiter_max=0,
        queue_remove_on_complete=False,
        queue_job_timeout_seconds=5.0,
    )


@pytest_asyncio.fixture()
async def app(
    settings: Settings,
    fake_renderer: FakeRenderer,
    recording_notifier: RecordingNotifier,
) -> AsyncGenerator[FastAPI, None]:
    """Application with its lifespan running (queues started)."""
    application = create_app(settings, renderer=fake_renderer, notifier=recording_notifier)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client bound to the running application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
