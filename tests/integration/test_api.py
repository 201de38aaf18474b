"""Integration tests for the diagnostic HTTP API.

Each test runs against a fresh application with its lifespan started, the
real workflow and queue runtime, a fake renderer and a recording notifier
(see tests/conftest.py).
"""

import base64
from typing import Any

import pytest
from fastapi import FastAPI, status
from httpx import AsyncClient

from ai_culture_diagnostic.jobs.processors import CHART_GENERATION, PDF_GENERATION

_RADAR_BODY = {
    "chartData": {
        "labels": ["Estratégia", "Dados", "Pessoas"],
        "datasets": [{"label": "Empresa", "data": [3, 2, 4]}],
        "title": "Radar",
    },
}


async def _wait_for_job(app: FastAPI, queue_type: str, job_id: str) -> None:
    """Block until a queued job has finished.

    Args:
        app: Running application.
        queue_type: Queue of the job.
        job_id: Job identifier.
    """
    job = app.state.queue_manager.get_job(queue_type, job_id)
    await job.wait_finished(timeout=5)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@pytest.mark.asyncio()
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert "timestamp" in body and "version" in body


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


class TestForms:
    """POST /api/v1/forms/*."""

    @pytest.mark.asyncio()
    async def test_process_returns_full_diagnostic(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post("/api/v1/forms/process", json={"formData": sample_submission})
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["scores"] == {"ia": 30, "cultura": 21}
        assert data["levels"] == {"ia": "Inovadora", "cultura": "Moderadamente Aberta"}
        assert data["diagnosticKey"] == "Inovadora/Moderadamente Aberta"
        assert data["companyName"] == "Acme Ltda"
        assert len(data["recommendations"]["pontosFortes"]) == 3
        assert data["recommendations"]["isFallback"] is False
        assert len(data["meaning"]) == 3
        assert set(data["analysis"]) == {"ia", "cultura"}
        assert len(data["variations"]) == 4
        assert data["answerValues"]["ia"] == [3] * 10

    @pytest.mark.asyncio()
    async def test_report_options_override_levels(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/forms/process",
            json={
                "formData": sample_submission,
                "pdfOptions": {"aiLevel": "Tradicional", "cultureScore": 40},
            },
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["diagnosticKey"] == "Tradicional/Altamente Alinhada"

    @pytest.mark.asyncio()
    async def test_variations(self, client: AsyncClient, sample_submission: dict[str, Any]) -> None:
        response = await client.post("/api/v1/forms/variations", json={"formData": sample_submission})
        assert response.status_code == status.HTTP_200_OK
        categories = [v["category"] for v in response.json()["data"]]
        assert categories == ["significado", "pontos_fortes", "pontos_fracos", "recomendacoes"]

    @pytest.mark.asyncio()
    async def test_missing_form_data_is_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/forms/process", json={})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "validation_error"

    @pytest.mark.asyncio()
    async def test_invalid_explicit_level_is_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/forms/process", json={"formData": {"ia_level": "Genial"}}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "ia_level" in response.json()["message"]


# ---------------------------------------------------------------------------
# Synchronous PDFs
# ---------------------------------------------------------------------------


class TestCharts:
    """POST /api/v1/charts/*."""

    @pytest.mark.asyncio()
    async def test_diagnostic_pdf_attachment(
        self, client: AsyncClient, sample_submission: dict[str, Any], fake_renderer: Any
    ) -> None:
        response = await client.post(
            "/api/v1/charts/diagnostic-pdf", json={"formData": sample_submission}
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="diagnostico-ia-cultura.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")
        assert fake_renderer.calls[0][0] == "diagnostic_pdf"

    @pytest.mark.asyncio()
    async def test_diagnostic_pdf_custom_file_name_is_sanitized(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/charts/diagnostic-pdf",
            json={"formData": sample_submission, "pdfOptions": {"fileName": "../relatório.pdf"}},
        )
        assert response.status_code == status.HTTP_200_OK
        disposition = response.headers["content-disposition"]
        assert "filename*=UTF-8''_relat%C3%B3rio.pdf" in disposition

    @pytest.mark.asyncio()
    async def test_wrong_chart_label_count_is_400(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/charts/diagnostic-pdf",
            json={"formData": sample_submission, "chartOptions": {"aiLabels": ["a", "b"]}},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio()
    async def test_render_failure_is_generic_500(
        self, client: AsyncClient, sample_submission: dict[str, Any], fake_renderer: Any
    ) -> None:
        fake_renderer.failures = 1
        response = await client.post(
            "/api/v1/charts/diagnostic-pdf", json={"formData": sample_submission}
        )
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["success"] is False
        assert "simulated" not in body["message"]

    @pytest.mark.asyncio()
    async def test_radar_chart_pdf(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/charts/radar-chart-pdf", json=_RADAR_BODY)
        assert response.status_code == status.HTTP_200_OK
        assert 'filename="radar-chart.pdf"' in response.headers["content-disposition"]

    @pytest.mark.asyncio()
    async def test_radar_chart_pdf_without_datasets_is_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/charts/radar-chart-pdf", json={"chartData": {"labels": ["A", "B"]}}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "labels e datasets" in response.json()["message"]


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------


class TestQueue:
    """/api/v1/queue/*."""

    @pytest.mark.asyncio()
    async def test_enqueue_pdf_and_poll(
        self,
        app: FastAPI,
        client: AsyncClient,
        sample_submission: dict[str, Any],
        recording_notifier: Any,
    ) -> None:
        response = await client.post(
            "/api/v1/queue/diagnostic-pdf",
            json={
                "formData": sample_submission,
                "pdfOptions": {"fileName": "acme.pdf"},
                "statusUpdateUrl": "http://caller.test/status",
                "callbackUrl": "http://caller.test/done",
            },
        )
        assert response.status_code == status.HTTP_202_ACCEPTED
        accepted = response.json()
        job_id = accepted["jobId"]
        assert accepted["queue"] == PDF_GENERATION
        assert accepted["statusUrl"] == f"/api/v1/queue/{PDF_GENERATION}/jobs/{job_id}"

        await _wait_for_job(app, PDF_GENERATION, job_id)

        polled = await client.get(accepted["statusUrl"])
        assert polled.status_code == status.HTTP_200_OK
        job = polled.json()["data"]
        assert job["state"] == "completed"
        assert job["progress"] == 100
        assert job["attemptsMade"] == 1
        assert job["result"]["fileName"] == "acme.pdf"
        assert job["timestamp"]["finished"] is not None
        assert recording_notifier.progress_values() == [10, 50, 80]
        assert recording_notifier.events[-1]["status"] == "completed"

    @pytest.mark.asyncio()
    async def test_queued_and_sync_paths_agree(
        self, app: FastAPI, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        sync = (await client.post("/api/v1/forms/process", json={"formData": sample_submission})).json()
        accepted = (
            await client.post("/api/v1/queue/diagnostic-pdf", json={"formData": sample_submission})
        ).json()
        await _wait_for_job(app, PDF_GENERATION, accepted["jobId"])
        job = (await client.get(accepted["statusUrl"])).json()["data"]
        assert job["result"]["diagnosticKey"] == sync["data"]["diagnosticKey"]

    @pytest.mark.asyncio()
    async def test_enqueue_validates_before_accepting(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/queue/diagnostic-pdf",
            json={"formData": sample_submission, "chartOptions": {"cultureLabels": ["x"]}},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        stats = (await client.get("/api/v1/queue/stats")).json()["data"][PDF_GENERATION]
        assert sum(stats.values()) == 0

    @pytest.mark.asyncio()
    async def test_enqueue_radar_chart(self, app: FastAPI, client: AsyncClient) -> None:
        response = await client.post("/api/v1/queue/radar-chart", json=_RADAR_BODY)
        assert response.status_code == status.HTTP_202_ACCEPTED
        job_id = response.json()["jobId"]
        await _wait_for_job(app, CHART_GENERATION, job_id)

        job = (await client.get(f"/api/v1/queue/{CHART_GENERATION}/jobs/{job_id}")).json()["data"]
        assert job["state"] == "completed"
        assert base64.b64decode(job["result"]["chartImage"]).startswith(b"\x89PNG")

    @pytest.mark.asyncio()
    async def test_enqueue_invalid_radar_chart_is_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/queue/radar-chart", json={"chartData": {"labels": []}})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("field", ["callbackUrl", "statusUpdateUrl"])
    async def test_malformed_callback_address_is_400(
        self, client: AsyncClient, sample_submission: dict[str, Any], field: str
    ) -> None:
        response = await client.post(
            "/api/v1/queue/diagnostic-pdf",
            json={"formData": sample_submission, field: "http://[::1/cb"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "validation_error"
        radar = await client.post("/api/v1/queue/radar-chart", json={**_RADAR_BODY, field: "not a url"})
        assert radar.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio()
    async def test_failed_job_reports_error(
        self,
        app: FastAPI,
        client: AsyncClient,
        sample_submission: dict[str, Any],
        fake_renderer: Any,
    ) -> None:
        fake_renderer.failures = 10
        accepted = (
            await client.post("/api/v1/queue/diagnostic-pdf", json={"formData": sample_submission})
        ).json()
        await _wait_for_job(app, PDF_GENERATION, accepted["jobId"])

        job = (await client.get(accepted["statusUrl"])).json()["data"]
        assert job["state"] == "failed"
        assert job["attemptsMade"] == 3
        assert job["maxAttempts"] == 3
        assert "simulated outage" in job["error"]

    @pytest.mark.asyncio()
    async def test_delayed_job_reported_in_stats(
        self, client: AsyncClient, sample_submission: dict[str, Any]
    ) -> None:
        response = await client.post(
            "/api/v1/queue/diagnostic-pdf",
            json={"formData": sample_submission, "delaySeconds": 60},
        )
        assert response.json()["state"] == "delayed"
        body = (await client.get("/api/v1/queue/stats")).json()
        assert body["data"][PDF_GENERATION]["delayed"] == 1
        assert body["load"]["capacity"] == 4

    @pytest.mark.asyncio()
    async def test_stats_lists_both_queues(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/queue/stats")
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert set(body["data"]) == {PDF_GENERATION, CHART_GENERATION}
        assert body["load"]["loadPercentage"] == 0.0
        assert body["load"]["estimatedWaitSeconds"] == 0.0

    @pytest.mark.asyncio()
    async def test_drain_waiting(self, client: AsyncClient) -> None:
        response = await client.delete(f"/api/v1/queue/{PDF_GENERATION}/jobs/waiting")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["removed"] == 0

    @pytest.mark.asyncio()
    async def test_unknown_queue_is_404(self, client: AsyncClient) -> None:
        response = await client.delete("/api/v1/queue/email/jobs/waiting")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "unknown_queue"

    @pytest.mark.asyncio()
    async def test_unknown_job_is_404(self, client: AsyncClient) -> None:
        response = await client.get(f"/api/v1/queue/{PDF_GENERATION}/jobs/does-not-exist")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"] == "job_not_found"
