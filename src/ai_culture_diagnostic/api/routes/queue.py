"""Background job routes: enqueue, poll, stats and drain.

API prefix: /api/v1/queue

Enqueue requests are validated before they are accepted, so a malformed
submission is answered with 400 immediately instead of becoming a job that
can only fail.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status

from ai_culture_diagnostic.api.dependencies import get_queue_manager, get_workflow
from ai_culture_diagnostic.api.schemas import (
    DiagnosticReportRequest,
    DrainResponse,
    ErrorResponse,
    JobAcceptedResponse,
    JobDetail,
    JobDetailResponse,
    LoadSummaryResponse,
    QueueStatsEntry,
    QueueStatsResponse,
    RadarChartRequest,
)
from ai_culture_diagnostic.core.workflow import DiagnosticWorkflow, build_chart_spec
from ai_culture_diagnostic.jobs.models import Job, JobOptions
from ai_culture_diagnostic.jobs.processors import CHART_GENERATION, PDF_GENERATION
from ai_culture_diagnostic.jobs.queue_manager import JobQueueManager

router = APIRouter(prefix="/queue", tags=["Queue"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _accepted(request: Request, job: Job, message: str) -> JobAcceptedResponse:
    return JobAcceptedResponse(
        job_id=job.id,
        queue=job.queue_type,
        state=job.state.value,
        status_url=str(
            request.app.url_path_for("get_job", queue_type=job.queue_type, job_id=job.id)
        ),
        message=message,
    )


# ---------------------------------------------------------------------------
# Enqueue
# ---------------------------------------------------------------------------


@router.post(
    "/diagnostic-pdf",
    response_model=JobAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses=_ERROR_RESPONSES,
    summary="Enqueue a diagnostic PDF job",
)
async def enqueue_diagnostic_pdf(
    body: DiagnosticReportRequest,
    request: Request,
    workflow: DiagnosticWorkflow = Depends(get_workflow),
    manager: JobQueueManager = Depends(get_queue_manager),
) -> JobAcceptedResponse:
    """Accept a submission for background PDF generation.

    Progress and the final result are posted to ``statusUpdateUrl`` and
    ``callbackUrl`` when given; otherwise poll ``statusUrl``.
    """
    workflow.validate_report_request(body.submission, body.chart_opts(), body.report_opts())
    job = await manager.enqueue(
        PDF_GENERATION,
        body.to_payload(),
        JobOptions(delay_seconds=body.delay_seconds),
    )
    return _accepted(request, job, "PDF adicionado à fila de processamento")


@router.post(
    "/radar-chart",
    response_model=JobAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses=_ERROR_RESPONSES,
    summary="Enqueue a radar chart image job",
)
async def enqueue_radar_chart(
    body: RadarChartRequest,
    request: Request,
    manager: JobQueueManager = Depends(get_queue_manager),
) -> JobAcceptedResponse:
    """Accept generic radar chart data for background rendering."""
    build_chart_spec(
        body.chart_data.labels if body.chart_data else None,
        body.datasets(),
        title=body.chart_data.title if body.chart_data else None,
    )
    job = await manager.enqueue(
        CHART_GENERATION,
        body.to_payload(),
        JobOptions(delay_seconds=body.delay_seconds),
    )
    return _accepted(request, job, "Gráfico adicionado à fila de processamento")


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


@router.get(
    "/stats",
    response_model=QueueStatsResponse,
    summary="Per-queue job counts and aggregate load",
)
async def queue_stats(
    manager: JobQueueManager = Depends(get_queue_manager),
) -> QueueStatsResponse:
    """Counts are computed on every call; nothing is cached."""
    return QueueStatsResponse(
        data={
            name: QueueStatsEntry.from_stats(stats)
            for name, stats in manager.get_stats().items()
        },
        load=LoadSummaryResponse.from_summary(manager.get_load_summary()),
        timestamp=datetime.now(timezone.utc),
    )


@router.delete(
    "/{queue_type}/jobs/waiting",
    response_model=DrainResponse,
    responses=_ERROR_RESPONSES,
    summary="Discard every waiting job of a queue",
)
async def drain_queue(
    queue_type: str,
    manager: JobQueueManager = Depends(get_queue_manager),
) -> DrainResponse:
    """Active and delayed jobs are left untouched."""
    removed = manager.drain_waiting(queue_type)
    return DrainResponse(
        removed=removed,
        message=f"Fila {queue_type} limpa com sucesso",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/{queue_type}/jobs/{job_id}",
    name="get_job",
    response_model=JobDetailResponse,
    responses=_ERROR_RESPONSES,
    summary="Job state, progress, result and timestamps",
)
async def get_job(
    queue_type: str,
    job_id: str,
    manager: JobQueueManager = Depends(get_queue_manager),
) -> JobDetailResponse:
    """Poll a job. Completed jobs are discarded unless the queue retains them."""
    job = manager.get_job(queue_type, job_id)
    return JobDetailResponse(data=JobDetail.model_validate(job.to_dict()))
