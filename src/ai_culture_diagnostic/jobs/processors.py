"""Job handlers for the ``pdf-generation`` and ``chart-generation`` queues.

A pdf-generation attempt reports these progress checkpoints:

    10   started
    50   content assembled (scores, levels, recommendations, chart specs)
    80   document rendered, finalizing
    100  artifact written (reached only on success)

Each checkpoint is also sent to the payload's callback address, if any.
On failure, including an attempt cancelled for overrunning its timeout,
the handler sends a ``failed`` notification and re-raises so the queue
runtime applies the retry policy.
"""

import asyncio
import base64
from typing import Any

from ai_culture_diagnostic.core.interfaces import IArtifactStore, IStatusNotifier
from ai_culture_diagnostic.core.workflow import (
    ChartOptions,
    DiagnosticWorkflow,
    ReportOptions,
    build_chart_spec,
)
from ai_culture_diagnostic.errors import JobTimeoutError
from ai_culture_diagnostic.jobs.models import Job
from ai_culture_diagnostic.jobs.queue_manager import JobQueueManager
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

PDF_GENERATION = "pdf-generation"
CHART_GENERATION = "chart-generation"
QUEUE_TYPES: tuple[str, ...] = (PDF_GENERATION, CHART_GENERATION)


class JobProcessor:
    """Runs the diagnostic workflow for queued jobs.

    Args:
        workflow: Shared scoring and rendering workflow.
        artifact_store: Scratch persistence for produced PDFs.
        notifier: Best-effort status callback sender.
    """

    def __init__(
        self,
        workflow: DiagnosticWorkflow,
        artifact_store: IArtifactStore,
        notifier: IStatusNotifier,
    ) -> None:
        self._workflow = workflow
        self._store = artifact_store
        self._notifier = notifier

    def register(self, manager: JobQueueManager) -> None:
        """Bind the handlers to their queues."""
        manager.register_processor(PDF_GENERATION, self.process_pdf_job)
        manager.register_processor(CHART_GENERATION, self.process_chart_job)

    async def _checkpoint(self, job: Job, progress: int, message: str) -> None:
        await job.update_progress(progress)
        await self._notifier.notify_progress(job.data, job.id, progress, message)

    async def _fail(self, job: Job, exc: Exception) -> None:
        logger.error(
            "Job handler failed",
            queue=job.queue_type,
            job_id=job.id,
            attempt=job.attempts_made + 1,
            progress=job.progress,
            error=str(exc),
        )
        await self._notifier.notify_failed(
            job.data, job.id, job.progress, str(exc) or type(exc).__name__
        )

    async def process_pdf_job(self, job: Job) -> dict[str, Any]:
        """Score the embedded submission, render the PDF and persist it.

        Returns:
            Result summary: success flag, file name, location, size, message.
        """
        payload = job.data
        logger.info("Processing PDF job", job_id=job.id, attempt=job.attempts_made + 1)
        try:
            await self._checkpoint(job, 10, "Processamento iniciado")

            async def on_progress(progress: int, message: str) -> None:
                await self._checkpoint(job, progress, message)

            artifact = await self._workflow.generate_report(
                payload.get("submission"),
                chart_options=ChartOptions.from_mapping(payload.get("chartOptions")),
                report_options=ReportOptions.from_mapping(payload.get("reportOptions")),
                on_progress=on_progress,
            )
            file_name, location = await self._store.save(artifact.content, artifact.file_name)
            await job.update_progress(100)
        except asyncio.CancelledError:
            if job.timed_out:
                await self._fail(job, JobTimeoutError(job.timeout_seconds or 0.0))
            raise
        except Exception as exc:
            await self._fail(job, exc)
            raise

        message = "PDF gerado com sucesso"
        await self._notifier.notify_completed(
            payload,
            job.id,
            message,
            fileName=file_name,
            fileSize=artifact.size,
            location=location,
        )
        return {
            "success": True,
            "fileName": file_name,
            "filePath": location,
            "fileSize": artifact.size,
            "diagnosticKey": artifact.metadata.get("diagnostic_key"),
            "message": message,
        }

    async def process_chart_job(self, job: Job) -> dict[str, Any]:
        """Render a radar chart image and return it base64-encoded."""
        payload = job.data
        logger.info("Processing chart job", job_id=job.id, attempt=job.attempts_made + 1)
        try:
            await self._checkpoint(job, 10, "Processamento iniciado")
            chart_data = payload.get("chartData") or {}
            chart = build_chart_spec(
                chart_data.get("labels"),
                chart_data.get("datasets"),
                title=chart_data.get("title"),
            )
            await self._checkpoint(job, 50, "Dados do gráfico validados")
            image = await self._workflow.render_radar_image(chart)
            await job.update_progress(100)
        except asyncio.CancelledError:
            if job.timed_out:
                await self._fail(job, JobTimeoutError(job.timeout_seconds or 0.0))
            raise
        except Exception as exc:
            await self._fail(job, exc)
            raise

        message = "Gráfico gerado com sucesso"
        await self._notifier.notify_completed(payload, job.id, message, fileSize=len(image))
        return {
            "success": True,
            "chartImage": base64.b64encode(image).decode("ascii"),
            "mediaType": "image/png",
            "fileSize": len(image),
            "message": message,
        }
