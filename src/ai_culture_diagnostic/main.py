"""AI & Culture Diagnostic service entry point."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_culture_diagnostic.adapters.artifact_store import LocalArtifactStore
from ai_culture_diagnostic.adapters.report_renderer import ReportRenderer
from ai_culture_diagnostic.api.routes import charts, forms, queue
from ai_culture_diagnostic.api.schemas import ErrorResponse, HealthResponse
from ai_culture_diagnostic.core.interfaces import IReportRenderer, IStatusNotifier
from ai_culture_diagnostic.core.workflow import DiagnosticWorkflow
from ai_culture_diagnostic.errors import (
    DiagnosticError,
    InvalidInputError,
    JobNotFoundError,
    SubmissionValidationError,
    UnknownQueueError,
)
from ai_culture_diagnostic.jobs.notifier import StatusNotifier
from ai_culture_diagnostic.jobs.processors import QUEUE_TYPES, JobProcessor
from ai_culture_diagnostic.jobs.queue_manager import JobQueueManager, queue_config_from_settings
from ai_culture_diagnostic.observability import configure_logging, get_logger
from ai_culture_diagnostic.settings import Settings

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Erro interno ao processar a solicitação"

_ERROR_STATUS: dict[type[DiagnosticError], int] = {
    SubmissionValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    UnknownQueueError: status.HTTP_404_NOT_FOUND,
    JobNotFoundError: status.HTTP_404_NOT_FOUND,
}


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def diagnostic_error_handler(request: Request, exc: DiagnosticError) -> JSONResponse:
    """Map domain errors to structured JSON bodies.

    Client errors carry the error message; anything else is reported as a
    500 with a generic summary.
    """
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            logger.info(
                "Request rejected",
                path=request.url.path,
                error=exc.code,
                status_code=status_code,
                message=exc.message,
            )
            return _error_response(status_code, exc.code, exc.message)

    logger.error("Request failed", path=request.url.path, error=exc.code, message=exc.message)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc.code, GENERIC_ERROR_MESSAGE
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body validation failures are answered with 400, not FastAPI's 422."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Requisição inválida")
    if location:
        message = f"{location}: {message}"
    logger.info("Request body rejected", path=request.url.path, errors=len(errors))
    return _error_response(status.HTTP_400_BAD_REQUEST, "validation_error", message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; never leaks internals."""
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", GENERIC_ERROR_MESSAGE
    )


def create_app(
    settings: Settings | None = None,
    renderer: IReportRenderer | None = None,
    notifier: IStatusNotifier | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings (read from the environment if omitted).
        renderer: Rendering collaborator (matplotlib/reportlab if omitted).
        notifier: Status callback sender (an httpx-backed one if omitted).

    Returns:
        Configured application. Queues, workers and the notifier client
        are started and stopped by its lifespan.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Start the queue runtime and its collaborators; stop them on shutdown.

        Args:
            app: The FastAPI application instance.

        Yields:
            None
        """
        manager = JobQueueManager(queue_config_from_settings(settings))
        for queue_type in QUEUE_TYPES:
            manager.create_queue(queue_type)

        owned_notifier = None
        status_notifier = notifier
        if status_notifier is None:
            owned_notifier = StatusNotifier(timeout_seconds=settings.notifier_timeout_seconds)
            status_notifier = owned_notifier

        workflow = DiagnosticWorkflow(
            renderer or ReportRenderer(timeout_seconds=settings.render_timeout_seconds)
        )
        JobProcessor(
            workflow,
            LocalArtifactStore(settings.artifact_dir),
            status_notifier,
        ).register(manager)

        app.state.settings = settings
        app.state.workflow = workflow
        app.state.queue_manager = manager
        logger.info(
            "Service started",
            service=settings.service_name,
            environment=settings.environment,
            queues=list(manager.queue_types),
        )
        try:
            yield
        finally:
            await manager.close()
            if owned_notifier is not None:
                await owned_notifier.aclose()
            logger.info("Service stopped", service=settings.service_name)

    app = FastAPI(
        title="AI & Culture Diagnostic",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):  # type: ignore[no-untyped-def]
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "HTTP request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    app.add_exception_handler(DiagnosticError, diagnostic_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(forms.router, prefix="/api/v1")
    app.include_router(charts.router, prefix="/api/v1")
    app.include_router(queue.router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        """Liveness probe."""
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc),
            environment=settings.environment,
            version=settings.version,
        )

    return app


app: FastAPI = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
