"""Synchronous rendering routes returning PDF attachments.

API prefix: /api/v1/charts
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Response

from ai_culture_diagnostic.adapters.artifact_store import sanitize_file_name
from ai_culture_diagnostic.api.dependencies import get_workflow
from ai_culture_diagnostic.api.schemas import (
    DiagnosticReportRequest,
    ErrorResponse,
    RadarChartRequest,
)
from ai_culture_diagnostic.core.workflow import DiagnosticWorkflow, build_chart_spec
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/charts", tags=["Charts"])

DEFAULT_DIAGNOSTIC_FILE_NAME = "diagnostico-ia-cultura.pdf"
DEFAULT_RADAR_FILE_NAME = "radar-chart.pdf"

_PDF_RESPONSES = {
    200: {"content": {"application/pdf": {}}, "description": "PDF document"},
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _pdf_response(content: bytes, file_name: str) -> Response:
    ascii_name = file_name.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(file_name)}"
            ),
            "Content-Length": str(len(content)),
        },
    )


@router.post(
    "/diagnostic-pdf",
    response_class=Response,
    responses=_PDF_RESPONSES,
    summary="Render the full diagnostic PDF for a submission",
)
async def diagnostic_pdf(
    body: DiagnosticReportRequest,
    workflow: DiagnosticWorkflow = Depends(get_workflow),
) -> Response:
    """Run the scoring workflow and return the diagnostic report inline."""
    report_options = body.report_opts()
    artifact = await workflow.generate_report(
        body.submission,
        chart_options=body.chart_opts(),
        report_options=report_options,
    )
    file_name = sanitize_file_name(report_options.file_name or DEFAULT_DIAGNOSTIC_FILE_NAME)
    logger.info(
        "Diagnostic PDF rendered",
        diagnostic_key=artifact.result.diagnostic_key if artifact.result else None,
        file_name=file_name,
        size=artifact.size,
    )
    return _pdf_response(artifact.content, file_name)


@router.post(
    "/radar-chart-pdf",
    response_class=Response,
    responses=_PDF_RESPONSES,
    summary="Render a single generic radar chart as a PDF",
)
async def radar_chart_pdf(
    body: RadarChartRequest,
    workflow: DiagnosticWorkflow = Depends(get_workflow),
) -> Response:
    """Validate labels and datasets, then return the chart PDF inline."""
    report_options = body.report_opts()
    chart = build_chart_spec(
        body.chart_data.labels if body.chart_data else None,
        body.datasets(),
        title=body.chart_data.title if body.chart_data else None,
    )
    content = await workflow.render_radar_pdf(chart, title=report_options.title)
    file_name = sanitize_file_name(report_options.file_name or DEFAULT_RADAR_FILE_NAME)
    logger.info("Radar chart PDF rendered", file_name=file_name, size=len(content))
    return _pdf_response(content, file_name)
