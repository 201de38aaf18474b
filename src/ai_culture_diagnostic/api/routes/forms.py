"""Form processing routes: JSON diagnostics without rendering.

API prefix: /api/v1/forms
"""

from fastapi import APIRouter, Depends, status

from ai_culture_diagnostic.api.dependencies import get_workflow
from ai_culture_diagnostic.api.schemas import (
    DiagnosticResultResponse,
    ProcessFormResponse,
    SubmissionRequest,
    VariationResponse,
    VariationsResponse,
)
from ai_culture_diagnostic.core.workflow import DiagnosticWorkflow
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/forms", tags=["Forms"])


@router.post(
    "/process",
    response_model=ProcessFormResponse,
    status_code=status.HTTP_200_OK,
    summary="Score a form submission and return the full diagnostic",
)
async def process_form(
    body: SubmissionRequest,
    workflow: DiagnosticWorkflow = Depends(get_workflow),
) -> ProcessFormResponse:
    """Map, aggregate, classify and resolve recommendations for a submission.

    Returns scores, levels, the diagnostic key and text, company meaning,
    the recommendation bundle, per-dimension analysis and text variations.
    """
    result = workflow.compute(body.submission, body.report_opts())
    logger.info(
        "Form processed",
        diagnostic_key=result.diagnostic_key,
        ai_score=result.ai.score,
        culture_score=result.culture.score,
    )
    return ProcessFormResponse(data=DiagnosticResultResponse.from_result(result))


@router.post(
    "/variations",
    response_model=VariationsResponse,
    status_code=status.HTTP_200_OK,
    summary="Return only the text variations of a diagnostic",
)
async def generate_variations(
    body: SubmissionRequest,
    workflow: DiagnosticWorkflow = Depends(get_workflow),
) -> VariationsResponse:
    """Four category-tagged variations: significado, pontos_fortes, pontos_fracos, recomendacoes."""
    variations = workflow.variations(body.submission)
    return VariationsResponse(data=[VariationResponse.from_variation(v) for v in variations])
