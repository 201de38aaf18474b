"""Pydantic request/response models for the diagnostic API.

Wire format is camelCase; models also accept snake_case field names.
The submission itself (``formData``) is a free-form mapping of question keys
to answers and is validated by the workflow, not here.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, AnyHttpUrl, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ai_culture_diagnostic.core.models import DiagnosticResult, DimensionAnalysis, Variation
from ai_culture_diagnostic.core.workflow import ChartOptions, ReportOptions
from ai_culture_diagnostic.jobs.models import LoadSummary, QueueStats


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _url(value: AnyHttpUrl | None) -> str | None:
    return str(value) if value is not None else None


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------


class ChartOptionsRequest(CamelModel):
    """Axis labels (ten per dimension) and colour of the radar charts."""

    ai_labels: list[str] | None = None
    culture_labels: list[str] | None = None
    color: str | None = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")

    def to_options(self) -> ChartOptions:
        return ChartOptions.from_mapping(self.model_dump(by_alias=True, exclude_none=True))


class ReportOptionsRequest(CamelModel):
    """Report layout options and explicit score/level overrides."""

    file_name: str | None = Field(None, max_length=255)
    title: str | None = Field(None, max_length=255)
    company_name: str | None = Field(
        None,
        max_length=255,
        alias="companyName",
        validation_alias=AliasChoices("companyName", "company_name", "company"),
    )
    ai_score: float | None = Field(
        None, alias="aiScore", validation_alias=AliasChoices("aiScore", "ai_score", "iaScore")
    )
    culture_score: float | None = Field(
        None,
        alias="cultureScore",
        validation_alias=AliasChoices("cultureScore", "culture_score", "culturaScore"),
    )
    ai_level: str | None = Field(
        None, alias="aiLevel", validation_alias=AliasChoices("aiLevel", "ai_level", "iaLevel")
    )
    culture_level: str | None = Field(
        None,
        alias="cultureLevel",
        validation_alias=AliasChoices("cultureLevel", "culture_level", "culturaLevel"),
    )

    def to_options(self) -> ReportOptions:
        return ReportOptions.from_mapping(self.model_dump(by_alias=True, exclude_none=True))


class DatasetRequest(CamelModel):
    """One series of a generic radar chart."""

    label: str = ""
    data: list[float] = Field(default_factory=list)


class RadarChartDataRequest(CamelModel):
    """Generic radar chart: labels plus one or more datasets."""

    labels: list[str] = Field(default_factory=list)
    datasets: list[DatasetRequest] = Field(default_factory=list)
    title: str | None = None


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SubmissionRequest(CamelModel):
    """Raw form answers (``pergunta_1`` .. ``pergunta_20``) plus metadata."""

    submission: dict[str, Any] = Field(
        ..., alias="formData", validation_alias=AliasChoices("formData", "submission", "form_data")
    )
    report_options: ReportOptionsRequest | None = Field(
        None,
        alias="reportOptions",
        validation_alias=AliasChoices("reportOptions", "pdfOptions", "report_options"),
    )

    def report_opts(self) -> ReportOptions:
        return self.report_options.to_options() if self.report_options else ReportOptions()


class DiagnosticReportRequest(SubmissionRequest):
    """Request for a diagnostic PDF, inline or through the queue."""

    chart_options: ChartOptionsRequest | None = None
    callback_url: AnyHttpUrl | None = None
    status_update_url: AnyHttpUrl | None = None
    delay_seconds: float = Field(0.0, ge=0.0, le=3600.0)

    def chart_opts(self) -> ChartOptions:
        return self.chart_options.to_options() if self.chart_options else ChartOptions()

    def to_payload(self) -> dict[str, Any]:
        """Job payload in wire form: submission, options and callback URLs."""
        return {
            "submission": self.submission,
            "chartOptions": (
                self.chart_options.model_dump(by_alias=True, exclude_none=True)
                if self.chart_options
                else None
            ),
            "reportOptions": (
                self.report_options.model_dump(by_alias=True, exclude_none=True)
                if self.report_options
                else None
            ),
            "callbackUrl": _url(self.callback_url),
            "statusUpdateUrl": _url(self.status_update_url),
        }


class RadarChartRequest(CamelModel):
    """Request for a single generic radar chart."""

    chart_data: RadarChartDataRequest | None = None
    report_options: ReportOptionsRequest | None = Field(
        None,
        alias="reportOptions",
        validation_alias=AliasChoices("reportOptions", "pdfOptions", "report_options"),
    )

    callback_url: AnyHttpUrl | None = None
    status_update_url: AnyHttpUrl | None = None
    delay_seconds: float = Field(0.0, ge=0.0, le=3600.0)

    def report_opts(self) -> ReportOptions:
        return self.report_options.to_options() if self.report_options else ReportOptions()

    def datasets(self) -> list[dict[str, Any]]:
        if self.chart_data is None:
            return []
        return [dataset.model_dump() for dataset in self.chart_data.datasets]

    def to_payload(self) -> dict[str, Any]:
        return {
            "chartData": self.chart_data.model_dump(by_alias=True) if self.chart_data else None,
            "reportOptions": (
                self.report_options.model_dump(by_alias=True, exclude_none=True)
                if self.report_options
                else None
            ),
            "callbackUrl": _url(self.callback_url),
            "statusUpdateUrl": _url(self.status_update_url),
        }


# ---------------------------------------------------------------------------
# Diagnostic responses
# ---------------------------------------------------------------------------


class ScorePairResponse(CamelModel):
    ia: int
    cultura: int


class LevelPairResponse(CamelModel):
    ia: str
    cultura: str


class BundleResponse(CamelModel):
    """Recommendation bundle for the level pair."""

    pontos_fortes: list[str]
    areas_melhoria: list[str]
    recomendacoes: list[str]
    is_fallback: bool = False


class DimensionAnalysisResponse(CamelModel):
    dimension: str
    level: str
    description: str
    diagnostic_text: str
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]

    @classmethod
    def from_analysis(cls, analysis: DimensionAnalysis) -> "DimensionAnalysisResponse":
        return cls(
            dimension=analysis.dimension,
            level=analysis.level,
            description=analysis.description,
            diagnostic_text=analysis.diagnostic_text,
            strengths=list(analysis.strengths),
            weaknesses=list(analysis.weaknesses),
            recommendations=list(analysis.recommendations),
        )


class VariationResponse(CamelModel):
    text: str
    score: int
    category: str

    @classmethod
    def from_variation(cls, variation: Variation) -> "VariationResponse":
        return cls(text=variation.text, score=variation.score, category=variation.category)


class DiagnosticResultResponse(CamelModel):
    """Full JSON diagnostic of one submission."""

    company_name: str
    scores: ScorePairResponse
    levels: LevelPairResponse
    answer_values: dict[str, list[int]]
    diagnostic_key: str
    diagnostic_text: str
    meaning: list[str]
    recommendations: BundleResponse
    analysis: dict[str, DimensionAnalysisResponse]
    variations: list[VariationResponse]
    generated_at: datetime

    @classmethod
    def from_result(cls, result: DiagnosticResult) -> "DiagnosticResultResponse":
        return cls(
            company_name=result.company_name,
            scores=ScorePairResponse(ia=result.ai.score, cultura=result.culture.score),
            levels=LevelPairResponse(ia=result.ai.level, cultura=result.culture.level),
            answer_values={"ia": list(result.ai.values), "cultura": list(result.culture.values)},
            diagnostic_key=result.diagnostic_key,
            diagnostic_text=result.diagnostic_text,
            meaning=list(result.meaning),
            recommendations=BundleResponse(
                pontos_fortes=list(result.bundle.strengths),
                areas_melhoria=list(result.bundle.improvement_areas),
                recomendacoes=list(result.bundle.recommendations),
                is_fallback=result.bundle.is_fallback,
            ),
            analysis={
                "ia": DimensionAnalysisResponse.from_analysis(result.ai_analysis),
                "cultura": DimensionAnalysisResponse.from_analysis(result.culture_analysis),
            },
            variations=[VariationResponse.from_variation(v) for v in result.variations],
            generated_at=result.generated_at,
        )


class ProcessFormResponse(CamelModel):
    success: bool = True
    data: DiagnosticResultResponse


class VariationsResponse(CamelModel):
    success: bool = True
    data: list[VariationResponse]


# ---------------------------------------------------------------------------
# Queue responses
# ---------------------------------------------------------------------------


class JobAcceptedResponse(CamelModel):
    """Returned with HTTP 202 when a job is enqueued."""

    success: bool = True
    job_id: str
    queue: str
    state: str
    status_url: str
    message: str


class QueueStatsEntry(CamelModel):
    waiting: int
    active: int
    completed: int
    failed: int
    delayed: int

    @classmethod
    def from_stats(cls, stats: QueueStats) -> "QueueStatsEntry":
        return cls(**stats.to_dict())


class LoadSummaryResponse(CamelModel):
    active: int
    waiting: int
    capacity: int
    load_percentage: float
    average_duration_seconds: float
    estimated_wait_seconds: float

    @classmethod
    def from_summary(cls, summary: LoadSummary) -> "LoadSummaryResponse":
        return cls(
            active=summary.active,
            waiting=summary.waiting,
            capacity=summary.capacity,
            load_percentage=summary.load_percentage,
            average_duration_seconds=summary.average_duration_seconds,
            estimated_wait_seconds=summary.estimated_wait_seconds,
        )


class QueueStatsResponse(CamelModel):
    success: bool = True
    data: dict[str, QueueStatsEntry]
    load: LoadSummaryResponse
    timestamp: datetime


class JobTimestamps(CamelModel):
    created: datetime
    processed: datetime | None = None
    finished: datetime | None = None


class JobDetail(CamelModel):
    id: str
    queue: str
    state: str
    data: dict[str, Any]
    progress: int
    result: Any = None
    attempts_made: int
    max_attempts: int
    error: str | None = None
    timestamp: JobTimestamps


class JobDetailResponse(CamelModel):
    success: bool = True
    data: JobDetail


class DrainResponse(CamelModel):
    success: bool = True
    removed: int
    message: str
    timestamp: datetime


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: str


class HealthResponse(CamelModel):
    status: str
    timestamp: datetime
    environment: str
    version: str
