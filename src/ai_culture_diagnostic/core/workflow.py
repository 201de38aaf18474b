"""Scoring workflow shared by the synchronous API and the job processors.

``compute_workflow_result`` is the single entry point that turns a raw
submission into a ``DiagnosticResult``. It is pure and synchronous: the
HTTP handlers call it inline, the background job handlers call it through
``DiagnosticWorkflow.generate_report``, and both get identical
(score, level, diagnostic key) triples for identical input.

Submission keys:
    pergunta_1 .. pergunta_10    AI maturity answers
    pergunta_11 .. pergunta_20   Culture alignment answers
    empresa / company            Company name
    ia_score / cultura_score     Optional explicit composite scores
    ia_level / cultura_level     Optional explicit levels

Precedence for scores and levels: report options > explicit submission
values > computed values. An explicit level wins over the level classified
from the (explicit or computed) score.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Sequence

from ai_culture_diagnostic.core.interfaces import IReportRenderer
from ai_culture_diagnostic.core.models import (
    ChartSeries,
    ChartSpec,
    DiagnosticResult,
    DimensionAnalysis,
    ReportArtifact,
    ScoreCard,
    Variation,
)
from ai_culture_diagnostic.core.recommendations import (
    DIAGNOSTIC_TEXTS,
    LEVEL_DESCRIPTIONS,
    LEVEL_DIAGNOSTIC_FALLBACK,
    LEVEL_DIAGNOSTIC_TEXTS,
    LEVEL_RECOMMENDATIONS,
    LEVEL_STRENGTHS,
    LEVEL_WEAKNESSES,
    RecommendationResolver,
    diagnostic_key,
)
from ai_culture_diagnostic.core.scale_mapper import DEFAULT_MAPPER, ScaleMapper, clamp_to_scale
from ai_culture_diagnostic.core.scoring import (
    LEVELS_BY_DIMENSION,
    QUESTIONS_PER_DIMENSION,
    Dimension,
    aggregate,
    classify,
)
from ai_culture_diagnostic.errors import SubmissionValidationError
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)

AI_QUESTION_KEYS: tuple[str, ...] = tuple(
    f"pergunta_{i}" for i in range(1, QUESTIONS_PER_DIMENSION + 1)
)
CULTURE_QUESTION_KEYS: tuple[str, ...] = tuple(
    f"pergunta_{i}" for i in range(QUESTIONS_PER_DIMENSION + 1, 2 * QUESTIONS_PER_DIMENSION + 1)
)

DEFAULT_AI_LABELS: tuple[str, ...] = tuple(f"IA {i}" for i in range(1, QUESTIONS_PER_DIMENSION + 1))
DEFAULT_CULTURE_LABELS: tuple[str, ...] = tuple(
    f"Cultura {i}" for i in range(1, QUESTIONS_PER_DIMENSION + 1)
)
DEFAULT_CHART_COLOR = "#3690d8"

VARIATION_FALLBACK = "Diagnóstico não disponível"

ProgressCallback = Callable[[int, str], Awaitable[None]]


@dataclass(frozen=True)
class ChartOptions:
    """Axis labels and colour for the two diagnostic radar charts."""

    ai_labels: tuple[str, ...] = DEFAULT_AI_LABELS
    culture_labels: tuple[str, ...] = DEFAULT_CULTURE_LABELS
    color: str = DEFAULT_CHART_COLOR

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ChartOptions":
        """Build from a camelCase wire mapping; absent keys keep defaults."""
        if not data:
            return cls()
        return cls(
            ai_labels=tuple(data.get("aiLabels") or DEFAULT_AI_LABELS),
            culture_labels=tuple(data.get("cultureLabels") or DEFAULT_CULTURE_LABELS),
            color=data.get("color") or DEFAULT_CHART_COLOR,
        )


@dataclass(frozen=True)
class ReportOptions:
    """Report layout options plus explicit score/level overrides."""

    file_name: str | None = None
    title: str | None = None
    company_name: str | None = None
    ai_score: int | None = None
    culture_score: int | None = None
    ai_level: str | None = None
    culture_level: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ReportOptions":
        """Build from a camelCase wire mapping; absent keys stay None."""
        if not data:
            return cls()
        return cls(
            file_name=data.get("fileName"),
            title=data.get("title"),
            company_name=data.get("companyName"),
            ai_score=data.get("aiScore"),
            culture_score=data.get("cultureScore"),
            ai_level=data.get("aiLevel"),
            culture_level=data.get("cultureLevel"),
        )


# ---------------------------------------------------------------------------
# Submission parsing
# ---------------------------------------------------------------------------


def extract_answers(
    submission: Mapping[str, Any],
    keys: Sequence[str],
    mapper: ScaleMapper = DEFAULT_MAPPER,
) -> tuple[int, ...]:
    """Map the answers under ``keys`` to scale values; missing answers map to 1."""
    return tuple(mapper.map(submission.get(key)) for key in keys)


def _explicit_score(value: Any, field_name: str) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise SubmissionValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise SubmissionValidationError(f"{field_name} must be a number") from exc
    if not math.isfinite(number):
        raise SubmissionValidationError(f"{field_name} must be a finite number")
    return int(round(number))


def _explicit_level(value: Any, dimension: Dimension, field_name: str) -> str | None:
    if value is None or value == "":
        return None
    if value not in LEVELS_BY_DIMENSION[dimension]:
        allowed = ", ".join(LEVELS_BY_DIMENSION[dimension])
        raise SubmissionValidationError(f"{field_name} must be one of: {allowed}")
    return value


def _score_card(
    submission: Mapping[str, Any],
    dimension: Dimension,
    keys: Sequence[str],
    override_score: int | None,
    override_level: str | None,
    mapper: ScaleMapper,
) -> ScoreCard:
    prefix = "ia" if dimension is Dimension.AI else "cultura"
    values = extract_answers(submission, keys, mapper)

    score = override_score
    if score is None:
        score = _explicit_score(submission.get(f"{prefix}_score"), f"{prefix}_score")
    if score is None:
        score = aggregate(values)

    level = override_level or _explicit_level(
        submission.get(f"{prefix}_level"), dimension, f"{prefix}_level"
    )
    if level is None:
        level = classify(score, dimension)

    return ScoreCard(values=values, score=score, level=level)


def _company_name(submission: Mapping[str, Any], options: ReportOptions) -> str:
    if options.company_name:
        return options.company_name
    return str(submission.get("empresa") or submission.get("company") or "")


def analyze_dimension(dimension: Dimension, level: str) -> DimensionAnalysis:
    """Per-dimension narrative for a single level."""
    return DimensionAnalysis(
        dimension=dimension.value,
        level=level,
        description=LEVEL_DESCRIPTIONS.get(level, ""),
        diagnostic_text=LEVEL_DIAGNOSTIC_TEXTS.get(level, LEVEL_DIAGNOSTIC_FALLBACK[dimension]),
        strengths=LEVEL_STRENGTHS.get(level, ()),
        weaknesses=LEVEL_WEAKNESSES.get(level, ()),
        recommendations=LEVEL_RECOMMENDATIONS.get(level, ()),
    )


def build_variations(ai: ScoreCard, culture: ScoreCard) -> tuple[Variation, ...]:
    """Four category-tagged text variations of a diagnostic.

    Args:
        ai: AI maturity score card.
        culture: Culture alignment score card.

    Returns:
        Variations for ``significado``, ``pontos_fortes``, ``pontos_fracos``
        and ``recomendacoes``, in that order.
    """
    ai_analysis = analyze_dimension(Dimension.AI, ai.level)
    culture_analysis = analyze_dimension(Dimension.CULTURE, culture.level)

    meaning = DIAGNOSTIC_TEXTS.get(diagnostic_key(ai.level, culture.level), VARIATION_FALLBACK)

    return (
        Variation(text=meaning, score=ai.score + culture.score, category="significado"),
        Variation(
            text=", ".join(ai_analysis.strengths + culture_analysis.strengths),
            score=ai.score,
            category="pontos_fortes",
        ),
        Variation(
            text=", ".join(ai_analysis.weaknesses + culture_analysis.weaknesses),
            score=culture.score,
            category="pontos_fracos",
        ),
        Variation(
            text=", ".join(ai_analysis.recommendations + culture_analysis.recommendations),
            score=(ai.score + culture.score) // 2,
            category="recomendacoes",
        ),
    )


def compute_workflow_result(
    submission: Mapping[str, Any],
    options: ReportOptions | None = None,
    resolver: RecommendationResolver | None = None,
    mapper: ScaleMapper = DEFAULT_MAPPER,
) -> DiagnosticResult:
    """Run map -> aggregate -> classify -> resolve for one submission.

    Args:
        submission: Raw answers keyed ``pergunta_1`` .. ``pergunta_20`` plus
            optional metadata and explicit scores/levels.
        options: Report options; their explicit scores/levels take
            precedence over the submission's.
        resolver: Recommendation resolver (a default instance if omitted).
        mapper: Answer-to-scale mapper.

    Returns:
        The complete diagnostic result.

    Raises:
        SubmissionValidationError: If the submission is not a mapping or
            carries malformed explicit scores/levels.
    """
    if not isinstance(submission, Mapping):
        raise SubmissionValidationError("Dados do formulário não fornecidos")

    options = options or ReportOptions()
    resolver = resolver or RecommendationResolver()

    ai = _score_card(
        submission,
        Dimension.AI,
        AI_QUESTION_KEYS,
        _explicit_score(options.ai_score, "aiScore"),
        _explicit_level(options.ai_level, Dimension.AI, "aiLevel"),
        mapper,
    )
    culture = _score_card(
        submission,
        Dimension.CULTURE,
        CULTURE_QUESTION_KEYS,
        _explicit_score(options.culture_score, "cultureScore"),
        _explicit_level(options.culture_level, Dimension.CULTURE, "cultureLevel"),
        mapper,
    )

    key = diagnostic_key(ai.level, culture.level)
    result = DiagnosticResult(
        company_name=_company_name(submission, options),
        ai=ai,
        culture=culture,
        diagnostic_key=key,
        diagnostic_text=resolver.diagnostic_text(ai.level, culture.level),
        meaning=resolver.company_meaning(ai.level, culture.level),
        bundle=resolver.resolve(ai.level, culture.level),
        ai_analysis=analyze_dimension(Dimension.AI, ai.level),
        culture_analysis=analyze_dimension(Dimension.CULTURE, culture.level),
        variations=build_variations(ai, culture),
        generated_at=datetime.now(timezone.utc),
    )

    logger.debug(
        "Workflow result computed",
        ai_score=ai.score,
        culture_score=culture.score,
        diagnostic_key=key,
    )
    return result


# ---------------------------------------------------------------------------
# Chart specs
# ---------------------------------------------------------------------------


def dimension_chart(
    card: ScoreCard,
    labels: Sequence[str],
    series_label: str,
    color: str = DEFAULT_CHART_COLOR,
) -> ChartSpec:
    """Radar chart spec for one dimension's ten scale values.

    Raises:
        SubmissionValidationError: If the label count does not match the
            number of values.
    """
    if len(labels) != len(card.values):
        raise SubmissionValidationError(
            f"Gráfico de {series_label} requer {len(card.values)} rótulos, "
            f"recebidos {len(labels)}"
        )
    return ChartSpec(
        labels=tuple(str(label) for label in labels),
        series=(ChartSeries(label=series_label, data=tuple(float(v) for v in card.values)),),
        title=series_label,
        color=color,
    )


def build_chart_spec(
    labels: Sequence[str] | None,
    datasets: Sequence[Mapping[str, Any]] | None,
    title: str | None = None,
    color: str = DEFAULT_CHART_COLOR,
) -> ChartSpec:
    """Validate generic radar chart data and build its spec.

    Series values are rounded and clamped into the 1-4 scale.

    Args:
        labels: Axis labels.
        datasets: Mappings with ``label`` and ``data`` keys.
        title: Optional chart title.
        color: Line and fill colour.

    Returns:
        The validated chart spec.

    Raises:
        SubmissionValidationError: If labels or datasets are missing, or a
            dataset has no data or a length different from the labels.
    """
    if not labels or not datasets:
        raise SubmissionValidationError(
            "Dados do gráfico inválidos. Verifique se você forneceu labels e datasets."
        )

    series: list[ChartSeries] = []
    for index, dataset in enumerate(datasets, start=1):
        data = dataset.get("data") if isinstance(dataset, Mapping) else None
        if not data:
            raise SubmissionValidationError("Todos os datasets devem conter dados válidos.")
        if len(data) != len(labels):
            raise SubmissionValidationError(
                f"Dataset #{index} tem {len(data)} valores para {len(labels)} rótulos."
            )
        values: list[float] = []
        for value in data:
            try:
                values.append(float(clamp_to_scale(float(value))))
            except (TypeError, ValueError, OverflowError) as exc:
                raise SubmissionValidationError(
                    f"Dataset #{index} contém valor não numérico: {value!r}"
                ) from exc
        series.append(
            ChartSeries(label=str(dataset.get("label") or f"Série {index}"), data=tuple(values))
        )

    return ChartSpec(
        labels=tuple(str(label) for label in labels),
        series=tuple(series),
        title=title or "",
        color=color,
    )


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------


def _dimension_charts(result: DiagnosticResult, options: ChartOptions) -> tuple[ChartSpec, ChartSpec]:
    return (
        dimension_chart(result.ai, options.ai_labels, "Maturidade em IA", options.color),
        dimension_chart(
            result.culture, options.culture_labels, "Cultura Organizacional", options.color
        ),
    )


async def _noop_progress(progress: int, message: str) -> None:
    return None


def default_report_file_name(now: datetime | None = None) -> str:
    """``diagnostico-{epoch millis}.pdf``."""
    moment = now or datetime.now(timezone.utc)
    return f"diagnostico-{int(moment.timestamp() * 1000)}.pdf"


class DiagnosticWorkflow:
    """Scoring plus rendering, shared by the HTTP routes and job handlers.

    Args:
        renderer: Rendering collaborator producing chart and PDF bytes.
        resolver: Recommendation resolver (default instance if omitted).
        mapper: Answer-to-scale mapper.
    """

    def __init__(
        self,
        renderer: IReportRenderer,
        resolver: RecommendationResolver | None = None,
        mapper: ScaleMapper = DEFAULT_MAPPER,
    ) -> None:
        self._renderer = renderer
        self._resolver = resolver or RecommendationResolver()
        self._mapper = mapper

    def compute(
        self,
        submission: Mapping[str, Any],
        options: ReportOptions | None = None,
    ) -> DiagnosticResult:
        """Score one submission. See ``compute_workflow_result``."""
        return compute_workflow_result(submission, options, self._resolver, self._mapper)

    def validate_report_request(
        self,
        submission: Mapping[str, Any],
        chart_options: ChartOptions | None = None,
        report_options: ReportOptions | None = None,
    ) -> DiagnosticResult:
        """Score a submission and check its chart options without rendering.

        Raises:
            SubmissionValidationError: Malformed submission or chart options.
        """
        result = self.compute(submission, report_options)
        _dimension_charts(result, chart_options or ChartOptions())
        return result

    def variations(self, submission: Mapping[str, Any]) -> tuple[Variation, ...]:
        """Only the four text variations of a submission's diagnostic."""
        return self.compute(submission).variations

    async def generate_report(
        self,
        submission: Mapping[str, Any],
        chart_options: ChartOptions | None = None,
        report_options: ReportOptions | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ReportArtifact:
        """Score a submission and render its diagnostic PDF.

        Progress checkpoints reported through ``on_progress``: 50 once the
        content is assembled, 80 once the document is rendered.

        Args:
            submission: Raw answers plus metadata.
            chart_options: Radar chart labels and colour.
            report_options: File name, title and explicit overrides.
            on_progress: Async callback receiving (progress, message).

        Returns:
            The rendered PDF with the result it was rendered from.

        Raises:
            SubmissionValidationError: Malformed submission or chart options.
            TransientRenderError: The renderer failed or timed out.
        """
        chart_options = chart_options or ChartOptions()
        report_options = report_options or ReportOptions()
        progress = on_progress or _noop_progress

        result = self.compute(submission, report_options)
        ai_chart, culture_chart = _dimension_charts(result, chart_options)
        await progress(50, "Conteúdo do relatório montado")

        content = await self._renderer.render_diagnostic_pdf(
            result, ai_chart, culture_chart, title=report_options.title
        )
        await progress(80, "Finalizando documento")

        return ReportArtifact(
            content=content,
            file_name=report_options.file_name or default_report_file_name(),
            result=result,
            metadata={"diagnostic_key": result.diagnostic_key},
        )

    async def render_radar_pdf(self, chart: ChartSpec, title: str | None = None) -> bytes:
        """Render a generic radar chart into a PDF."""
        return await self._renderer.render_radar_pdf(chart, title=title)

    async def render_radar_image(self, chart: ChartSpec) -> bytes:
        """Render a generic radar chart as PNG bytes."""
        return await self._renderer.render_radar_image(chart)
