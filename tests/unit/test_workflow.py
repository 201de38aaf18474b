"""Unit tests for the shared scoring workflow.

Tests cover:
- map -> aggregate -> classify -> resolve for raw submissions
- Precedence of explicit scores and levels
- Variations and per-dimension analysis
- Chart spec validation
- Report generation progress and sync/async equivalence of the result
"""

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from ai_culture_diagnostic.core.recommendations import (
    DIAGNOSTIC_TEXTS,
    GENERIC_ADVICE,
    LEVEL_DIAGNOSTIC_FALLBACK,
    RECOMMENDATIONS,
)
from ai_culture_diagnostic.core.scoring import UNCLASSIFIED, Dimension
from ai_culture_diagnostic.core.workflow import (
    DEFAULT_AI_LABELS,
    VARIATION_FALLBACK,
    ChartOptions,
    DiagnosticWorkflow,
    ReportOptions,
    analyze_dimension,
    build_chart_spec,
    compute_workflow_result,
    default_report_file_name,
)
from ai_culture_diagnostic.errors import SubmissionValidationError

SubmissionFactory = Callable[..., dict[str, Any]]


# ---------------------------------------------------------------------------
# compute_workflow_result
# ---------------------------------------------------------------------------


class TestComputeWorkflowResult:
    """End-to-end scoring of raw submissions."""

    def test_sample_submission(self, sample_submission: dict[str, Any]) -> None:
        result = compute_workflow_result(sample_submission)
        assert result.ai.score == 30
        assert result.ai.level == "Inovadora"
        assert result.culture.score == 21
        assert result.culture.level == "Moderadamente Aberta"
        assert result.diagnostic_key == "Inovadora/Moderadamente Aberta"
        assert result.bundle is RECOMMENDATIONS["Inovadora/Moderadamente Aberta"]
        assert result.diagnostic_text == DIAGNOSTIC_TEXTS["Inovadora/Moderadamente Aberta"]
        assert result.company_name == "Acme Ltda"
        assert len(result.meaning) == 3

    def test_free_text_answers(self, submission_factory: SubmissionFactory) -> None:
        submission = submission_factory(
            ["Integração completa"] * 10,
            ["Não utiliza"] * 10,
        )
        result = compute_workflow_result(submission)
        assert result.triple == ((40, 10), ("Visionária", "Alta Resistência"), "Visionária/Alta Resistência")

    def test_missing_answers_count_as_one(self) -> None:
        result = compute_workflow_result({})
        assert result.ai.values == (1,) * 10
        assert result.triple == ((10, 10), ("Tradicional", "Alta Resistência"), "Tradicional/Alta Resistência")
        assert result.company_name == ""

    def test_company_name_fallback_keys(self) -> None:
        assert compute_workflow_result({"company": "Beta SA"}).company_name == "Beta SA"
        options = ReportOptions(company_name="Gamma")
        assert compute_workflow_result({"empresa": "Beta"}, options).company_name == "Gamma"

    @pytest.mark.parametrize("submission", [None, [], "pergunta_1=4"])
    def test_non_mapping_submission_rejected(self, submission: object) -> None:
        with pytest.raises(SubmissionValidationError, match="não fornecidos"):
            compute_workflow_result(submission)  # type: ignore[arg-type]

    def test_result_is_deterministic(self, sample_submission: dict[str, Any]) -> None:
        first = compute_workflow_result(sample_submission)
        second = compute_workflow_result(sample_submission)
        assert first.triple == second.triple
        assert first.bundle == second.bundle

    def test_to_dict_is_json_friendly(self, sample_submission: dict[str, Any]) -> None:
        data = compute_workflow_result(sample_submission).to_dict()
        assert data["diagnostic_key"] == "Inovadora/Moderadamente Aberta"
        assert isinstance(data["generated_at"], str)


# ---------------------------------------------------------------------------
# Explicit scores and levels
# ---------------------------------------------------------------------------


class TestExplicitOverrides:
    """Report options > submission explicit values > computed values."""

    def test_submission_explicit_score_is_classified(
        self, submission_factory: SubmissionFactory
    ) -> None:
        submission = submission_factory([1] * 10, [1] * 10, ia_score="35", cultura_score=28)
        result = compute_workflow_result(submission)
        assert result.ai.score == 35
        assert result.ai.level == "Visionária"
        assert result.culture.level == "Favorável"
        # the answer vector is still reported
        assert result.ai.values == (1,) * 10

    def test_explicit_level_wins_over_score(self, submission_factory: SubmissionFactory) -> None:
        submission = submission_factory([4] * 10, [4] * 10, ia_level="Exploradora")
        result = compute_workflow_result(submission)
        assert result.ai.score == 40
        assert result.ai.level == "Exploradora"
        assert result.diagnostic_key == "Exploradora/Altamente Alinhada"

    def test_report_options_win_over_submission(
        self, submission_factory: SubmissionFactory
    ) -> None:
        submission = submission_factory(
            [1] * 10, [1] * 10, ia_score=12, ia_level="Tradicional", cultura_level="Favorável"
        )
        options = ReportOptions(ai_score=38, ai_level="Visionária", culture_level="Altamente Alinhada")
        result = compute_workflow_result(submission, options)
        assert result.ai.score == 38
        assert result.ai.level == "Visionária"
        assert result.culture.level == "Altamente Alinhada"

    def test_fractional_explicit_score_is_rounded(self) -> None:
        result = compute_workflow_result({"ia_score": 26.6})
        assert result.ai.score == 27
        assert result.ai.level == "Inovadora"

    def test_out_of_range_explicit_score_uses_fallback_bundle(self) -> None:
        result = compute_workflow_result({"ia_score": 55})
        assert result.ai.level == UNCLASSIFIED
        assert result.bundle.is_fallback
        assert result.bundle.recommendations == (GENERIC_ADVICE["Alta Resistência"],)
        assert result.ai_analysis.diagnostic_text == LEVEL_DIAGNOSTIC_FALLBACK[Dimension.AI]

    @pytest.mark.parametrize("value", ["muito", True, float("nan"), [30]])
    def test_malformed_explicit_score_rejected(self, value: object) -> None:
        with pytest.raises(SubmissionValidationError, match="ia_score"):
            compute_workflow_result({"ia_score": value})

    def test_unknown_explicit_level_rejected(self) -> None:
        with pytest.raises(SubmissionValidationError, match="cultura_level"):
            compute_workflow_result({"cultura_level": "Inovadora"})

    def test_unknown_option_level_rejected(self) -> None:
        with pytest.raises(SubmissionValidationError, match="aiLevel"):
            compute_workflow_result({}, ReportOptions(ai_level="Favorável"))


# ---------------------------------------------------------------------------
# Analysis and variations
# ---------------------------------------------------------------------------


class TestAnalysisAndVariations:
    """Per-dimension narrative and text variations."""

    def test_analyze_dimension_known_level(self) -> None:
        analysis = analyze_dimension(Dimension.CULTURE, "Favorável")
        assert analysis.dimension == "cultura"
        assert len(analysis.strengths) == 3
        assert analysis.description

    def test_variations_categories_and_scores(self, sample_submission: dict[str, Any]) -> None:
        variations = compute_workflow_result(sample_submission).variations
        assert [v.category for v in variations] == [
            "significado",
            "pontos_fortes",
            "pontos_fracos",
            "recomendacoes",
        ]
        assert [v.score for v in variations] == [51, 30, 21, 25]
        assert variations[0].text == DIAGNOSTIC_TEXTS["Inovadora/Moderadamente Aberta"]

    def test_variations_for_unclassified_pair(self) -> None:
        variations = compute_workflow_result({"ia_score": 0}).variations
        assert variations[0].text == VARIATION_FALLBACK

    def test_workflow_variations_shortcut(
        self, fake_renderer: Any, sample_submission: dict[str, Any]
    ) -> None:
        workflow = DiagnosticWorkflow(fake_renderer)
        assert len(workflow.variations(sample_submission)) == 4


# ---------------------------------------------------------------------------
# Chart specs
# ---------------------------------------------------------------------------


class TestBuildChartSpec:
    """Generic radar chart validation."""

    def test_valid_chart(self) -> None:
        chart = build_chart_spec(
            ["A", "B", "C"],
            [{"label": "Empresa", "data": [1, 2.4, 9]}],
            title="Radar",
        )
        assert chart.labels == ("A", "B", "C")
        assert chart.series[0].data == (1.0, 2.0, 4.0)
        assert chart.title == "Radar"

    @pytest.mark.parametrize(
        ("labels", "datasets"),
        [(None, [{"data": [1]}]), (["A"], None), ([], [{"data": [1]}]), (["A"], [])],
    )
    def test_missing_labels_or_datasets(self, labels: Any, datasets: Any) -> None:
        with pytest.raises(SubmissionValidationError, match="labels e datasets"):
            build_chart_spec(labels, datasets)

    def test_dataset_without_data(self) -> None:
        with pytest.raises(SubmissionValidationError, match="dados válidos"):
            build_chart_spec(["A"], [{"label": "x", "data": []}])

    def test_dataset_length_mismatch(self) -> None:
        with pytest.raises(SubmissionValidationError, match="Dataset #1"):
            build_chart_spec(["A", "B"], [{"data": [1, 2, 3]}])

    def test_non_numeric_value(self) -> None:
        with pytest.raises(SubmissionValidationError, match="não numérico"):
            build_chart_spec(["A"], [{"data": ["alto"]}])

    def test_default_series_label(self) -> None:
        chart = build_chart_spec(["A"], [{"data": [2]}])
        assert chart.series[0].label == "Série 1"


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------


class TestDiagnosticWorkflow:
    """Rendering orchestration around the pure scoring function."""

    @pytest.mark.asyncio()
    async def test_generate_report_progress_and_result(
        self, fake_renderer: Any, sample_submission: dict[str, Any]
    ) -> None:
        workflow = DiagnosticWorkflow(fake_renderer)
        progress: list[int] = []

        async def on_progress(value: int, message: str) -> None:
            progress.append(value)

        artifact = await workflow.generate_report(
            sample_submission,
            report_options=ReportOptions(file_name="acme.pdf", title="Relatório"),
            on_progress=on_progress,
        )

        assert progress == [50, 80]
        assert artifact.file_name == "acme.pdf"
        assert artifact.content.startswith(b"%PDF")
        assert artifact.metadata == {"diagnostic_key": "Inovadora/Moderadamente Aberta"}
        operation, (result, ai_chart, culture_chart, title) = fake_renderer.calls[0]
        assert operation == "diagnostic_pdf"
        assert title == "Relatório"
        assert ai_chart.labels == DEFAULT_AI_LABELS
        assert culture_chart.series[0].data == (2.0,) * 9 + (3.0,)

    @pytest.mark.asyncio()
    async def test_report_result_matches_sync_computation(
        self, fake_renderer: Any, sample_submission: dict[str, Any]
    ) -> None:
        """The rendered report and the JSON diagnostic agree on scores and key."""
        workflow = DiagnosticWorkflow(fake_renderer)
        artifact = await workflow.generate_report(sample_submission)
        assert artifact.result is not None
        assert artifact.result.triple == workflow.compute(sample_submission).triple

    @pytest.mark.asyncio()
    async def test_default_file_name(self, fake_renderer: Any) -> None:
        artifact = await DiagnosticWorkflow(fake_renderer).generate_report({})
        assert artifact.file_name.startswith("diagnostico-")
        assert artifact.file_name.endswith(".pdf")

    @pytest.mark.asyncio()
    async def test_wrong_label_count_rejected_before_rendering(
        self, fake_renderer: Any, sample_submission: dict[str, Any]
    ) -> None:
        workflow = DiagnosticWorkflow(fake_renderer)
        with pytest.raises(SubmissionValidationError, match="rótulos"):
            await workflow.generate_report(
                sample_submission, chart_options=ChartOptions(ai_labels=("a", "b"))
            )
        assert fake_renderer.calls == []

    def test_validate_report_request(
        self, fake_renderer: Any, sample_submission: dict[str, Any]
    ) -> None:
        workflow = DiagnosticWorkflow(fake_renderer)
        result = workflow.validate_report_request(sample_submission)
        assert result.diagnostic_key == "Inovadora/Moderadamente Aberta"
        with pytest.raises(SubmissionValidationError):
            workflow.validate_report_request(
                sample_submission, ChartOptions(culture_labels=("x",))
            )
        assert fake_renderer.calls == []


def test_chart_options_from_mapping() -> None:
    options = ChartOptions.from_mapping({"color": "#000000"})
    assert options.color == "#000000"
    assert options.ai_labels == DEFAULT_AI_LABELS
    assert ChartOptions.from_mapping(None) == ChartOptions()


def test_report_options_from_mapping() -> None:
    options = ReportOptions.from_mapping({"fileName": "x.pdf", "aiScore": 20, "cultureLevel": "Favorável"})
    assert options.file_name == "x.pdf"
    assert options.ai_score == 20
    assert options.culture_level == "Favorável"


def test_default_report_file_name_uses_epoch_millis() -> None:
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert default_report_file_name(moment) == f"diagnostico-{int(moment.timestamp() * 1000)}.pdf"
