"""Domain value objects for the scoring workflow.

All objects are frozen dataclasses: once the workflow has computed a result
nothing downstream (renderer, job processor, API layer) may mutate it.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RecommendationBundle:
    """Strengths, improvement areas and recommendations for a level pair.

    Attributes:
        strengths: Three strength statements (pontos fortes).
        improvement_areas: Three improvement areas (áreas de melhoria).
        recommendations: Up to five recommendations (recomendações).
        is_fallback: True when synthesized from generic per-level advice.
    """

    strengths: tuple[str, ...]
    improvement_areas: tuple[str, ...]
    recommendations: tuple[str, ...]
    is_fallback: bool = False


@dataclass(frozen=True)
class DimensionAnalysis:
    """Per-dimension narrative derived from a single level."""

    dimension: str
    level: str
    description: str
    diagnostic_text: str
    strengths: tuple[str, ...]
    weaknesses: tuple[str, ...]
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class Variation:
    """One text variation of the diagnostic, tagged by category."""

    text: str
    score: int
    category: str


@dataclass(frozen=True)
class ScoreCard:
    """Scale values, composite score and level for one dimension.

    ``values`` always holds the ten mapped answers. ``score`` and ``level``
    may differ from what the values imply when the submission supplied them
    explicitly.
    """

    values: tuple[int, ...]
    score: int
    level: str


@dataclass(frozen=True)
class DiagnosticResult:
    """Complete output of the scoring workflow for one submission.

    Attributes:
        company_name: Company name from the submission metadata.
        ai: AI maturity score card.
        culture: Culture alignment score card.
        diagnostic_key: "{AILevel}/{CultureLevel}" lookup key.
        diagnostic_text: One-line diagnostic for the level pair.
        meaning: Three-sentence company meaning for the level pair.
        bundle: Recommendation bundle for the level pair.
        ai_analysis: AI dimension narrative.
        culture_analysis: Culture dimension narrative.
        variations: Category-tagged text variations.
        generated_at: UTC timestamp of the computation.
    """

    company_name: str
    ai: ScoreCard
    culture: ScoreCard
    diagnostic_key: str
    diagnostic_text: str
    meaning: tuple[str, ...]
    bundle: RecommendationBundle
    ai_analysis: DimensionAnalysis
    culture_analysis: DimensionAnalysis
    variations: tuple[Variation, ...]
    generated_at: datetime

    @property
    def triple(self) -> tuple[tuple[int, int], tuple[str, str], str]:
        """(scores, levels, diagnostic key): the comparable core of a result."""
        return (
            (self.ai.score, self.culture.score),
            (self.ai.level, self.culture.level),
            self.diagnostic_key,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain JSON-compatible types."""
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        return data


@dataclass(frozen=True)
class ChartSeries:
    """A labeled numeric series handed to the chart renderer."""

    label: str
    data: tuple[float, ...]


@dataclass(frozen=True)
class ChartSpec:
    """Input for the rendering collaborator: labels plus one or more series."""

    labels: tuple[str, ...]
    series: tuple[ChartSeries, ...]
    title: str = ""
    color: str = "#3690d8"


@dataclass(frozen=True)
class ReportArtifact:
    """A rendered document plus the result it was rendered from."""

    content: bytes
    file_name: str
    media_type: str = "application/pdf"
    result: DiagnosticResult | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.content)
