"""Unit tests for the recommendation tables and resolver."""

import pytest

from ai_culture_diagnostic.core.recommendations import (
    COMPANY_MEANING,
    COMPANY_MEANING_FALLBACK,
    DIAGNOSTIC_TEXT_FALLBACK,
    DIAGNOSTIC_TEXTS,
    GENERIC_ADVICE,
    GENERIC_REASSESSMENT_ADVICE,
    LEVEL_DESCRIPTIONS,
    LEVEL_RECOMMENDATIONS,
    LEVEL_STRENGTHS,
    LEVEL_WEAKNESSES,
    RECOMMENDATIONS,
    RecommendationResolver,
    diagnostic_key,
)
from ai_culture_diagnostic.core.scoring import AI_LEVELS, CULTURE_LEVELS, UNCLASSIFIED

ALL_KEYS = {diagnostic_key(a, c) for a in AI_LEVELS for c in CULTURE_LEVELS}
ALL_LEVELS = AI_LEVELS + CULTURE_LEVELS


@pytest.fixture()
def resolver() -> RecommendationResolver:
    """Provide a RecommendationResolver."""
    return RecommendationResolver()


# ---------------------------------------------------------------------------
# Table coverage
# ---------------------------------------------------------------------------


class TestTables:
    """Static content covers every level and level pair."""

    def test_diagnostic_key_format(self) -> None:
        assert diagnostic_key("Inovadora", "Favorável") == "Inovadora/Favorável"

    def test_pair_tables_cover_sixteen_keys(self) -> None:
        assert len(ALL_KEYS) == 16
        assert set(RECOMMENDATIONS) == ALL_KEYS
        assert set(DIAGNOSTIC_TEXTS) == ALL_KEYS
        assert set(COMPANY_MEANING) == ALL_KEYS

    def test_bundles_have_three_strengths_three_areas_and_recommendations(self) -> None:
        for key, bundle in RECOMMENDATIONS.items():
            assert len(bundle.strengths) == 3, key
            assert len(bundle.improvement_areas) == 3, key
            assert 1 <= len(bundle.recommendations) <= 5, key
            assert not bundle.is_fallback

    def test_company_meaning_has_three_sentences(self) -> None:
        for key, sentences in COMPANY_MEANING.items():
            assert len(sentences) == 3, key

    @pytest.mark.parametrize(
        "table",
        [LEVEL_DESCRIPTIONS, LEVEL_STRENGTHS, LEVEL_WEAKNESSES, LEVEL_RECOMMENDATIONS, GENERIC_ADVICE],
    )
    def test_level_tables_cover_all_eight_levels(self, table: object) -> None:
        assert set(table) == set(ALL_LEVELS)  # type: ignore[call-overload]

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            RECOMMENDATIONS["x/y"] = RECOMMENDATIONS["Tradicional/Alta Resistência"]  # type: ignore[index]


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class TestResolver:
    """Lookup and fallback behaviour."""

    def test_resolve_known_pair(self, resolver: RecommendationResolver) -> None:
        bundle = resolver.resolve("Exploradora", "Favorável")
        assert bundle is RECOMMENDATIONS["Exploradora/Favorável"]

    def test_resolve_is_deterministic(self, resolver: RecommendationResolver) -> None:
        assert resolver.resolve("Visionária", "Altamente Alinhada") == resolver.resolve(
            "Visionária", "Altamente Alinhada"
        )

    def test_unknown_pair_gets_generic_fallback(self, resolver: RecommendationResolver) -> None:
        """One classified level contributes its generic advice line."""
        bundle = resolver.resolve(UNCLASSIFIED, "Favorável")
        assert bundle.is_fallback
        assert bundle.strengths == ()
        assert bundle.improvement_areas == ()
        assert bundle.recommendations == (GENERIC_ADVICE["Favorável"],)

    def test_both_levels_unknown_gets_reassessment_advice(
        self, resolver: RecommendationResolver
    ) -> None:
        bundle = resolver.resolve(UNCLASSIFIED, UNCLASSIFIED)
        assert bundle.is_fallback
        assert bundle.recommendations == (GENERIC_REASSESSMENT_ADVICE,)

    def test_fallback_order_is_ai_then_culture(self, resolver: RecommendationResolver) -> None:
        bundle = resolver.fallback_bundle("Tradicional", "Favorável")
        assert bundle.recommendations == (
            GENERIC_ADVICE["Tradicional"],
            GENERIC_ADVICE["Favorável"],
        )

    def test_diagnostic_text_and_fallback(self, resolver: RecommendationResolver) -> None:
        assert resolver.diagnostic_text("Tradicional", "Alta Resistência") == DIAGNOSTIC_TEXTS[
            "Tradicional/Alta Resistência"
        ]
        assert resolver.diagnostic_text(UNCLASSIFIED, "Favorável") == DIAGNOSTIC_TEXT_FALLBACK

    def test_company_meaning_and_fallback(self, resolver: RecommendationResolver) -> None:
        assert resolver.company_meaning("Inovadora", "Favorável") == COMPANY_MEANING[
            "Inovadora/Favorável"
        ]
        assert resolver.company_meaning("Inovadora", UNCLASSIFIED) == COMPANY_MEANING_FALLBACK
