"""Composite score aggregation and level classification.

Each dimension (AI maturity, culture alignment) is scored from exactly ten
answers on the 1-4 scale, so a composite score always lies in [10, 40].
Levels are contiguous, inclusive ranges that partition that interval:

    Score   AI level      Culture level
    -----   -----------   --------------------
    10-17   Tradicional   Alta Resistência
    18-26   Exploradora   Moderadamente Aberta
    27-33   Inovadora     Favorável
    34-40   Visionária    Altamente Alinhada

A score outside [10, 40] classifies as ``UNCLASSIFIED`` instead of raising.
"""

from enum import Enum
from typing import Sequence

from ai_culture_diagnostic.core.scale_mapper import SCALE_MAX, SCALE_MIN
from ai_culture_diagnostic.errors import InvalidInputError

QUESTIONS_PER_DIMENSION: int = 10
MIN_COMPOSITE_SCORE: int = QUESTIONS_PER_DIMENSION * SCALE_MIN
MAX_COMPOSITE_SCORE: int = QUESTIONS_PER_DIMENSION * SCALE_MAX

UNCLASSIFIED: str = "Não Classificado"


class Dimension(str, Enum):
    """The two scored axes of the diagnostic."""

    AI = "ia"
    CULTURE = "cultura"


AI_LEVELS: tuple[str, ...] = ("Tradicional", "Exploradora", "Inovadora", "Visionária")
CULTURE_LEVELS: tuple[str, ...] = (
    "Alta Resistência",
    "Moderadamente Aberta",
    "Favorável",
    "Altamente Alinhada",
)

# Inclusive (min, max) bounds, shared by both dimensions, in level order.
LEVEL_RANGES: tuple[tuple[int, int], ...] = ((10, 17), (18, 26), (27, 33), (34, 40))

LEVELS_BY_DIMENSION: dict[Dimension, tuple[str, ...]] = {
    Dimension.AI: AI_LEVELS,
    Dimension.CULTURE: CULTURE_LEVELS,
}


def aggregate(vector: Sequence[int]) -> int:
    """Sum a dimension's ten scale values into its composite score.

    Args:
        vector: Exactly ten scale values, each between 1 and 4.

    Returns:
        Composite score in range 10-40.

    Raises:
        InvalidInputError: If the vector length is not 10 or any value is
            outside the 1-4 scale.
    """
    if len(vector) != QUESTIONS_PER_DIMENSION:
        raise InvalidInputError(
            f"score vector must have exactly {QUESTIONS_PER_DIMENSION} values, "
            f"got {len(vector)}"
        )
    for position, value in enumerate(vector, start=1):
        if isinstance(value, bool) or not isinstance(value, int) or not (
            SCALE_MIN <= value <= SCALE_MAX
        ):
            raise InvalidInputError(
                f"score vector value #{position} must be an integer between "
                f"{SCALE_MIN} and {SCALE_MAX}, got {value!r}"
            )
    return sum(vector)


def classify(score: int, dimension: Dimension | str) -> str:
    """Map a composite score to its level name for the given dimension.

    Args:
        score: Composite score (expected 10-40).
        dimension: ``Dimension.AI`` / ``Dimension.CULTURE`` or their values.

    Returns:
        The level name, or ``UNCLASSIFIED`` for scores outside 10-40.
    """
    levels = LEVELS_BY_DIMENSION[Dimension(dimension)]
    for level, (low, high) in zip(levels, LEVEL_RANGES):
        if low <= score <= high:
            return level
    return UNCLASSIFIED
