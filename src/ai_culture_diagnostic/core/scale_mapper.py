"""Free-text answer to 1-4 scale value mapping.

Survey answers arrive as free text (the label of the option the respondent
picked, sometimes with extra words) or as numbers. ``ScaleMapper.map`` turns
any answer into an integer scale value in {1, 2, 3, 4} using, in order:

    1. empty / absent answer            -> 1
    2. numeric answer                   -> rounded and clamped into [1, 4]
    3. exact phrase match               -> table value
    4. first phrase contained in answer -> table value (table order decides)
    5. keyword heuristics               -> absence 1, limited 2,
                                           structured 4, some 3
    6. anything else                    -> 2

The phrase table is an ordered tuple: several phrases can be substrings of
the same answer, so the first hit wins. Multi-word phrases are declared
before the single words they contain.

The mapping is lexical only; it never raises.
"""

import math
import re
from types import MappingProxyType
from typing import Mapping

SCALE_MIN: int = 1
SCALE_MAX: int = 4

EMPTY_ANSWER_VALUE: int = 1
UNMATCHED_ANSWER_VALUE: int = 2

# Ordered (phrase, value) pairs. Order is part of the contract.
PHRASE_TABLE: tuple[tuple[str, int], ...] = (
    # Multi-word phrases
    ("não utiliza", 1),
    ("não há", 1),
    ("utiliza de forma limitada", 2),
    ("integração completa", 4),
    ("impacto estratégico", 4),
    ("abraça mudanças", 3),
    ("mais de 5", 4),
    ("+ de 5", 4),
    ("3 a 4", 3),
    ("1 a 2", 2),
    # Absent / resistant
    ("inexistente", 1),
    ("nenhum", 1),
    ("ausente", 1),
    ("limitado", 1),
    ("resistência", 1),
    ("resistente", 1),
    ("básico", 1),
    ("baixo", 1),
    # Limited / occasional
    ("poucos", 2),
    ("limitada", 2),
    ("pontual", 2),
    ("isolada", 2),
    ("eventual", 2),
    ("parcialmente", 3),
    ("parcial", 2),
    ("moderado", 2),
    # Some / regular
    ("algumas", 3),
    ("moderadamente", 3),
    ("regular", 3),
    ("adequado", 3),
    ("satisfatório", 3),
    # Structured / strategic
    ("completa", 4),
    ("altamente", 4),
    ("alto", 4),
    ("excelente", 4),
    ("contínuo", 4),
    ("estruturado", 4),
    ("estratégico", 4),
    ("integrada", 4),
    ("fluida", 4),
    ("flúida", 4),
    ("proativa", 4),
    ("aprendizado", 4),
    ("visionária", 4),
    ("visionaria", 4),
    ("capacitada", 4),
)

EXACT_PHRASES: Mapping[str, int] = MappingProxyType(dict(PHRASE_TABLE))


def _marker_pattern(stems: tuple[str, ...], whole_word: bool = False) -> re.Pattern[str]:
    # Stems match at the start of a word: "limitad" hits "limitadas".
    tail = r"\b" if whole_word else ""
    return re.compile(r"\b(?:" + "|".join(re.escape(s) for s in stems) + r")" + tail)


# Keyword heuristics, evaluated in this order.
KEYWORD_RULES: tuple[tuple[re.Pattern[str], int], ...] = (
    (_marker_pattern(("não", "nao", "sem", "nunca", "nenhuma", "jamais"), whole_word=True), 1),
    (_marker_pattern(("inexist", "ausênc")), 1),
    (_marker_pattern(("limitad", "ocasion", "pontua", "raramente", "esporádic")), 2),
    (_marker_pattern(("estruturad", "complet", "integral", "sistemátic", "plenamente")), 4),
    (_marker_pattern(("algum", "moderad", "regular", "frequente", "às vezes")), 3),
)


def clamp_to_scale(value: float) -> int:
    """Round a number and clamp it into the 1-4 scale."""
    return max(SCALE_MIN, min(SCALE_MAX, int(round(value))))


class ScaleMapper:
    """Maps heterogeneous survey answers to scale values 1-4.

    Stateless; the tables are module-level read-only data, so a single
    instance can be shared across concurrent requests and jobs.
    """

    def __init__(
        self,
        phrase_table: tuple[tuple[str, int], ...] = PHRASE_TABLE,
        keyword_rules: tuple[tuple[re.Pattern[str], int], ...] = KEYWORD_RULES,
    ) -> None:
        """Initialise the mapper.

        Args:
            phrase_table: Ordered (phrase, value) pairs; phrases lower case.
            keyword_rules: Ordered (pattern, value) fallback heuristics.
        """
        self._phrase_table = phrase_table
        self._exact = MappingProxyType(dict(phrase_table))
        self._keyword_rules = keyword_rules

    def map(self, answer: str | int | float | None) -> int:
        """Map one answer to a scale value.

        Args:
            answer: Free-text answer, numeric answer, or None.

        Returns:
            Integer scale value between 1 and 4.
        """
        if answer is None or isinstance(answer, bool):
            return EMPTY_ANSWER_VALUE

        if isinstance(answer, (int, float)):
            return clamp_to_scale(answer) if math.isfinite(answer) else EMPTY_ANSWER_VALUE

        text = str(answer).strip().lower()
        if not text:
            return EMPTY_ANSWER_VALUE

        number = _parse_number(text)
        if number is not None:
            return clamp_to_scale(number)

        exact = self._exact.get(text)
        if exact is not None:
            return exact

        for phrase, value in self._phrase_table:
            if phrase in text:
                return value

        for pattern, value in self._keyword_rules:
            if pattern.search(text):
                return value

        return UNMATCHED_ANSWER_VALUE

    def map_many(self, answers: list[str | int | float | None]) -> list[int]:
        """Map a sequence of answers, preserving order."""
        return [self.map(answer) for answer in answers]


def _parse_number(text: str) -> float | None:
    try:
        number = float(text.replace(",", "."))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


DEFAULT_MAPPER: ScaleMapper = ScaleMapper()


def map_answer(answer: str | int | float | None) -> int:
    """Map one answer with the default phrase table."""
    return DEFAULT_MAPPER.map(answer)
