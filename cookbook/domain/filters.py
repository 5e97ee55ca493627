import logging
from typing import Mapping

from cookbook.domain.models import Difficulty


logger = logging.getLogger(__name__)


type Span = tuple[float, float]


DEFAULT_CALORIES_SPAN: Span = (0.0, 5000.0)
DEFAULT_PROTEIN_SPAN: Span = (0.0, 500.0)

# Values the difficulty select sends for "no preference".
ANY_DIFFICULTY = ("", "all", "any")


def parse_difficulty(value: str | None) -> Difficulty | None:
    value = (value or "").strip().lower()
    if value in ANY_DIFFICULTY:
        return None
    try:
        return Difficulty(value)
    except ValueError:
        logger.debug("Ignoring unknown difficulty %r", value)
        return None


def _bound(raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.debug("Ignoring unparseable bound %r", raw)
        return default


def clamp_range(lo: float, hi: float, span: Span) -> Span:
    if lo > hi:
        lo, hi = hi, lo
    lo = min(max(lo, span[0]), span[1])
    hi = min(max(hi, span[0]), span[1])
    return lo, hi


class RecipeFilter:
    """Everything the browse page filters on."""

    def __init__(
        self,
        *,
        search: str = "",
        difficulty: Difficulty | None = None,
        calories: Span | None = None,
        protein: Span | None = None,
        calories_span: Span = DEFAULT_CALORIES_SPAN,
        protein_span: Span = DEFAULT_PROTEIN_SPAN,
    ) -> None:
        self.search = search
        self.difficulty = difficulty
        self.calories_span = calories_span
        self.protein_span = protein_span
        self.calories = calories_span if calories is None else calories
        self.protein = protein_span if protein is None else protein

    def __repr__(self) -> str:
        difficulty = None if self.difficulty is None else self.difficulty.value
        return (
            f"<RecipeFilter(search={self.search!r}, difficulty={difficulty}, "
            f"calories={self.calories}, protein={self.protein})>"
        )

    @property
    def is_default_calories(self) -> bool:
        return tuple(self.calories) == tuple(self.calories_span)

    @property
    def is_default_protein(self) -> bool:
        return tuple(self.protein) == tuple(self.protein_span)

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, str],
        *,
        calories_span: Span = DEFAULT_CALORIES_SPAN,
        protein_span: Span = DEFAULT_PROTEIN_SPAN,
    ) -> "RecipeFilter":
        calories = clamp_range(
            _bound(params.get("calories_min"), calories_span[0]),
            _bound(params.get("calories_max"), calories_span[1]),
            calories_span,
        )
        protein = clamp_range(
            _bound(params.get("protein_min"), protein_span[0]),
            _bound(params.get("protein_max"), protein_span[1]),
            protein_span,
        )
        return cls(
            search=params.get("search") or "",
            difficulty=parse_difficulty(params.get("difficulty")),
            calories=calories,
            protein=protein,
            calories_span=calories_span,
            protein_span=protein_span,
        )
