"""Form state for the new recipe page.

Drafts keep whatever the user typed as text, so a failed submit can hand it
back untouched. Coercion into `NewRecipe` / `NewIngredient` only happens on
submit.
"""

from itertools import zip_longest
from typing import Any, Iterable, Iterator

from pydantic import BaseModel, Field, ValidationError, field_validator

from cookbook.domain.errors import InvalidDraft
from cookbook.domain.models import Difficulty


MACROS = ("calories", "protein", "carbs", "fat")


class NewRecipe(BaseModel):
    title: str = Field(..., min_length=1)
    description: str
    instructions: str
    cooking_time: int = Field(..., ge=1)
    servings: int = Field(..., ge=1)
    difficulty: Difficulty
    image_url: str | None = None
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)

    @field_validator("image_url")
    @classmethod
    def blank_is_none(cls, value: str | None) -> str | None:
        return value.strip() or None if value else None


class NewIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    unit: str


class IngredientDraft:
    FIELDS = ("name", "amount", "unit")

    def __init__(self, name: str = "", amount: str = "", unit: str = "") -> None:
        self.name = name
        self.amount = amount
        self.unit = unit

    def __repr__(self) -> str:
        return f"<IngredientDraft(name={self.name!r}, amount={self.amount!r}, unit={self.unit!r})>"


class IngredientDrafts:
    """Ordered ingredient rows. There is always at least one."""

    def __init__(self, drafts: Iterable[IngredientDraft] | None = None) -> None:
        self._drafts = list(drafts or [])
        if not self._drafts:
            self._drafts.append(IngredientDraft())

    def __len__(self) -> int:
        return len(self._drafts)

    def __iter__(self) -> Iterator[IngredientDraft]:
        return iter(self._drafts)

    def __getitem__(self, index: int) -> IngredientDraft:
        return self._drafts[index]

    def add(self) -> IngredientDraft:
        draft = IngredientDraft()
        self._drafts.append(draft)
        return draft

    def remove(self, index: int) -> None:
        if not -len(self._drafts) <= index < len(self._drafts):
            raise IndexError(f"No ingredient row {index}")
        if len(self._drafts) == 1:
            return
        del self._drafts[index]

    def update(self, index: int, field: str, value: str) -> None:
        if field not in IngredientDraft.FIELDS:
            raise ValueError(f"Unknown ingredient field: {field}")
        setattr(self._drafts[index], field, value)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class RecipeDraft:
    def __init__(
        self,
        *,
        title: str = "",
        description: str = "",
        instructions: str = "",
        cooking_time: str = "",
        servings: str = "",
        difficulty: str = "",
        image_url: str = "",
        ingredients: IngredientDrafts | None = None,
        macros: dict[str, str] | None = None,
    ) -> None:
        self.title = title
        self.description = description
        self.instructions = instructions
        self.cooking_time = cooking_time
        self.servings = servings
        self.difficulty = difficulty
        self.image_url = image_url
        self.ingredients = IngredientDrafts() if ingredients is None else ingredients
        self.macros = {m: "0" for m in MACROS}
        self.macros.update(macros or {})

    @classmethod
    def from_form(cls, form: Any) -> "RecipeDraft":
        """Build a draft from submitted form data (anything with `get`/`getlist`)."""
        rows = zip_longest(
            form.getlist("ingredient_name"),
            form.getlist("ingredient_amount"),
            form.getlist("ingredient_unit"),
            fillvalue="",
        )
        ingredients = IngredientDrafts(
            IngredientDraft(_text(name), _text(amount), _text(unit))
            for name, amount, unit in rows
        )
        return cls(
            title=_text(form.get("title")),
            description=_text(form.get("description")),
            instructions=_text(form.get("instructions")),
            cooking_time=_text(form.get("cooking_time")),
            servings=_text(form.get("servings")),
            difficulty=_text(form.get("difficulty")),
            image_url=_text(form.get("image_url")),
            ingredients=ingredients,
            macros={m: _text(form.get(m, "0")) for m in MACROS},
        )

    def to_new_recipe(self) -> NewRecipe:
        try:
            return NewRecipe(
                title=self.title.strip(),
                description=self.description,
                instructions=self.instructions,
                cooking_time=self.cooking_time.strip(),
                servings=self.servings.strip(),
                difficulty=self.difficulty.strip().lower(),
                image_url=self.image_url,
                **{m: self.macros[m].strip() for m in MACROS},
            )
        except ValidationError as e:
            raise InvalidDraft(str(e)) from e

    def to_new_ingredients(self) -> list[NewIngredient]:
        try:
            return [
                NewIngredient(
                    name=draft.name.strip(),
                    amount=draft.amount.strip(),
                    unit=draft.unit.strip(),
                )
                for draft in self.ingredients
            ]
        except ValidationError as e:
            raise InvalidDraft(str(e)) from e
