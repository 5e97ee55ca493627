from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator
import uuid

from databases import Database

from cookbook.domain.drafts import NewIngredient, NewRecipe
from cookbook.domain.errors import AmbiguousRecipe, DatastoreError, RecipeNotFound
from cookbook.domain.filters import RecipeFilter
from cookbook.domain.models import Ingredient, Recipe


logger = logging.getLogger(__name__)


INSERT_RECIPE = """
INSERT INTO recipes (
    id, title, title_search, description, instructions, cooking_time, servings,
    difficulty, image_url, calories, protein, carbs, fat
) VALUES (
    :id, :title, :title_search, :description, :instructions, :cooking_time, :servings,
    :difficulty, :image_url, :calories, :protein, :carbs, :fat
)
"""


INSERT_INGREDIENT = """
INSERT INTO ingredients (id, recipe_id, name, amount, unit)
VALUES (:id, :recipe_id, :name, :amount, :unit)
"""


GET_RECIPE = "SELECT * FROM recipes WHERE id = :id"


LIST_RECIPES = "SELECT * FROM recipes"


LIST_INGREDIENTS = "SELECT * FROM ingredients WHERE recipe_id = :recipe_id"


TITLE_LIKE = "title_search LIKE :pattern ESCAPE '\\'"


TITLE_MATCHES = f"SELECT id FROM recipes WHERE {TITLE_LIKE}"


def fold(text: str) -> str:
    """Unicode lower-casing. SQLite `lower` only folds ASCII."""
    return text.lower()


def like_pattern(text: str) -> str:
    """Case-folded `%text%` with LIKE wildcards taken literally."""
    escaped = (
        fold(text).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


def list_query(
    filter: RecipeFilter | None = None,
    limit: int | None = None,
) -> tuple[str, dict[str, Any]]:
    clauses: list[str] = []
    values: dict[str, Any] = {}

    if filter is not None:
        if filter.search:
            clauses.append(TITLE_LIKE)
            values["pattern"] = like_pattern(filter.search)
        if filter.difficulty is not None:
            clauses.append("difficulty = :difficulty")
            values["difficulty"] = filter.difficulty.value
        # Full default spans are left out of the query.
        if not filter.is_default_calories:
            clauses.append("calories BETWEEN :calories_lo AND :calories_hi")
            values["calories_lo"], values["calories_hi"] = filter.calories
        if not filter.is_default_protein:
            clauses.append("protein BETWEEN :protein_lo AND :protein_hi")
            values["protein_lo"], values["protein_hi"] = filter.protein

    query = LIST_RECIPES
    if clauses:
        query += " WHERE " + " AND ".join(clauses)
    if limit is not None:
        query += " LIMIT :limit"
        values["limit"] = limit
    return query, values


def recipe_row(recipe: NewRecipe, id: str) -> dict[str, Any]:
    values = recipe.model_dump(mode="json")
    values["id"] = id
    values["title_search"] = fold(recipe.title)
    return values


@contextlib.contextmanager
def _datastore(action: str) -> Iterator[None]:
    try:
        yield
    except DatastoreError:
        raise
    except Exception as e:
        raise DatastoreError(f"Could not {action}.") from e


class RecipeRepository:
    """The `recipes` and `ingredients` tables."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list(
        self,
        filter: RecipeFilter | None = None,
        *,
        limit: int | None = None,
    ) -> list[Recipe]:
        query, values = list_query(filter, limit)
        logger.debug("Listing recipes %s limit=%s", filter, limit)
        with _datastore("list recipes"):
            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                query, values=values
            )
            return [Recipe.from_row(r) for r in rows]

    async def title_matches(self, text: str) -> list[str]:
        with _datastore("search recipe titles"):
            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                TITLE_MATCHES, values={"pattern": like_pattern(text)}
            )
            return [str(r["id"]) for r in rows]

    async def get(self, id: str) -> Recipe:
        with _datastore(f"get recipe {id}"):
            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                GET_RECIPE, values={"id": id}
            )
            if not rows:
                raise RecipeNotFound(f"{id}")
            if len(rows) > 1:
                raise AmbiguousRecipe(f"{id}")
            return Recipe.from_row(rows[0])

    async def ingredients(self, recipe_id: str) -> list[Ingredient]:
        with _datastore(f"list ingredients for {recipe_id}"):
            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                LIST_INGREDIENTS, values={"recipe_id": recipe_id}
            )
            return [Ingredient.from_row(r) for r in rows]

    async def create(self, recipe: NewRecipe) -> Recipe:
        values = recipe_row(recipe, uuid.uuid4().hex)
        with _datastore("create recipe"):
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                INSERT_RECIPE, values=values
            )
        logger.info("Created recipe %s", values["id"])
        return Recipe.from_row(values)

    async def add_ingredients(
        self,
        recipe_id: str,
        ingredients: list[NewIngredient],
    ) -> None:
        if not ingredients:
            return
        values = [
            {"id": uuid.uuid4().hex, "recipe_id": recipe_id, **i.model_dump()}
            for i in ingredients
        ]
        with _datastore(f"add ingredients to {recipe_id}"):
            async with self.db.transaction():
                await self.db.execute_many(  # pyright: ignore[reportUnknownMemberType]
                    INSERT_INGREDIENT, values=values
                )
        logger.info("Added %d ingredients to recipe %s", len(values), recipe_id)
