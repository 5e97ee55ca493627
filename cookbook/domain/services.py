import asyncio
import logging

from cookbook.domain.drafts import RecipeDraft
from cookbook.domain.errors import (
    DatastoreError,
    IngredientsCreateFailed,
    RecipeCreateFailed,
)
from cookbook.domain.filters import RecipeFilter
from cookbook.domain.models import Ingredient, Recipe
from cookbook.domain.repository import RecipeRepository
from cookbook.domain.result import Result


logger = logging.getLogger(__name__)


async def featured_recipes(
    *,
    repository: RecipeRepository,
    n: int = 6,
) -> Result[list[Recipe]]:
    return await Result.of(repository.list(limit=n))


async def search_recipes(
    filter: RecipeFilter,
    *,
    repository: RecipeRepository,
) -> Result[list[Recipe]]:
    return await Result.of(repository.list(filter))


async def has_title_match(query: str, *, repository: RecipeRepository) -> bool:
    """Whether any recipe title contains `query`, ignoring case."""
    return bool(await repository.title_matches(query))


async def load_recipe_detail(
    id: str,
    *,
    repository: RecipeRepository,
) -> tuple[Result[Recipe], Result[list[Ingredient]]]:
    """The recipe and its ingredients, fetched independently of each other."""
    recipe, ingredients = await asyncio.gather(
        Result.of(repository.get(id)),
        Result.of(repository.ingredients(id)),
    )
    return recipe, ingredients


async def create_recipe(
    draft: RecipeDraft,
    *,
    repository: RecipeRepository,
) -> Recipe:
    """Write the recipe, then its ingredients.

    The two writes are not atomic. If the ingredients fail the recipe row
    stays, and `IngredientsCreateFailed` carries its id.
    """
    # Raises InvalidDraft before anything is written.
    new_recipe = draft.to_new_recipe()
    new_ingredients = draft.to_new_ingredients()

    try:
        recipe = await repository.create(new_recipe)
    except DatastoreError as e:
        logger.exception("Failed to create recipe %r", new_recipe.title)
        raise RecipeCreateFailed("Failed to create recipe") from e

    try:
        await repository.add_ingredients(recipe.id, new_ingredients)
    except DatastoreError as e:
        logger.exception("Failed to add ingredients to recipe %s", recipe.id)
        raise IngredientsCreateFailed(
            "Failed to add ingredients", recipe_id=recipe.id
        ) from e

    return recipe
