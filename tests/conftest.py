from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncIterator, Iterator
import uuid

from databases import Database
import pytest
import pytest_asyncio
from starlette.testclient import TestClient

from cookbook.app import create_app
from cookbook.config import Config
from cookbook.db import create_db
from cookbook.domain.drafts import NewIngredient, NewRecipe
from cookbook.domain.errors import AmbiguousRecipe, DatastoreError, RecipeNotFound
from cookbook.domain.filters import RecipeFilter
from cookbook.domain.models import Ingredient, Recipe
from cookbook.domain.repository import RecipeRepository


SAMPLE_RECIPES: list[dict[str, Any]] = [
    {"title": "Chicken Tikka Masala", "difficulty": "medium", "calories": 650, "protein": 45},
    {"title": "Lemon chicken tacos", "difficulty": "easy", "calories": 420, "protein": 35},
    {"title": "Beef Tacos", "difficulty": "easy", "calories": 550, "protein": 30},
    {"title": "Fish Taco Bowl", "difficulty": "hard", "calories": 380, "protein": 28},
    {"title": "Vegan Chili", "difficulty": "medium", "calories": 300, "protein": 15},
    {"title": "Grilled CHICKEN salad", "difficulty": "easy", "calories": 250, "protein": 40},
]


def new_recipe(**overrides: Any) -> NewRecipe:
    fields: dict[str, Any] = {
        "title": "Simple Pancakes",
        "description": "Fluffy weekend pancakes.",
        "instructions": "Mix dry ingredients.\nAdd wet ingredients.\n\nCook until golden.",
        "cooking_time": 20,
        "servings": 4,
        "difficulty": "easy",
        "image_url": None,
        "calories": 350,
        "protein": 9,
        "carbs": 50,
        "fat": 12,
    }
    fields.update(overrides)
    return NewRecipe(**fields)


def new_ingredients(n: int) -> list[NewIngredient]:
    return [NewIngredient(name=f"ingredient {i}", amount=i + 0.5, unit="g") for i in range(n)]


def form_data(n_ingredients: int = 2, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Spicy Chicken Wraps",
        "description": "Quick wraps for lunch.",
        "instructions": "Slice the chicken.\nFry it.\nWrap it.",
        "cooking_time": "25",
        "servings": "2",
        "difficulty": "medium",
        "image_url": "",
        "ingredient_name": [f"ingredient {i}" for i in range(n_ingredients)],
        "ingredient_amount": [str(i + 1) for i in range(n_ingredients)],
        "ingredient_unit": ["g"] * n_ingredients,
        "calories": "480",
        "protein": "38.5",
        "carbs": "40",
        "fat": "14",
        "action": "create",
    }
    data.update(overrides)
    return data


def _matches(recipe: Recipe, filter: RecipeFilter | None) -> bool:
    if filter is None:
        return True
    if filter.search and filter.search.lower() not in recipe.title.lower():
        return False
    if filter.difficulty is not None and recipe.difficulty is not filter.difficulty:
        return False
    lo, hi = filter.calories
    if not lo <= recipe.calories <= hi:
        return False
    lo, hi = filter.protein
    if not lo <= recipe.protein <= hi:
        return False
    return True


class FakeRecipeRepository:
    """In-memory stand-in for `RecipeRepository`.

    Operation names in `failing` raise `DatastoreError`.
    """

    def __init__(self, *, failing: set[str] | None = None) -> None:
        self.recipes: dict[str, Recipe] = {}
        self.ingredient_rows: list[Ingredient] = []
        self.failing = set() if failing is None else failing
        self.calls: list[str] = []

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failing:
            raise DatastoreError(f"{name} is down")

    async def list(self, filter: RecipeFilter | None = None, *, limit: int | None = None) -> list[Recipe]:
        self._call("list")
        found = [r for r in self.recipes.values() if _matches(r, filter)]
        return found if limit is None else found[:limit]

    async def title_matches(self, text: str) -> list[str]:
        self._call("title_matches")
        return [r.id for r in self.recipes.values() if text.lower() in r.title.lower()]

    async def get(self, id: str) -> Recipe:
        self._call("get")
        found = [r for r in self.recipes.values() if r.id == id]
        if not found:
            raise RecipeNotFound(id)
        if len(found) > 1:
            raise AmbiguousRecipe(id)
        return found[0]

    async def ingredients(self, recipe_id: str) -> list[Ingredient]:
        self._call("ingredients")
        return [i for i in self.ingredient_rows if i.recipe_id == recipe_id]

    async def create(self, recipe: NewRecipe) -> Recipe:
        self._call("create")
        values = recipe.model_dump(mode="json")
        values["id"] = uuid.uuid4().hex
        created = Recipe.from_row(values)
        self.recipes[created.id] = created
        return created

    async def add_ingredients(self, recipe_id: str, ingredients: list[NewIngredient]) -> None:
        self._call("add_ingredients")
        self.ingredient_rows.extend(
            Ingredient(id=uuid.uuid4().hex, recipe_id=recipe_id, **i.model_dump())
            for i in ingredients
        )

    def seed(self, recipes: list[dict[str, Any]] = SAMPLE_RECIPES) -> list[Recipe]:
        created = []
        for fields in recipes:
            values = new_recipe(**fields).model_dump(mode="json")
            values["id"] = uuid.uuid4().hex
            recipe = Recipe.from_row(values)
            self.recipes[recipe.id] = recipe
            created.append(recipe)
        return created


@pytest.fixture
def fake_repo() -> FakeRecipeRepository:
    return FakeRecipeRepository()


@pytest.fixture
def config() -> Config:
    return Config(db_url="sqlite+aiosqlite:///unused.db", log_level="WARNING")


@pytest.fixture
def client(fake_repo: FakeRecipeRepository, config: Config) -> Iterator[TestClient]:
    app = create_app(cfg=config, repository=fake_repo)  # pyright: ignore[reportArgumentType]
    with TestClient(app) as client:
        yield client


def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'cookbook.db'}"


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db = Database(sqlite_url(tmp_path))
    await db.connect()
    await create_db(db)
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def repo(database: Database) -> RecipeRepository:
    return RecipeRepository(database)
