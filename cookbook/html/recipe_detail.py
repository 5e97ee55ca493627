from typing import Any

from jinja2 import Environment

from cookbook.domain.models import Ingredient, Recipe
from cookbook.domain.result import Result
from cookbook.html.page import Notification, Page


def paragraphs(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class RecipeDetail(Page):
    template_name = "recipe-detail.html"

    def __init__(
        self,
        recipe: Result[Recipe],
        ingredients: Result[list[Ingredient]],
        *,
        environment: Environment,
        placeholder_image: str,
        path: str = "/",
        notification: Notification | None = None,
    ) -> None:
        super().__init__(environment=environment, path=path, notification=notification)
        self.recipe = recipe
        self.ingredients = ingredients
        self.placeholder_image = placeholder_image

    @property
    def status_code(self) -> int:
        if self.recipe.is_not_found:
            return 404
        if self.recipe.is_failed:
            return 502
        return 200

    @property
    def title(self) -> str:
        return self.recipe.value.title if self.recipe.value else "Recipe"

    @property
    def image(self) -> str:
        recipe = self.recipe.value
        return (recipe.image_url if recipe else None) or self.placeholder_image

    @property
    def instructions(self) -> list[str]:
        recipe = self.recipe.value
        return paragraphs(recipe.instructions) if recipe else []

    def context(self) -> dict[str, Any]:
        return {"recipe": self.recipe.value}
