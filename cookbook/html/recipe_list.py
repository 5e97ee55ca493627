from typing import Any

from jinja2 import Environment

from cookbook.domain.filters import RecipeFilter
from cookbook.domain.models import Difficulty, Recipe
from cookbook.domain.result import Result
from cookbook.html.page import Page


class RecipeList(Page):
    """Browse page: the filter form plus the card grid it drives."""

    template_name = "recipe-list.html"
    results_template_name = "recipe-cards.html"

    def __init__(
        self,
        filter: RecipeFilter,
        recipes: Result[list[Recipe]],
        *,
        environment: Environment,
        placeholder_image: str,
        path: str = "/recipes",
    ) -> None:
        super().__init__(environment=environment, path=path)
        self.filter = filter
        self.recipes = recipes
        self.placeholder_image = placeholder_image

    @property
    def status_code(self) -> int:
        return 502 if self.recipes.is_failed else 200

    @property
    def difficulties(self) -> list[Difficulty]:
        return list(Difficulty)

    def context(self) -> dict[str, Any]:
        return {"recipes": self.recipes.value or [], "filter": self.filter}

    def render_results(self) -> str:
        return self.env.get_template(self.results_template_name).render(
            page=self, **self.context()
        )
