from typing import Any

from jinja2 import Environment

from cookbook.domain.models import Recipe
from cookbook.domain.result import Result
from cookbook.html.page import Page


NO_MATCH_ALERT = "No recipes found matching your search."
SEARCH_FAILED_ALERT = "Could not search recipes right now."


class Landing(Page):
    template_name = "index.html"

    def __init__(
        self,
        featured: Result[list[Recipe]],
        *,
        environment: Environment,
        placeholder_image: str,
        search: str = "",
        alert: str | None = None,
        path: str = "/",
    ) -> None:
        super().__init__(environment=environment, path=path)
        self.featured = featured
        self.placeholder_image = placeholder_image
        self.search = search
        self.alert = alert

    def context(self) -> dict[str, Any]:
        return {"recipes": self.featured.value or []}
