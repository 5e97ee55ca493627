from typing import Any

from jinja2 import Environment

from cookbook.domain.drafts import MACROS, RecipeDraft
from cookbook.domain.models import Difficulty
from cookbook.html.page import Notification, Page


MACRO_LABELS = {
    "calories": "Calories",
    "protein": "Protein (g)",
    "carbs": "Carbs (g)",
    "fat": "Fat (g)",
}


class RecipeForm(Page):
    template_name = "create.html"

    def __init__(
        self,
        draft: RecipeDraft,
        *,
        environment: Environment,
        path: str = "/new",
        notification: Notification | None = None,
        status_code: int = 200,
    ) -> None:
        super().__init__(environment=environment, path=path, notification=notification)
        self.draft = draft
        self.status_code = status_code

    @property
    def difficulties(self) -> list[Difficulty]:
        return list(Difficulty)

    @property
    def macros(self) -> list[tuple[str, str, str]]:
        return [(m, MACRO_LABELS[m], self.draft.macros[m]) for m in MACROS]

    @property
    def can_remove_ingredients(self) -> bool:
        return len(self.draft.ingredients) > 1

    def context(self) -> dict[str, Any]:
        return {"draft": self.draft}
