from typing import Any

from jinja2 import Environment


NAV_LINKS = (
    ("/", "Home"),
    ("/recipes", "Browse Recipes"),
)


def format_number(value: float | int | None) -> str:
    """2.0 -> "2", 2.5 -> "2.5"."""
    if value is None:
        return ""
    return f"{value:g}"


class Notification:
    def __init__(self, title: str, description: str, *, destructive: bool = False) -> None:
        self.title = title
        self.description = description
        self.destructive = destructive

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls("Error", description, destructive=True)

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls("Success", description)


class Page:
    """A full page rendered inside `base.html`."""

    template_name = "base.html"
    status_code = 200

    def __init__(
        self,
        *,
        environment: Environment,
        path: str = "/",
        notification: Notification | None = None,
    ) -> None:
        self.env = environment
        self.path = path
        self.notification = notification

    @property
    def nav(self) -> list[tuple[str, str, bool]]:
        return [(href, label, href == self.path) for href, label in NAV_LINKS]

    def context(self) -> dict[str, Any]:
        return {}

    def render(self) -> str:
        return self.env.get_template(self.template_name).render(
            page=self, **self.context()
        )
