from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cookbook.html.page import format_number


def environment_factory(html_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(html_dir),
        autoescape=select_autoescape(),
    )
    env.filters["num"] = format_number
    return env
