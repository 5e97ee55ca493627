from pathlib import Path

from starlette.testclient import TestClient

from cookbook.app import create_app
from cookbook.config import Config

from tests.conftest import form_data, sqlite_url


def test_create_then_browse(tmp_path: Path) -> None:
    app = create_app(cfg=Config(db_url=sqlite_url(tmp_path), log_level="WARNING"))
    with TestClient(app) as client:
        created = client.post("/new", data=form_data(3), follow_redirects=False)
        assert created.status_code == 303
        location = created.headers["location"]

        detail = client.get(location)
        assert detail.status_code == 200
        assert "Spicy Chicken Wraps" in detail.text
        assert detail.text.count("<li>") == 3

        found = client.post("/", data={"search": "CHICKEN"}, follow_redirects=False)
        assert found.status_code == 303

        listing = client.get(found.headers["location"])
        recipe_path = location.split("?")[0]
        assert f'href="{recipe_path}"' in listing.text

        missing = client.post("/", data={"search": "pasta"}, follow_redirects=False)
        assert missing.status_code == 200
        assert "No recipes found matching your search." in missing.text

        assert client.get("/recipes/nope").status_code == 404
