import importlib
import logging
from typing import Iterator

import pytest

from cookbook.app import create_app
from cookbook.config import Config
from cookbook.logs import setup_logging


@pytest.fixture
def root_level() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_later_calls_change_level(root_level: None) -> None:
    setup_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING


def test_app_applies_configured_level(root_level: None) -> None:
    setup_logging("DEBUG")
    create_app(cfg=Config(db_url="sqlite+aiosqlite:///unused.db", log_level="ERROR"))
    assert logging.getLogger().level == logging.ERROR


def test_import_builds_no_app() -> None:
    module = importlib.import_module("cookbook.app")
    assert not hasattr(module, "app")
