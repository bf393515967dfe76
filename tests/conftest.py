from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from menu_api.core.logging import RequestLogger
from menu_api.core.rate_limit import limiter
from menu_api.main import create_app
from menu_api.menu.seed import seed_store
from menu_api.menu.store import MenuStore


class RecordingLogger:
    """Stands in for a structlog bound logger and keeps every call."""

    def __init__(self) -> None:
        self.records: list[dict[str, Any]] = []

    def info(self, event: str, **fields: Any) -> None:
        self.records.append({"event": event, **fields})


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def store() -> MenuStore:
    menu_store = MenuStore()
    seed_store(menu_store)
    return menu_store


@pytest.fixture()
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture()
def client(store: MenuStore) -> TestClient:
    app = create_app(store=store, request_logger=RequestLogger(enabled=False))
    return TestClient(app)


@pytest.fixture()
def valid_payload() -> dict[str, Any]:
    return {
        "name": "Tacos",
        "description": "Soft corn tortillas with beef",
        "price": 9.5,
        "category": "entree",
        "ingredients": ["beef", "tortilla"],
    }
