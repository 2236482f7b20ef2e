import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from reqcheck.api.deps import checked
from reqcheck.core import checker
from reqcheck.core.checker import CheckResult
from reqcheck.core.config import Settings
from reqcheck.main import app
from tests.helpers import make_schema

ITEM_SCHEMA = make_schema(
    params=[{"key": "item_id", "type": "int"}],
    queries=[
        {"key": "verbose", "type": "bool", "nullable": True},
        {"key": "limit", "type": "int", "nullable": True},
    ],
    payload=[
        {"key": "name", "type": "string"},
        {"key": "price", "type": "float64"},
        {"key": "tags", "type": "map", "nullable": True},
    ],
)


SETTINGS_ENV = ("APP_ENV", "LOG_LEVEL", "MUTATING_METHODS", "VALUELESS_QUERY_AS_KEY")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Every test checks against defaults: no .env file, no inherited
    environment overrides.
    """
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    monkeypatch.setattr(checker, "settings", s)
    return s


@pytest.fixture()
def use_settings(monkeypatch):
    """Apply environment overrides and hand the checker a fresh Settings"""

    def _apply(**env: str) -> Settings:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        s = Settings(_env_file=None)
        monkeypatch.setattr(checker, "settings", s)
        return s

    return _apply


def _result_out(res: CheckResult) -> dict:
    return {"params": res.params, "queries": res.queries, "payload": res.payload}


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def items_client():
    """A small app whose routes are guarded by the checked() dependency"""
    items = FastAPI()

    @items.get("/items/{item_id}")
    def read_item(res: CheckResult = Depends(checked(ITEM_SCHEMA))):
        return _result_out(res)

    @items.put("/items/{item_id}")
    def update_item(res: CheckResult = Depends(checked(ITEM_SCHEMA))):
        return _result_out(res)

    @items.patch("/items/{item_id}")
    def patch_item(res: CheckResult = Depends(checked(ITEM_SCHEMA, mutating_methods=["PATCH"]))):
        return _result_out(res)

    return TestClient(items)
