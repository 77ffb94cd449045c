import importlib
from typing import Dict, List, Optional

import pytest

fastapi = pytest.importorskip("fastapi")
TestClient = pytest.importorskip("fastapi.testclient").TestClient


class DummyPool:
    """Minimal pool stub to avoid real DB connections in integration tests."""

    def connection(self):
        raise RuntimeError("Connection should not be used in mocked integration tests")


class InMemoryUserRepository:
    """Stands in for UserRepository; ids start at 1 like a SERIAL column."""

    def __init__(self):
        self.rows: Dict[int, Dict[str, str]] = {}
        self.next_id = 1
        self.calls: List[str] = []

    def _user(self, user_id: int):
        from users_api.core.domain.user import User

        return User(id=user_id, **self.rows[user_id])

    def list_users(self):
        self.calls.append("list_users")
        return [self._user(user_id) for user_id in self.rows]

    def get_user(self, user_id: int) -> Optional[object]:
        self.calls.append("get_user")
        return self._user(user_id) if user_id in self.rows else None

    def create_user(self, fields) -> int:
        self.calls.append("create_user")
        user_id = self.next_id
        self.next_id += 1
        self.rows[user_id] = fields.model_dump()
        return user_id

    def update_user(self, user_id: int, fields) -> int:
        self.calls.append("update_user")
        if user_id not in self.rows:
            return 0
        self.rows[user_id] = fields.model_dump()
        return 1


@pytest.fixture
def app_modules(monkeypatch):
    """
    Load app + users router with a fake pool so startup doesn't require DATABASE_URL.
    The repository dependency is swapped for an in-memory one.
    """
    app_module = importlib.import_module("users_api.main")
    users_module = importlib.import_module("users_api.interfaces.api.routers.users")

    fake_pool = DummyPool()
    monkeypatch.setattr(app_module.db, "init_pool", lambda: None)
    monkeypatch.setattr(app_module.db, "close_pool", lambda: None)
    monkeypatch.setattr(app_module.db, "pool", fake_pool)
    monkeypatch.setattr(app_module.db, "get_pool", lambda: fake_pool)
    monkeypatch.setattr(app_module.user_repository, "ensure_table", lambda gateway: None)

    repo = InMemoryUserRepository()
    app_module.app.dependency_overrides[users_module.get_user_repository] = (
        lambda: repo
    )
    yield {
        "main": app_module,
        "app": app_module.app,
        "users": users_module,
        "repo": repo,
        "pool": fake_pool,
    }
    app_module.app.dependency_overrides.clear()


@pytest.fixture
def client(app_modules):
    return TestClient(app_modules["app"])


@pytest.fixture
def repo(app_modules):
    return app_modules["repo"]
