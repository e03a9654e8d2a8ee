from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tasks_api.main import create_app
from tasks_api.repositories import get_repository
from tasks_api.settings import Settings

from .fakes import InMemoryRepository


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def app(settings, repo):
    """
    Application wired to an in-memory repository.

    The lifespan (and so the real pool) only runs when the client is used as
    a context manager, which these tests avoid.
    """
    application = create_app(settings)
    application.dependency_overrides[get_repository] = lambda: repo
    return application


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
