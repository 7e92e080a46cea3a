"""Global pytest fixtures for the contacts service."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from contacts.router import get_repository
from main import app
from tests.fakes import InMemoryContactRepository

# pylint: disable=redefined-outer-name


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def repository() -> InMemoryContactRepository:
    return InMemoryContactRepository()


@pytest.fixture
def client(repository: InMemoryContactRepository) -> Iterator[TestClient]:
    """HTTP client wired to the in-memory repository.

    The client is not used as a context manager, so the lifespan (and its
    database pool) never starts.
    """
    app.dependency_overrides[get_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
