from collections.abc import Generator
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from prompt_studio.main import app

pytest_plugins = [
    "tests.diffs.fixtures",
    "tests.patches.fixtures",
    "tests.llms.fixtures",
    "tests.studio.fixtures",
]


@pytest.fixture(scope="function")
def client() -> Generator[TestClient]:
    """
    Provides a TestClient without the real lifespan. Tests override service dependencies themselves.
    """

    # observability is not needed per request
    @asynccontextmanager
    async def mock_lifespan(_app):  # noqa: ANN001
        yield

    app.router.lifespan_context = mock_lifespan

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
