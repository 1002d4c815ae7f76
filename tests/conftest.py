"""Pytest configuration and shared fixtures.

Provides:
1. An in-memory resource model whose data-access calls are AsyncMocks
2. A factory building a FastAPI app + TestClient around generated routes
3. Library overrides isolated from the process environment
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any
from unittest.mock import Mock

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from crud_router import CrudRouter, LibrarySettings
from crud_router.presentation.routers.generator import ResourceApi
from tests.utils.fakes import FakeEntity, make_model


@pytest.fixture
def model() -> type[FakeEntity]:
    """Resource model ``BlogPost`` with no query defaults."""
    return make_model()


@pytest.fixture
def overrides() -> LibrarySettings:
    """Library overrides independent of CRUD_ROUTER_* environment variables."""
    return LibrarySettings(
        environment="testing",
        host="",
        public_context="",
        private_context="",
        show_key=False,
        read_all=False,
    )


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double; ``bind`` returns the same mock so calls are observable."""
    logger = Mock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def build_client(
    overrides: LibrarySettings, mock_logger: Mock
) -> Callable[..., tuple[TestClient, ResourceApi]]:
    """Factory: register a model and return (TestClient, ResourceApi)."""

    def _build(
        model: Any,
        settings: Mapping[str, Any] | None = None,
        library: LibrarySettings | None = None,
    ) -> tuple[TestClient, ResourceApi]:
        router = APIRouter()
        api = CrudRouter(router, overrides=library or overrides, logger=mock_logger)
        resource = api.create(model, settings)
        app = FastAPI()
        app.include_router(router)
        return TestClient(app), resource

    return _build


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "api: HTTP-level tests through TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
