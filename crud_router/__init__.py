"""crud_router - CRUD routes for data models from declarative settings.

Usage:
    from fastapi import APIRouter
    from crud_router import CrudRouter

    router = APIRouter()
    CrudRouter(router).create(BlogPost, {"path": "/posts"})
"""

from crud_router.core.config import LibrarySettings, get_settings
from crud_router.core.enums import Operation
from crud_router.core.errors import ConfigError, DataAccessError
from crud_router.domain.value_objects import DeletionResult, ListPage
from crud_router.presentation.routers import (
    OPERATION_TABLE,
    CrudRouter,
    HTTPMethod,
    ResourceApi,
    RouteEntry,
)
from crud_router.schemas import OperationSettings, ResourceSettings

__version__ = "0.1.0"

__all__ = [
    "CrudRouter",
    "ResourceApi",
    "RouteEntry",
    "ResourceSettings",
    "OperationSettings",
    "LibrarySettings",
    "get_settings",
    "Operation",
    "HTTPMethod",
    "OPERATION_TABLE",
    "ConfigError",
    "DataAccessError",
    "ListPage",
    "DeletionResult",
]
