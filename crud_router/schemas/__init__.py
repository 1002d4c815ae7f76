"""Pydantic schemas for caller-facing settings.

Usage:
    from crud_router.schemas import ResourceSettings, OperationSettings
"""

from crud_router.schemas.settings_schemas import (
    ContextSettings,
    OperationSettings,
    PathSettings,
    QueryOptions,
    ResourceSettings,
)

__all__ = [
    "ResourceSettings",
    "OperationSettings",
    "PathSettings",
    "ContextSettings",
    "QueryOptions",
]
