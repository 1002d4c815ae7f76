"""Data-access contract required from every resource model.

The route generator never talks to storage itself. A resource model is any
class exposing the members below (PEP 544 structural typing; no inheritance
required). All operations are async and attempted exactly once; failures
are raised as exceptions (see crud_router.core.errors.DataAccessError).

Usage:
    class BlogPost:
        entity_kind = "BlogPost"
        query_defaults = {"showKey": True}

        def __init__(self, data, key=None, ancestors=None): ...

        @classmethod
        async def list(cls, criteria): ...
        ...
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol


class Entity(Protocol):
    """A single model instance."""

    id: Any

    async def save(self) -> Entity:
        """Persist the entity and return the stored version."""
        ...

    def plain(self, *, read_all: bool = False, show_key: bool = False) -> dict[str, Any]:
        """Project the entity to a JSON-compatible mapping.

        Args:
            read_all: Include fields normally hidden from output.
            show_key: Include the storage identifier.
        """
        ...


class ListResult(Protocol):
    """Page of entities returned by ``list``."""

    entities: Sequence[Any]
    next_page_cursor: str | None


class DeleteResult(Protocol):
    """Outcome of ``delete``."""

    success: bool


class ResourceModel(Protocol):
    """Resource descriptor plus async data-access contract.

    Attributes:
        entity_kind: Entity name, used to derive the default path
            ("BlogPost" -> "/blog-posts") and in delete messages.
        query_defaults: Optional model-level output defaults
            (``showKey`` / ``readAll``, camelCase or snake_case keys).
    """

    entity_kind: str
    query_defaults: Mapping[str, Any]

    def __call__(
        self,
        data: Mapping[str, Any],
        key: Any = None,
        ancestors: Sequence[Any] | None = None,
    ) -> Entity:
        """Construct a new, unsaved entity."""
        ...

    async def list(self, criteria: Mapping[str, Any]) -> ListResult:
        """Return one page of entities matching ``criteria``.

        Criteria keys: ``show_key``, ``read_all``, optional ``ancestors``
        and ``start`` (page cursor), plus any operation options.
        """
        ...

    async def get(self, id: Any, ancestors: Sequence[Any] | None = None) -> Entity:
        """Fetch one entity; raise an error with ``code = 404`` if missing."""
        ...

    async def update(
        self,
        id: Any,
        data: Mapping[str, Any],
        ancestors: Sequence[Any] | None = None,
        replace: bool = False,
    ) -> Entity:
        """Merge (or, with ``replace``, overwrite) an entity's data."""
        ...

    async def delete(self, id: Any, ancestors: Sequence[Any] | None = None) -> DeleteResult:
        """Delete one entity."""
        ...

    async def delete_all(self, ancestors: Sequence[Any] | None = None) -> Any:
        """Delete every entity (optionally under ``ancestors``).

        The result is returned to the client verbatim and must be
        JSON-encodable.
        """
        ...

    def sanitize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Strip unknown or write-protected fields from a request body."""
        ...
