"""Route Registrar for generated CRUD routes.

CrudRouter is the entry point: it holds the FastAPI router and the library
overrides, and ``create(Model, settings)`` turns one resource model into
its set of routes.

Registration algorithm (per resource, operations in canonical order):
    1. Skip disabled operations (delete_all unless enabled is exactly True)
    2. Dependencies: decode_body for body operations, then the operation's
       middleware in declaration order
    3. Endpoint: built-in adapter, or the custom handler verbatim
    4. One RouteEntry per path from build_paths(), registered with
       ``router.add_api_route``

Usage:
    from fastapi import APIRouter, FastAPI
    from crud_router import CrudRouter

    router = APIRouter()
    api = CrudRouter(router)
    api.create(BlogPost, {"operations": {"deleteAll": {"exec": True}}})

    app = FastAPI()
    app.include_router(router)
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, FastAPI

from crud_router.core.config import LibrarySettings, get_settings
from crud_router.core.container import get_logger
from crud_router.core.errors import ConfigError
from crud_router.domain.protocols import LoggerProtocol
from crud_router.presentation.routers.adapters import ResourceAdapters
from crud_router.presentation.routers.dependencies import CrudRoute, decode_body
from crud_router.presentation.routers.metadata import (
    OPERATION_TABLE,
    BuiltinAdapter,
    CustomHandler,
    RouteEntry,
)
from crud_router.presentation.routers.paths import build_paths
from crud_router.presentation.routers.resolver import ResolvedConfig, resolve_settings
from crud_router.schemas import ResourceSettings


@dataclass(frozen=True, kw_only=True)
class ResourceApi:
    """One registered resource.

    Attributes:
        model: Resource model
        config: Resolved configuration
        adapters: Built-in endpoints bound to the model
        routes: Registered routes, in registration order
    """

    model: Any
    config: ResolvedConfig
    adapters: ResourceAdapters
    routes: tuple[RouteEntry, ...]


class CrudRouter:
    """Generate CRUD routes for resource models on a FastAPI router.

    Args:
        router: ``APIRouter`` or ``FastAPI`` app (anything with ``add_api_route``).
        overrides: Library-wide settings; defaults to ``get_settings()``.
            Captured once; never mutated afterwards.
        logger: Logger; defaults to ``get_logger()``.

    Raises:
        ConfigError: If the router is missing or has no ``add_api_route``.
    """

    def __init__(
        self,
        router: Any,
        *,
        overrides: LibrarySettings | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        if router is None or not callable(getattr(router, "add_api_route", None)):
            raise ConfigError("Router missing or wrong type", field="router")

        self._router = router
        self._overrides = overrides if overrides is not None else get_settings()
        self._logger = logger if logger is not None else get_logger()

    @property
    def overrides(self) -> LibrarySettings:
        """Library-wide settings applied to every resource."""
        return self._overrides

    def create(
        self,
        model: Any,
        settings: ResourceSettings | Mapping[str, Any] | None = None,
    ) -> ResourceApi:
        """Register the routes of one resource model.

        Args:
            model: Resource model implementing the data-access contract.
            settings: Resource settings (see ResourceSettings).

        Returns:
            ResourceApi describing the registered routes.

        Raises:
            ConfigError: On malformed settings. No route is registered then.
        """
        config = resolve_settings(model, self._overrides, settings)
        adapters = ResourceAdapters(model, config, logger=self._logger)
        routes = build_route_entries(config, adapters)

        register_routes(self._router, routes, tags=[config.entity_kind])

        self._logger.info(
            "Resource routes registered",
            entity_kind=config.entity_kind,
            path=config.path,
            routes=len(routes),
        )
        for entry in routes:
            self._logger.debug(
                "Route registered",
                entity_kind=config.entity_kind,
                operation=entry.operation.value,
                method=entry.method.value,
                path=entry.path,
            )

        return ResourceApi(model=model, config=config, adapters=adapters, routes=routes)


def build_route_entries(
    config: ResolvedConfig, adapters: ResourceAdapters
) -> tuple[RouteEntry, ...]:
    """Compute every route of a resource, in canonical operation order.

    Args:
        config: Resolved resource configuration.
        adapters: Built-in endpoints of the resource.

    Returns:
        Route entries (one per enabled operation and path).
    """
    entries: list[RouteEntry] = []

    for spec in OPERATION_TABLE:
        resolved = config.operations[spec.operation]
        if not resolved.enabled:
            continue

        dependencies: tuple[Callable[..., Any], ...] = (
            (decode_body,) if spec.consumes_body else ()
        ) + resolved.middleware

        endpoint: Callable[..., Any]
        match resolved.binding:
            case CustomHandler(handler=handler):
                endpoint = handler
            case BuiltinAdapter():
                endpoint = adapters.endpoint_for(spec.operation)

        entries.extend(
            RouteEntry(
                operation=spec.operation,
                path=path,
                method=spec.method,
                dependencies=dependencies,
                endpoint=endpoint,
            )
            for path in build_paths(config, spec.operation)
        )

    return tuple(entries)


def register_routes(
    router: Any, routes: tuple[RouteEntry, ...], *, tags: list[str] | None = None
) -> None:
    """Register route entries with a FastAPI router, in order.

    Routes are built with CrudRoute. A FastAPI app registers through its
    own ``app.router``.

    Args:
        router: ``APIRouter`` or ``FastAPI`` app.
        routes: Entries from ``build_route_entries``.
        tags: OpenAPI tags for the routes.
    """
    target = router.router if isinstance(router, FastAPI) else router
    for entry in routes:
        target.add_api_route(
            entry.path,
            entry.endpoint,
            methods=[entry.method.value],
            dependencies=[Depends(dependency) for dependency in entry.dependencies],
            name=f"{tags[0] if tags else 'resource'}.{entry.operation.value}",
            tags=tags,
            route_class_override=CrudRoute,
        )
