"""CRUD route generation package.

Modules:
    metadata: Operation table and route records (OPERATION_TABLE, RouteEntry)
    paths: Path Builder (build_paths, ancestors_from_params)
    resolver: Settings Resolver (resolve_settings, ResolvedConfig)
    dependencies: Body decoding step (decode_body)
    adapters: Request Adapters (ResourceAdapters)
    errors: Error Mapper (data_access_error_response)
    generator: Route Registrar (CrudRouter, ResourceApi)
"""

from crud_router.presentation.routers.dependencies import CrudRoute
from crud_router.presentation.routers.generator import (
    CrudRouter,
    ResourceApi,
    build_route_entries,
    register_routes,
)
from crud_router.presentation.routers.metadata import (
    OPERATION_TABLE,
    HTTPMethod,
    OperationSpec,
    RouteEntry,
)

__all__ = [
    "CrudRoute",
    "CrudRouter",
    "ResourceApi",
    "build_route_entries",
    "register_routes",
    "OPERATION_TABLE",
    "HTTPMethod",
    "OperationSpec",
    "RouteEntry",
]
