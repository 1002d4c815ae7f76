"""Route metadata types for generated CRUD routes.

This module defines the fixed Operation Table and the records the route
registrar produces.

Core types:
    HTTPMethod: HTTP method enum (GET, POST, PATCH, PUT, DELETE)
    OperationSpec: Static description of one logical operation
    OPERATION_TABLE: The seven operations in canonical registration order
    BuiltinAdapter / CustomHandler: How an operation's endpoint is bound
    RouteEntry: One (path, verb, dependencies, endpoint) tuple

Usage:
    from crud_router.presentation.routers.metadata import OPERATION_TABLE

    for spec in OPERATION_TABLE:
        print(spec.operation.value, spec.method.value, spec.targets_item)
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeAlias

from crud_router.core.enums import Context, Operation


# =============================================================================
# HTTP Method Enum
# =============================================================================


class HTTPMethod(str, Enum):
    """HTTP methods used by generated routes.

    Attributes:
        GET: Safe, idempotent read operations (list, get)
        POST: Non-idempotent create operations
        PUT: Idempotent complete replacement
        PATCH: Non-idempotent partial update
        DELETE: Idempotent delete operations (delete, delete_all)
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# =============================================================================
# Operation Table
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class OperationSpec:
    """Static description of one logical operation.

    Attributes:
        operation: Operation identifier
        method: HTTP verb the operation is bound to
        targets_item: True if the path ends with an ``{id}`` placeholder
        consumes_body: True if the body decoding step runs before the endpoint
        context: Default path-prefix group
        enabled_by_default: False only for delete_all (must be opted in)
    """

    operation: Operation
    method: HTTPMethod
    targets_item: bool
    consumes_body: bool
    context: Context
    enabled_by_default: bool = True


OPERATION_TABLE: tuple[OperationSpec, ...] = (
    OperationSpec(
        operation=Operation.LIST,
        method=HTTPMethod.GET,
        targets_item=False,
        consumes_body=False,
        context=Context.PUBLIC,
    ),
    OperationSpec(
        operation=Operation.GET,
        method=HTTPMethod.GET,
        targets_item=True,
        consumes_body=False,
        context=Context.PUBLIC,
    ),
    OperationSpec(
        operation=Operation.CREATE,
        method=HTTPMethod.POST,
        targets_item=False,
        consumes_body=True,
        context=Context.PRIVATE,
    ),
    OperationSpec(
        operation=Operation.UPDATE_PATCH,
        method=HTTPMethod.PATCH,
        targets_item=True,
        consumes_body=True,
        context=Context.PRIVATE,
    ),
    OperationSpec(
        operation=Operation.UPDATE_REPLACE,
        method=HTTPMethod.PUT,
        targets_item=True,
        consumes_body=True,
        context=Context.PRIVATE,
    ),
    OperationSpec(
        operation=Operation.DELETE,
        method=HTTPMethod.DELETE,
        targets_item=True,
        consumes_body=False,
        context=Context.PRIVATE,
    ),
    # Wildcard delete: private context, never registered unless enabled is True
    OperationSpec(
        operation=Operation.DELETE_ALL,
        method=HTTPMethod.DELETE,
        targets_item=False,
        consumes_body=False,
        context=Context.PRIVATE,
        enabled_by_default=False,
    ),
)

OPERATION_SPECS: dict[Operation, OperationSpec] = {
    spec.operation: spec for spec in OPERATION_TABLE
}


# =============================================================================
# Operation Binding
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class BuiltinAdapter:
    """Endpoint is the library's request adapter for the operation."""


@dataclass(frozen=True, kw_only=True)
class CustomHandler:
    """Endpoint is a caller-supplied handler, registered verbatim.

    The built-in adapter and its error mapping are bypassed entirely.

    Attributes:
        handler: FastAPI endpoint callable
    """

    handler: Callable[..., Any]


OperationBinding: TypeAlias = BuiltinAdapter | CustomHandler


# =============================================================================
# Route Entry
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class RouteEntry:
    """One route registered with the router.

    Attributes:
        operation: Logical operation served by the route
        path: URL path with FastAPI placeholders (e.g., "/users/{id}")
        method: HTTP verb
        dependencies: Ordered request-processing steps run before the endpoint
        endpoint: Built-in adapter or custom handler
    """

    operation: Operation
    path: str
    method: HTTPMethod
    dependencies: tuple[Callable[..., Any], ...]
    endpoint: Callable[..., Awaitable[Any] | Any]
