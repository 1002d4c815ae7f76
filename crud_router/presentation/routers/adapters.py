"""Request Adapters: one async endpoint per generated operation.

Each adapter extracts its inputs from the request, makes exactly one call to
the data-access contract, and shapes the outcome into a JSON response.
Failures never escape: they are mapped by ``data_access_error_response``.

Adapters:
    list            GET    <path>        -> Model.list(criteria)
    get             GET    <path>/{id}   -> Model.get(id, ancestors)
    create          POST   <path>        -> Model(data, ancestors).save()
    update_patch    PATCH  <path>/{id}   -> Model.update(..., replace=False)
    update_replace  PUT    <path>/{id}   -> Model.update(..., replace=True)
    delete          DELETE <path>/{id}   -> Model.delete(id, ancestors)
    delete_all      DELETE <path>        -> Model.delete_all(ancestors)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from crud_router.core.enums import Operation
from crud_router.core.result import Failure, Success, attempt
from crud_router.domain.protocols import LoggerProtocol
from crud_router.presentation.routers.dependencies import (
    request_body,
    uploaded_files,
)
from crud_router.presentation.routers.errors import data_access_error_response
from crud_router.presentation.routers.paths import ancestors_from_params
from crud_router.presentation.routers.resolver import ResolvedConfig

PAGE_CURSOR_PARAM = "pageCursor"

UPLOAD_WITHOUT_HANDLER_MESSAGE = (
    "File uploads are not handled by the generated create route. "
    "Configure a custom handler for this operation."
)


class ResourceAdapters:
    """Built-in endpoints of one registered resource.

    Args:
        model: Resource model implementing the data-access contract.
        config: Resolved resource configuration.
        logger: Logger for data-access failures.
    """

    def __init__(
        self, model: Any, config: ResolvedConfig, *, logger: LoggerProtocol
    ) -> None:
        self._model = model
        self._config = config
        self._logger = logger.bind(entity_kind=config.entity_kind)

    def endpoint_for(self, operation: Operation) -> Callable[[Request], Any]:
        """Return the built-in endpoint serving ``operation``."""
        endpoints: dict[Operation, Callable[[Request], Any]] = {
            Operation.LIST: self.list,
            Operation.GET: self.get,
            Operation.CREATE: self.create,
            Operation.UPDATE_PATCH: self.update_patch,
            Operation.UPDATE_REPLACE: self.update_replace,
            Operation.DELETE: self.delete,
            Operation.DELETE_ALL: self.delete_all,
        }
        return endpoints[operation]

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def list(self, request: Request) -> Response:
        """List entities, one page at a time.

        GET <path>?pageCursor=... -> 200 JSON array

        Sets ``Link: <url>; rel="next"`` when the data layer returns a next
        page cursor.
        """
        resolved = self._config.operations[Operation.LIST]
        criteria: dict[str, Any] = {
            "show_key": resolved.show_key,
            "read_all": resolved.read_all,
            **resolved.criteria,
        }
        ancestors = self._ancestors(request)
        if ancestors:
            criteria["ancestors"] = ancestors
        cursor = request.query_params.get(PAGE_CURSOR_PARAM)
        if cursor:
            criteria["start"] = cursor

        result = await attempt(self._model.list, criteria)

        match result:
            case Success(value=page):
                entities = [
                    _shape(entity, read_all=resolved.read_all, show_key=resolved.show_key)
                    for entity in _field(page, "entities") or ()
                ]
                headers: dict[str, str] = {}
                next_cursor = _field(page, "next_page_cursor")
                if next_cursor:
                    headers["Link"] = f'<{self._next_page_url(request, next_cursor)}>; rel="next"'
                return JSONResponse(content=jsonable_encoder(entities), headers=headers)
            case Failure(error=error):
                return self._failure(Operation.LIST, error)

    async def get(self, request: Request) -> Response:
        """Fetch one entity.

        GET <path>/{id} -> 200 shaped entity
        """
        resolved = self._config.operations[Operation.GET]
        result = await attempt(
            self._model.get,
            request.path_params["id"],
            ancestors=self._ancestors(request),
        )

        match result:
            case Success(value=entity):
                return self._entity_response(
                    entity, read_all=resolved.read_all, show_key=resolved.show_key
                )
            case Failure(error=error):
                return self._failure(Operation.GET, error)

    async def create(self, request: Request) -> Response:
        """Create an entity from the request body.

        POST <path> -> 201 shaped entity, ``Location: <path>/<new id>``

        Status is 201 Created (not 200); the Location header names the new
        entity.

        Uploaded files are refused with 500 before the data layer is called:
        file handling needs a custom handler.
        """
        if uploaded_files(request):
            self._logger.warning(
                "File upload refused without custom handler",
                operation=Operation.CREATE.value,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": UPLOAD_WITHOUT_HANDLER_MESSAGE},
            )

        resolved = self._config.operations[Operation.CREATE]
        result = await attempt(
            self._save_new, request_body(request), self._ancestors(request)
        )

        match result:
            case Success(value=entity):
                response = self._entity_response(
                    entity,
                    read_all=resolved.read_all,
                    show_key=resolved.show_key,
                    status_code=status.HTTP_201_CREATED,
                )
                entity_id = getattr(entity, "id", None)
                if entity_id is not None:
                    response.headers["Location"] = (
                        f"{request.url.path.rstrip('/')}/{entity_id}"
                    )
                return response
            case Failure(error=error):
                return self._failure(Operation.CREATE, error)

    async def update_patch(self, request: Request) -> Response:
        """Merge the request body into an entity.

        PATCH <path>/{id} -> 200 shaped entity
        """
        return await self.update(request, Operation.UPDATE_PATCH, replace=False)

    async def update_replace(self, request: Request) -> Response:
        """Replace an entity's data with the request body.

        PUT <path>/{id} -> 200 shaped entity
        """
        return await self.update(request, Operation.UPDATE_REPLACE, replace=True)

    async def update(
        self, request: Request, operation: Operation, *, replace: bool
    ) -> Response:
        """Shared update step of update_patch and update_replace."""
        resolved = self._config.operations[operation]
        result = await attempt(
            self._update,
            request.path_params["id"],
            request_body(request),
            self._ancestors(request),
            replace=replace,
        )

        match result:
            case Success(value=entity):
                return self._entity_response(
                    entity, read_all=resolved.read_all, show_key=resolved.show_key
                )
            case Failure(error=error):
                return self._failure(operation, error)

    async def delete(self, request: Request) -> Response:
        """Delete one entity.

        DELETE <path>/{id} -> 200 ``{success, message}``
        """
        entity_id = request.path_params["id"]
        result = await attempt(
            self._model.delete, entity_id, ancestors=self._ancestors(request)
        )

        match result:
            case Success(value=outcome):
                kind = self._config.entity_kind
                if _field(outcome, "success"):
                    body = {
                        "success": True,
                        "message": f'{kind} "{entity_id}" deleted successfully.',
                    }
                else:
                    body = {
                        "success": False,
                        "message": f'Could not delete entity. {kind} "{entity_id}" not found',
                    }
                return JSONResponse(content=body)
            case Failure(error=error):
                return self._failure(Operation.DELETE, error)

    async def delete_all(self, request: Request) -> Response:
        """Delete every entity (under the ancestors in the path, if any).

        DELETE <path> -> 200 data-layer result, passed through
        """
        result = await attempt(
            self._model.delete_all, ancestors=self._ancestors(request)
        )

        match result:
            case Success(value=outcome):
                return JSONResponse(content=jsonable_encoder(outcome))
            case Failure(error=error):
                return self._failure(Operation.DELETE_ALL, error)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ancestors(self, request: Request) -> list[Any] | None:
        return ancestors_from_params(request.path_params, self._config.ancestors)

    async def _save_new(
        self, body: Mapping[str, Any], ancestors: list[Any] | None
    ) -> Any:
        # sanitize and construction run inside the attempt so their errors are mapped
        data = self._model.sanitize(body)
        entity = self._model(data, ancestors=ancestors)
        return await entity.save()

    async def _update(
        self,
        entity_id: Any,
        body: Mapping[str, Any],
        ancestors: list[Any] | None,
        *,
        replace: bool,
    ) -> Any:
        data = self._model.sanitize(body)
        return await self._model.update(
            entity_id, data, ancestors=ancestors, replace=replace
        )

    def _entity_response(
        self,
        entity: Any,
        *,
        read_all: bool,
        show_key: bool,
        status_code: int = status.HTTP_200_OK,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(
                _shape(entity, read_all=read_all, show_key=show_key)
            ),
        )

    def _next_page_url(self, request: Request, cursor: str) -> str:
        """Request URL with ``pageCursor`` replaced by ``cursor``."""
        url = request.url.include_query_params(**{PAGE_CURSOR_PARAM: cursor})
        if not self._config.host:
            return str(url)
        return f"{self._config.host}{url.path}?{url.query}"

    def _failure(self, operation: Operation, error: Exception) -> JSONResponse:
        response = data_access_error_response(error)
        self._logger.warning(
            "Data access call failed",
            operation=operation.value,
            status=response.status_code,
            error_type=type(error).__name__,
        )
        return response


def _shape(entity: Any, *, read_all: bool, show_key: bool) -> Any:
    """Project an entity with the visibility flags (mappings pass through)."""
    plain = getattr(entity, "plain", None)
    if callable(plain):
        return plain(read_all=read_all, show_key=show_key)
    return entity


def _field(result: Any, name: str) -> Any:
    """Read ``name`` from a data-layer result object or mapping."""
    if isinstance(result, Mapping):
        return result.get(name)
    return getattr(result, name, None)
