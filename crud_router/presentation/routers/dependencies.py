"""Request-processing dependencies for generated routes.

Dependencies:
    decode_body: Body decoding step prepended to create/update routes

Route class:
    CrudRoute: APIRoute rendering RequestBodyError with the error mapper

The decoded body and any uploaded files are stored on ``request.state``
(``body``, ``files``) for the endpoint and later middleware to read.
"""

import json
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request, Response
from fastapi.routing import APIRoute
from starlette.datastructures import UploadFile

from crud_router.core.errors import RequestBodyError
from crud_router.presentation.routers.errors import data_access_error_response

_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

MALFORMED_JSON_MESSAGE = "Malformed JSON body"
NON_OBJECT_BODY_MESSAGE = "Request body must be a JSON object"


async def decode_body(request: Request) -> None:
    """Decode the request body into ``request.state.body``.

    - JSON (or no content type): parsed object; empty body -> {}
    - Form / multipart: non-file fields -> body, files -> ``request.state.files``

    Args:
        request: FastAPI request object.

    Raises:
        RequestBodyError: If the body is not valid UTF-8 JSON, or not an object.
    """
    content_type = request.headers.get("content-type", "")
    body: dict[str, object] = {}
    files: list[UploadFile] = []

    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.append(value)
            else:
                body[key] = value
    elif await request.body():
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise RequestBodyError(MALFORMED_JSON_MESSAGE) from exc
        if not isinstance(payload, dict):
            raise RequestBodyError(NON_OBJECT_BODY_MESSAGE)
        body = payload

    request.state.body = body
    request.state.files = tuple(files)


def request_body(request: Request) -> dict[str, object]:
    """Return the decoded body ({} if decode_body did not run)."""
    return getattr(request.state, "body", None) or {}


def uploaded_files(request: Request) -> tuple[UploadFile, ...]:
    """Return the uploaded files (empty if decode_body did not run)."""
    return getattr(request.state, "files", ())


class CrudRoute(APIRoute):
    """FastAPI route class for generated routes.

    Body decoding failures surface as ``{"code": 400, "message": ...}``
    instead of FastAPI's ``{"detail": ...}`` shape.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await original(request)
            except RequestBodyError as error:
                return data_access_error_response(error)

        return route_handler
