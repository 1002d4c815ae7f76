"""Error Mapper: data-access failures to JSON responses.

Mapping rules:
    - numeric ``code`` (int, or integral float such as 404.0): used as HTTP
      status; 404 without message -> "Not found"; body ``{code, message}``.
      Numbers that are not HTTP statuses (fractional floats included) -> 500.
    - ``code`` present but non-numeric (or None): 400, body ``{code, message}``
    - no ``code`` attribute at all: 500, body ``{message}``

Every body carries a string ``message``.
"""

import math
from http import HTTPStatus
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

_MISSING: Any = object()

NOT_FOUND_MESSAGE = "Not found"


def data_access_error_response(error: BaseException) -> JSONResponse:
    """Convert a data-access error into a JSON error response.

    Args:
        error: Exception raised by the data-access contract.

    Returns:
        JSONResponse with the mapped status and ``{code?, message}`` body.

    Example:
        >>> response = data_access_error_response(DataAccessError(code=404))
        >>> response.status_code
        404
        >>> # body: {"code": 404, "message": "Not found"}
    """
    code = getattr(error, "code", _MISSING)
    message = _message_of(error)

    if code is _MISSING:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return JSONResponse(
            status_code=status_code,
            content={"message": message or _reason(status_code)},
        )

    if isinstance(code, float) and code.is_integer():
        code = int(code)

    if isinstance(code, int) and not isinstance(code, bool):
        status_code = code if 100 <= code <= 599 else status.HTTP_500_INTERNAL_SERVER_ERROR
        if code == status.HTTP_404_NOT_FOUND and message is None:
            message = NOT_FOUND_MESSAGE
    elif isinstance(code, float):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        if not math.isfinite(code):
            code = str(code)
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    return JSONResponse(
        status_code=status_code,
        content={
            "code": code if isinstance(code, (str, int, float, type(None))) else str(code),
            "message": message or _reason(status_code),
        },
    )


def _message_of(error: BaseException) -> str | None:
    """Explicit ``message`` attribute, else the exception text, else None."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(error)
    return text or None


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"
