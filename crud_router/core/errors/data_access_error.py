"""Errors raised by data-access layers.

The adapters treat ANY exception raised by the data-access contract as a
data-access error and inspect it duck-typed (``code`` / ``message``
attributes). DataAccessError is a convenience base for data layers that
want to signal an HTTP-aware failure explicitly.

Usage:
    from crud_router.core.errors import DataAccessError

    raise DataAccessError(code=404)                     # -> 404 "Not found"
    raise DataAccessError("Title is required", code=400)
    raise DataAccessError("Connection lost")            # -> 500, no code
"""

from typing import Any

_UNSET: Any = object()


class DataAccessError(Exception):
    """Failure reported by the data-access contract.

    ``code`` is only set as an attribute when it was given: an error without
    any code maps to HTTP 500 and a body without a ``code`` field, while an
    explicit non-numeric code maps to HTTP 400.

    Attributes:
        message: Human-readable message, or None.
        code: Numeric HTTP-like status or an arbitrary error code (optional).
    """

    def __init__(self, message: str | None = None, *, code: Any = _UNSET) -> None:
        super().__init__(*([message] if message is not None else []))
        self.message = message
        if code is not _UNSET:
            self.code = code
