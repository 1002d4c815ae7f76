"""Core errors package.

Usage:
    from crud_router.core.errors import ConfigError, DataAccessError, RequestBodyError
"""

from crud_router.core.errors.config_error import ConfigError
from crud_router.core.errors.data_access_error import DataAccessError
from crud_router.core.errors.request_body_error import RequestBodyError

__all__ = [
    "ConfigError",
    "DataAccessError",
    "RequestBodyError",
]
