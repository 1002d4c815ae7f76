"""Core enums package."""

from crud_router.core.enums.environment import Environment
from crud_router.core.enums.operation import Context, Operation

__all__ = [
    "Environment",
    "Operation",
    "Context",
]
