"""Domain protocols (structural contracts).

Usage:
    from crud_router.domain.protocols import ResourceModel, LoggerProtocol
"""

from crud_router.domain.protocols.data_access_protocol import (
    DeleteResult,
    Entity,
    ListResult,
    ResourceModel,
)
from crud_router.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "ResourceModel",
    "Entity",
    "ListResult",
    "DeleteResult",
    "LoggerProtocol",
]
