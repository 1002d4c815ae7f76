"""Composition root for library-scoped singletons.

Only the logger lives here: adapter selection is centralized so the rest of
the package depends on LoggerProtocol, never on structlog directly.

Usage:
    from crud_router.core.container import get_logger

    logger = get_logger()
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from crud_router.core.config import get_settings
from crud_router.core.enums import Environment

if TYPE_CHECKING:
    from crud_router.domain.protocols.logger_protocol import LoggerProtocol


# ============================================================================
# Logging (Library-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the library-scoped logger singleton.

    Adapter selection:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from crud_router.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
