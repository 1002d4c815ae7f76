"""LoggerProtocol definition for structured logging.

Backend-agnostic logging contract used by the route registrar and the
request adapters. Implementations MUST emit structured logs (message plus
key-value context).

Security:
    - NEVER log request bodies or entity data (they may carry secrets)
    - Log identifiers, operation names, and status codes only

Usage:
    from crud_router.core.container import get_logger

    logger = get_logger()
    logger.info("Resource routes registered", entity_kind="BlogPost", routes=6)

    resource_logger = logger.bind(entity_kind="BlogPost")
    resource_logger.warning("Data access call failed", status=404)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message.
            error: Optional exception; type and message are added to context.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger with context permanently bound.

        Args:
            **context: Context included in all subsequent logs.

        Returns:
            LoggerProtocol: New logger instance.
        """
        ...
