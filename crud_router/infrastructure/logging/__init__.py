"""Logging adapters.

Usage:
    from crud_router.infrastructure.logging import ConsoleAdapter
"""

from crud_router.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
