"""Domain value objects.

Usage:
    from crud_router.domain.value_objects import ListPage, DeletionResult
"""

from crud_router.domain.value_objects.deletion_result import DeletionResult
from crud_router.domain.value_objects.list_page import ListPage

__all__ = [
    "ListPage",
    "DeletionResult",
]
