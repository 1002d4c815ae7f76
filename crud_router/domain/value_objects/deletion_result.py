"""DeletionResult value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class DeletionResult:
    """Outcome of a single-entity delete.

    Attributes:
        success: True if an entity was deleted, False if none matched.
    """

    success: bool
