"""ListPage value object.

Concrete ListResult for data layers that do not have their own page type.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True, kw_only=True)
class ListPage:
    """One page of a ``list`` call.

    Attributes:
        entities: Entities (or already projected mappings) on this page.
        next_page_cursor: Opaque cursor for the next page, None on the last page.
    """

    entities: Sequence[Any] = field(default_factory=tuple)
    next_page_cursor: str | None = None
