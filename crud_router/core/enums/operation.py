"""Logical CRUD operations and path-prefix contexts.

Operation values are snake_case. Caller settings may use the camelCase
spelling (``updatePatch``, ``deleteAll``); ``Operation.parse`` accepts both.
"""

from enum import Enum

import inflection


class Operation(str, Enum):
    """The seven operations generated for every resource.

    Declaration order is the canonical registration order.
    """

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE_PATCH = "update_patch"
    UPDATE_REPLACE = "update_replace"
    DELETE = "delete"
    DELETE_ALL = "delete_all"

    @classmethod
    def parse(cls, name: str) -> "Operation":
        """Look up an operation from its snake_case or camelCase name.

        Raises:
            ValueError: If the name does not denote an operation.
        """
        return cls(inflection.underscore(name))


class Context(str, Enum):
    """Path-prefix group an operation belongs to by default.

    Attributes:
        PUBLIC: Read operations (list, get)
        PRIVATE: Mutating operations (create, update, delete, delete_all)
    """

    PUBLIC = "public"
    PRIVATE = "private"
