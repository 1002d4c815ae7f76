"""Path Builder for generated CRUD routes.

Pure functions deriving URL paths from a resolved resource configuration,
and the inverse step of reading ancestor keys back out of a request's path
parameters.

Functions:
    path_from_entity_kind: "BlogPost" -> "blog-posts"
    default_path: "BlogPost" -> "/blog-posts"
    build_paths: Concrete paths for one operation (one per prefix)
    ancestors_from_params: Interleaved [name, id, ...] ancestor filter

Path layout:
    <prefix>/<ancestor-0>/{anc0ID}/.../<base path>[/{id}]<suffix>
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import inflection

from crud_router.core.enums import Operation
from crud_router.presentation.routers.metadata import OPERATION_SPECS

if TYPE_CHECKING:
    from crud_router.presentation.routers.resolver import ResolvedConfig


def path_from_entity_kind(entity_kind: str) -> str:
    """Derive a plural kebab-case path segment from an entity name.

    Lower-cases the first letter, converts to kebab-case, then pluralizes
    the last word.

    Args:
        entity_kind: Entity name (e.g., "BlogPost", "GrandFather").

    Returns:
        Path segment without slashes (e.g., "blog-posts", "grand-fathers").

    Example:
        >>> path_from_entity_kind("BlogPost")
        'blog-posts'
    """
    name = entity_kind[:1].lower() + entity_kind[1:]
    return inflection.pluralize(inflection.dasherize(inflection.underscore(name)))


def default_path(entity_kind: str) -> str:
    """Base path used when no ``path`` setting is given ("/blog-posts")."""
    return "/" + path_from_entity_kind(entity_kind)


def ancestor_param(index: int) -> str:
    """Name of the path parameter holding the ``index``-th ancestor id."""
    return f"anc{index}ID"


def build_paths(config: "ResolvedConfig", operation: Operation) -> tuple[str, ...]:
    """Build the concrete paths of one operation.

    The prefix is the operation's own prefix override if configured,
    otherwise the operation's context prefix (public for list/get, private
    for everything else). One path is produced per prefix, in prefix order.

    Args:
        config: Resolved resource configuration.
        operation: Operation to build paths for.

    Returns:
        Paths with FastAPI placeholders, e.g.
        ("/v1/grand-fathers/{anc0ID}/dads/{anc1ID}/users/{id}",).
    """
    spec = OPERATION_SPECS[operation]
    resolved = config.operations[operation]
    prefixes = resolved.prefixes or config.context_prefixes(spec.context)

    nested = "".join(
        f"/{path_from_entity_kind(ancestor)}/{{{ancestor_param(index)}}}"
        for index, ancestor in enumerate(config.ancestors)
    )
    item = "/{id}" if spec.targets_item else ""

    return tuple(
        f"{prefix}{nested}{config.path}{item}{resolved.suffix}" for prefix in prefixes
    )


def ancestors_from_params(
    params: Mapping[str, Any], ancestors: Sequence[str]
) -> list[Any] | None:
    """Build the ancestor filter from request path parameters.

    Args:
        params: Request path parameters (``anc0ID``, ``anc1ID``, ...).
        ancestors: Ancestor chain, outermost first.

    Returns:
        Interleaved ``[name0, value0, name1, value1, ...]`` in chain order,
        skipping ancestors whose parameter is absent or empty; None when the
        chain is empty or no parameter is present.

    Example:
        >>> ancestors_from_params({"anc0ID": "a1", "anc1ID": "a2"}, ["GrandFather", "Dad"])
        ['GrandFather', 'a1', 'Dad', 'a2']
    """
    pairs: list[Any] = []
    for index, ancestor in enumerate(ancestors):
        value = params.get(ancestor_param(index))
        if value is None or value == "":
            continue
        pairs.extend((ancestor, value))

    return pairs or None
