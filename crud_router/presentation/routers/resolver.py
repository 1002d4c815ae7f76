"""Settings Resolver for generated CRUD routes.

Folds the settings layers of one resource into an immutable ResolvedConfig.

Precedence (lowest to highest):
    1. Library overrides (LibrarySettings, shared by a CrudRouter)
    2. Model query defaults (``Model.query_defaults``: showKey / readAll)
    3. Resource settings passed to ``CrudRouter.create``
    4. Operation ``options`` (output flags only, per operation)

Each layer is a partial record (None = "not set"); the fold keeps the last
value that is set. Context prefixes fold independently (public/private),
prefix and middleware lists replace, they never concatenate.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from crud_router.core.config import LibrarySettings
from crud_router.core.enums import Context, Operation
from crud_router.core.errors import ConfigError
from crud_router.presentation.routers.metadata import (
    OPERATION_TABLE,
    BuiltinAdapter,
    CustomHandler,
    OperationBinding,
    OperationSpec,
)
from crud_router.presentation.routers.paths import default_path
from crud_router.schemas import OperationSettings, QueryOptions, ResourceSettings


@dataclass(frozen=True, kw_only=True)
class ResolvedOperation:
    """Final configuration of one operation.

    Attributes:
        operation: Operation identifier
        enabled: Whether routes are registered for the operation
        binding: Built-in adapter or custom handler
        middleware: Dependencies run after body decoding, in order
        prefixes: Prefix override (empty = use the context prefix)
        suffix: Literal suffix appended last
        read_all: Output flag (operation option > resource default)
        show_key: Output flag (operation option > resource default)
        criteria: Extra list criteria from the operation options
    """

    operation: Operation
    enabled: bool
    binding: OperationBinding
    middleware: tuple[Callable[..., Any], ...]
    prefixes: tuple[str, ...]
    suffix: str
    read_all: bool
    show_key: bool
    criteria: Mapping[str, Any]


@dataclass(frozen=True, kw_only=True)
class ResolvedConfig:
    """Fully merged, immutable configuration of one resource.

    Attributes:
        entity_kind: Entity name (used in messages and route names)
        path: Base path, always starting with "/"
        host: Public base URL for pagination links ("" = request URL)
        public_context: Prefixes of list/get
        private_context: Prefixes of mutating operations
        ancestors: Ancestor chain, outermost first
        show_key: Resource default output flag
        read_all: Resource default output flag
        operations: Resolved record per operation (all seven present)
    """

    entity_kind: str
    path: str
    host: str
    public_context: tuple[str, ...]
    private_context: tuple[str, ...]
    ancestors: tuple[str, ...]
    show_key: bool
    read_all: bool
    operations: Mapping[Operation, ResolvedOperation]

    def context_prefixes(self, context: Context) -> tuple[str, ...]:
        """Return the prefixes of ``context``."""
        if context is Context.PUBLIC:
            return self.public_context
        return self.private_context


@dataclass(frozen=True, kw_only=True)
class _Layer:
    """Partial resource-level settings; None means "not set in this layer"."""

    host: str | None = None
    public_context: str | list[str] | None = None
    private_context: str | list[str] | None = None
    show_key: bool | None = None
    read_all: bool | None = None


def resolve_settings(
    model: Any,
    overrides: LibrarySettings,
    settings: ResourceSettings | Mapping[str, Any] | None = None,
) -> ResolvedConfig:
    """Resolve the configuration of one resource.

    Args:
        model: Resource model (see ResourceModel protocol).
        overrides: Library-wide override settings.
        settings: Resource settings (schema instance or plain mapping).

    Returns:
        ResolvedConfig with every field set.

    Raises:
        ConfigError: If the model is missing, ``path`` is not a string, the
            settings do not validate, or no path can be derived.
    """
    if model is None:
        raise ConfigError("Model missing", field="model")

    resource = _validate_settings(settings)
    entity_kind = getattr(model, "entity_kind", None)
    if entity_kind is not None and not isinstance(entity_kind, str):
        raise ConfigError("Entity kind must be a string", field="entity_kind")

    if resource.path is not None:
        path = _normalize_path(resource.path)
    elif entity_kind:
        path = default_path(entity_kind)
    else:
        raise ConfigError(
            "No path given and the model has no entity_kind to derive one from",
            field="path",
        )

    merged = _fold(
        _Layer(
            host=overrides.host,
            public_context=overrides.public_context,
            private_context=overrides.private_context,
            show_key=overrides.show_key,
            read_all=overrides.read_all,
        ),
        _model_layer(model),
        _Layer(
            host=resource.host,
            public_context=resource.contexts.public,
            private_context=resource.contexts.private,
            show_key=resource.show_key,
            read_all=resource.read_all,
        ),
    )
    show_key = bool(merged.show_key)
    read_all = bool(merged.read_all)

    operations = {
        spec.operation: _resolve_operation(
            spec,
            resource.operation(spec.operation),
            show_key=show_key,
            read_all=read_all,
        )
        for spec in OPERATION_TABLE
    }

    return ResolvedConfig(
        entity_kind=entity_kind or path.strip("/"),
        path=path,
        host=(merged.host or "").rstrip("/"),
        public_context=_prefixes(merged.public_context),
        private_context=_prefixes(merged.private_context),
        ancestors=_ancestors(resource.ancestors),
        show_key=show_key,
        read_all=read_all,
        operations=MappingProxyType(operations),
    )


def _validate_settings(
    settings: ResourceSettings | Mapping[str, Any] | None,
) -> ResourceSettings:
    """Turn caller settings into a ResourceSettings, raising ConfigError."""
    if settings is None:
        return ResourceSettings()
    if isinstance(settings, ResourceSettings):
        return settings
    if not isinstance(settings, Mapping):
        raise ConfigError("Settings must be a mapping", field="settings")
    if "path" in settings and not isinstance(settings["path"], str):
        raise ConfigError("Path must be a string", field="path")

    try:
        return ResourceSettings.model_validate(dict(settings))
    except ValidationError as exc:
        raise ConfigError(f"Invalid resource settings: {exc}", field="settings") from exc


def _model_layer(model: Any) -> _Layer:
    """Read the model's own query defaults (showKey / readAll)."""
    defaults = getattr(model, "query_defaults", None)
    if not defaults:
        return _Layer()
    try:
        options = QueryOptions.model_validate(dict(defaults))
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid model query defaults: {exc}", field="query_defaults"
        ) from exc
    return _Layer(show_key=options.show_key, read_all=options.read_all)


def _fold(*layers: _Layer) -> _Layer:
    """Merge layers in order; a set value in a later layer wins."""
    values: dict[str, Any] = {}
    for layer in layers:
        for field in fields(layer):
            value = getattr(layer, field.name)
            if value is not None:
                values[field.name] = value
    return _Layer(**values)


def _resolve_operation(
    spec: OperationSpec,
    settings: OperationSettings,
    *,
    show_key: bool,
    read_all: bool,
) -> ResolvedOperation:
    """Resolve one operation against the resource defaults."""
    if spec.enabled_by_default:
        enabled = settings.enabled is not False
    else:
        enabled = settings.enabled is True

    binding: OperationBinding
    if settings.handler is not None:
        binding = CustomHandler(handler=settings.handler)
    else:
        binding = BuiltinAdapter()

    options = settings.options
    return ResolvedOperation(
        operation=spec.operation,
        enabled=enabled,
        binding=binding,
        middleware=_middleware(settings.middleware),
        prefixes=_prefix_override(settings.path.prefix),
        suffix=_suffix(settings.path.suffix),
        read_all=read_all if options.read_all is None else options.read_all,
        show_key=show_key if options.show_key is None else options.show_key,
        criteria=MappingProxyType(options.criteria),
    )


def _normalize_path(path: str) -> str:
    """Normalize "users" and "/users/" to "/users"."""
    stripped = path.strip().strip("/")
    if not stripped:
        raise ConfigError("Path must not be empty", field="path")
    return "/" + stripped


def _prefixes(value: str | list[str] | None) -> tuple[str, ...]:
    """Normalize a prefix setting to a non-empty tuple without trailing slashes."""
    if value is None:
        return ("",)
    items = [value] if isinstance(value, str) else list(value)
    if not items:
        return ("",)
    return tuple(item.rstrip("/") for item in items)


def _prefix_override(value: str | list[str] | None) -> tuple[str, ...]:
    """Operation prefix override; empty (unset or []) falls back to the context."""
    if value is None:
        return ()
    items = [value] if isinstance(value, str) else list(value)
    return tuple(item.rstrip("/") for item in items)


def _suffix(value: str | list[str] | None) -> str:
    """Join suffix segments in order ("", "/export", ["/a", "/b"] -> "/a/b")."""
    if value is None:
        return ""
    segments = [value] if isinstance(value, str) else list(value)
    return "".join(segments)


def _middleware(
    value: Callable[..., Any] | list[Callable[..., Any]] | None,
) -> tuple[Callable[..., Any], ...]:
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(value)
    return (value,)


def _ancestors(value: str | list[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    chain = (value,) if isinstance(value, str) else tuple(value)
    if any(not name for name in chain):
        raise ConfigError("Ancestor names must not be empty", field="ancestors")
    return chain
