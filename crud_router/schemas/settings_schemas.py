"""Caller-facing settings schemas.

These models validate the settings object passed to ``CrudRouter.create``.
Keys may be written in camelCase (as in ``{"showKey": True}``) or
snake_case; unknown keys are rejected so typos fail at registration time.

Usage:
    settings = ResourceSettings.model_validate({
        "path": "/users",
        "ancestors": ["Company"],
        "contexts": {"private": "/admin"},
        "operations": {
            "list": {"options": {"limit": 20, "showKey": True}},
            "deleteAll": {"exec": True, "middleware": require_admin},
        },
    })
"""

from collections.abc import Callable
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel

from crud_router.core.enums import Operation

PathSegments = str | list[str]


class PathSettings(BaseModel):
    """Per-operation path customization.

    Attributes:
        prefix: Replaces the context prefix; a list fans out to one route per prefix.
        suffix: Appended after the base path (and ``/{id}``); list segments are joined.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    prefix: PathSegments | None = Field(None, description="Prefix override")
    suffix: PathSegments | None = Field(None, description="Path suffix")


class QueryOptions(BaseModel):
    """Per-operation output shaping and list criteria.

    ``read_all`` and ``show_key`` take precedence over the resource defaults.
    Any other key (``limit``, ``order``, ``filters``, ...) is forwarded
    verbatim to ``list`` as a criterion.

    Attributes:
        read_all: Include fields normally hidden from output.
        show_key: Include the entity's storage identifier.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    read_all: bool | None = Field(None, description="Include hidden fields")
    show_key: bool | None = Field(None, description="Include storage identifier")

    @property
    def criteria(self) -> dict[str, Any]:
        """Extra keys, forwarded as list criteria."""
        return dict(self.model_extra or {})


class OperationSettings(BaseModel):
    """Customization of one generated operation.

    Attributes:
        enabled: ``False`` disables the operation. ``delete_all`` is only
            enabled by exactly ``True``. Also accepted as ``exec``.
        middleware: FastAPI dependency (or list of them) run after body
            decoding and before the endpoint, in declaration order.
        handler: Custom endpoint replacing the built-in adapter.
        path: Prefix/suffix customization.
        options: Output shaping flags and list criteria.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    enabled: Any = Field(
        default=None,
        validation_alias=AliasChoices("enabled", "exec"),
        description="Operation switch",
    )
    middleware: Callable[..., Any] | list[Callable[..., Any]] | None = Field(
        None, description="Dependencies run before the endpoint"
    )
    handler: Callable[..., Any] | None = Field(None, description="Custom endpoint")
    path: PathSettings = Field(default_factory=PathSettings)
    options: QueryOptions = Field(default_factory=QueryOptions)


class ContextSettings(BaseModel):
    """Path prefixes per context.

    Attributes:
        public: Prefix(es) for list and get.
        private: Prefix(es) for create, update, delete and delete_all.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    public: PathSegments | None = Field(None, description="Read prefix")
    private: PathSegments | None = Field(None, description="Write prefix")


class ResourceSettings(BaseModel):
    """Settings for one resource, passed to ``CrudRouter.create``.

    Attributes:
        path: Base path (e.g., "/users"); derived from the entity kind if omitted.
        ancestors: Ancestor entity name(s), outermost first.
        host: Public base URL for pagination links.
        contexts: Public/private prefix overrides.
        show_key: Resource default for the ``show_key`` output flag.
        read_all: Resource default for the ``read_all`` output flag.
        operations: Per-operation settings keyed by operation name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    path: StrictStr | None = Field(None, description="Base path")
    ancestors: str | list[str] | None = Field(None, description="Ancestor chain")
    host: str | None = Field(None, description="Public base URL")
    contexts: ContextSettings = Field(default_factory=ContextSettings)
    show_key: bool | None = Field(None, description="Show storage identifier")
    read_all: bool | None = Field(None, description="Show hidden fields")
    operations: dict[Operation, OperationSettings] = Field(default_factory=dict)

    @field_validator("operations", mode="before")
    @classmethod
    def parse_operation_names(cls, v: Any) -> Any:
        """Accept camelCase operation names (``updatePatch``, ``deleteAll``).

        Args:
            v: Raw operations mapping.

        Returns:
            Mapping keyed by Operation.

        Raises:
            ValueError: If a key is not a string or does not name an operation.
        """
        if not isinstance(v, dict):
            return v
        parsed = {}
        for key, value in v.items():
            if isinstance(key, Operation):
                parsed[key] = value
            elif isinstance(key, str):
                parsed[Operation.parse(key)] = value
            else:
                raise ValueError(f"Operation name must be a string, got {key!r}")
        return parsed

    def operation(self, operation: Operation) -> OperationSettings:
        """Return the settings of ``operation`` (defaults if not configured)."""
        return self.operations.get(operation) or OperationSettings()
