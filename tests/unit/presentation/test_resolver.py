"""Unit tests for the Settings Resolver.

Tests cover:
- Registration-time validation (ConfigError)
- Path derivation and normalization
- Layer precedence (library < model defaults < resource < operation options)
- Operation enablement (delete_all opt-in)
- Operation bindings, middleware and criteria
"""

from dataclasses import FrozenInstanceError

import pytest

from crud_router import ConfigError, LibrarySettings, Operation, ResourceSettings
from crud_router.core.enums import Context
from crud_router.presentation.routers.metadata import BuiltinAdapter, CustomHandler
from crud_router.presentation.routers.resolver import resolve_settings
from tests.utils.fakes import make_model


@pytest.fixture
def library():
    return LibrarySettings(environment="testing")


class TestValidation:
    """Test malformed settings are rejected synchronously."""

    def test_missing_model_raises(self, library):
        """Test a None model raises ConfigError."""
        with pytest.raises(ConfigError, match="Model missing"):
            resolve_settings(None, library, {"path": "/users"})

    @pytest.mark.parametrize("path", [{}, 123, ["/users"], None])
    def test_non_string_path_raises(self, library, path):
        """Test a present but non-string path raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            resolve_settings(make_model(), library, {"path": path})

        assert exc_info.value.field == "path"

    def test_empty_path_raises(self, library):
        """Test a path made only of slashes is rejected."""
        with pytest.raises(ConfigError):
            resolve_settings(make_model(), library, {"path": "/"})

    def test_settings_must_be_mapping(self, library):
        """Test non-mapping settings raise ConfigError."""
        with pytest.raises(ConfigError):
            resolve_settings(make_model(), library, "users")

    def test_unknown_operation_raises(self, library):
        """Test a typo in an operation name fails registration."""
        with pytest.raises(ConfigError):
            resolve_settings(make_model(), library, {"operations": {"lst": {}}})

    def test_non_string_operation_name_raises(self, library):
        """Test non-string operation keys become ConfigError, not TypeError."""
        with pytest.raises(ConfigError) as exc_info:
            resolve_settings(make_model(), library, {"operations": {1: {}}})

        assert exc_info.value.field == "settings"

    def test_unknown_setting_raises(self, library):
        """Test unknown operation keys fail registration."""
        with pytest.raises(ConfigError):
            resolve_settings(
                make_model(), library, {"operations": {"list": {"middelware": print}}}
            )

    def test_no_path_and_no_entity_kind_raises(self, library):
        """Test a path cannot be derived without an entity kind."""
        model = make_model()
        del model.entity_kind

        with pytest.raises(ConfigError):
            resolve_settings(model, library)


class TestPath:
    """Test base path resolution."""

    def test_path_derived_from_entity_kind(self, library):
        """Test BlogPost resolves to /blog-posts when no path is given."""
        config = resolve_settings(make_model("BlogPost"), library)

        assert config.path == "/blog-posts"

    def test_explicit_path_kept(self, library):
        """Test an explicit path is used as is."""
        config = resolve_settings(make_model(), library, {"path": "/users"})

        assert config.path == "/users"

    def test_path_normalized(self, library):
        """Test missing leading and extra trailing slashes are fixed."""
        config = resolve_settings(make_model(), library, {"path": "users/"})

        assert config.path == "/users"

    def test_accepts_settings_schema(self, library):
        """Test a ResourceSettings instance is accepted directly."""
        config = resolve_settings(
            make_model(), library, ResourceSettings(path="/users", ancestors="Dad")
        )

        assert config.path == "/users"
        assert config.ancestors == ("Dad",)


class TestPrecedence:
    """Test layer precedence for resource-level values."""

    def test_library_defaults_apply(self):
        """Test library overrides are the base layer."""
        library = LibrarySettings(
            environment="testing",
            host="https://api.example.com/",
            public_context="/public",
            private_context="/private",
            show_key=True,
            read_all=True,
        )

        config = resolve_settings(make_model(), library)

        assert config.host == "https://api.example.com"
        assert config.public_context == ("/public",)
        assert config.private_context == ("/private",)
        assert config.show_key is True
        assert config.read_all is True

    def test_model_query_defaults_override_library(self, library):
        """Test the model's own showKey default beats the library default."""
        config = resolve_settings(make_model(query_defaults={"showKey": True}), library)

        assert config.show_key is True
        assert config.read_all is False

    def test_resource_settings_override_model_defaults(self, library):
        """Test resource settings beat the model defaults."""
        config = resolve_settings(
            make_model(query_defaults={"showKey": True}),
            library,
            {"path": "/users", "showKey": False},
        )

        assert config.show_key is False

    def test_contexts_merge_key_by_key(self):
        """Test overriding one context keeps the other from the library."""
        library = LibrarySettings(
            environment="testing", public_context="/public", private_context="/private"
        )

        config = resolve_settings(make_model(), library, {"contexts": {"private": "/admin"}})

        assert config.context_prefixes(Context.PUBLIC) == ("/public",)
        assert config.context_prefixes(Context.PRIVATE) == ("/admin",)

    def test_operation_options_override_resource_flags(self, library):
        """Test operation options beat the resource defaults per operation."""
        config = resolve_settings(
            make_model(),
            library,
            {
                "showKey": True,
                "operations": {"create": {"options": {"readAll": True, "showKey": False}}},
            },
        )

        create = config.operations[Operation.CREATE]
        get = config.operations[Operation.GET]
        assert (create.read_all, create.show_key) == (True, False)
        assert (get.read_all, get.show_key) == (False, True)

    def test_snake_case_keys_accepted(self, library):
        """Test snake_case spelling works like camelCase."""
        config = resolve_settings(
            make_model(),
            library,
            {"show_key": True, "operations": {"update_patch": {"enabled": False}}},
        )

        assert config.show_key is True
        assert config.operations[Operation.UPDATE_PATCH].enabled is False


class TestEnablement:
    """Test operation enablement rules."""

    def test_all_but_delete_all_enabled_by_default(self, library):
        """Test six operations are enabled without settings."""
        config = resolve_settings(make_model(), library)

        enabled = {op for op, resolved in config.operations.items() if resolved.enabled}
        assert enabled == set(Operation) - {Operation.DELETE_ALL}

    def test_exec_false_disables(self, library):
        """Test exec=False disables an operation."""
        config = resolve_settings(
            make_model(), library, {"operations": {"get": {"exec": False}}}
        )

        assert config.operations[Operation.GET].enabled is False

    def test_delete_all_enabled_by_exact_true(self, library):
        """Test delete_all is enabled by exec=True."""
        config = resolve_settings(
            make_model(), library, {"operations": {"deleteAll": {"exec": True}}}
        )

        assert config.operations[Operation.DELETE_ALL].enabled is True

    @pytest.mark.parametrize("value", [None, 1, "true", "yes", [True]])
    def test_delete_all_stays_disabled_for_truthy_non_true(self, library, value):
        """Test any value other than True keeps delete_all disabled."""
        config = resolve_settings(
            make_model(), library, {"operations": {"deleteAll": {"exec": value}}}
        )

        assert config.operations[Operation.DELETE_ALL].enabled is False


class TestOperationResolution:
    """Test per-operation bindings, middleware and criteria."""

    def test_builtin_binding_by_default(self, library):
        """Test operations without a handler bind the built-in adapter."""
        config = resolve_settings(make_model(), library)

        assert isinstance(config.operations[Operation.LIST].binding, BuiltinAdapter)

    def test_custom_handler_binding(self, library):
        """Test a handler resolves to a CustomHandler binding."""

        async def handler(request):
            return None

        config = resolve_settings(
            make_model(), library, {"operations": {"get": {"handler": handler}}}
        )

        assert config.operations[Operation.GET].binding == CustomHandler(handler=handler)

    def test_single_middleware_normalized_to_tuple(self, library):
        """Test a single middleware callable becomes a one-element chain."""

        def check(request):
            return None

        config = resolve_settings(
            make_model(), library, {"operations": {"delete": {"middleware": check}}}
        )

        assert config.operations[Operation.DELETE].middleware == (check,)

    def test_middleware_list_keeps_order(self, library):
        """Test middleware lists keep declaration order."""

        def first(request):
            return None

        def second(request):
            return None

        config = resolve_settings(
            make_model(),
            library,
            {"operations": {"create": {"middleware": [first, second]}}},
        )

        assert config.operations[Operation.CREATE].middleware == (first, second)

    def test_extra_options_become_criteria(self, library):
        """Test non-flag options are kept as list criteria."""
        config = resolve_settings(
            make_model(),
            library,
            {
                "operations": {
                    "list": {
                        "options": {
                            "showKey": False,
                            "limit": 13,
                            "order": {"property": "title", "descending": True},
                        }
                    }
                }
            },
        )

        criteria = config.operations[Operation.LIST].criteria
        assert dict(criteria) == {
            "limit": 13,
            "order": {"property": "title", "descending": True},
        }

    def test_config_is_immutable(self, library):
        """Test the resolved config cannot be modified."""
        config = resolve_settings(make_model(), library)

        with pytest.raises(FrozenInstanceError):
            config.path = "/other"
        with pytest.raises(TypeError):
            config.operations[Operation.LIST] = None
