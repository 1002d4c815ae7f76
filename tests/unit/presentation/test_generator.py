"""Unit tests for the Route Registrar.

Tests cover:
- Router validation
- Route counts and canonical registration order
- Verb mapping and dependency chains
- Custom handler bypass
- Prefix fan-out
- Independent re-registration
"""

from unittest.mock import Mock

import pytest
from fastapi import APIRouter, FastAPI

from crud_router import ConfigError, CrudRouter, HTTPMethod, Operation
from crud_router.presentation.routers.dependencies import CrudRoute, decode_body
from tests.utils.fakes import make_model


@pytest.fixture
def router():
    """Router double recording add_api_route calls."""
    return Mock(spec=APIRouter)


@pytest.fixture
def api(router, overrides, mock_logger):
    return CrudRouter(router, overrides=overrides, logger=mock_logger)


def _registered(router):
    """(method, path) pairs in registration order."""
    return [
        (call.kwargs["methods"][0], call.args[0])
        for call in router.add_api_route.call_args_list
    ]


class TestRouterValidation:
    """Test CrudRouter construction."""

    def test_missing_router_raises(self, overrides):
        """Test a None router raises ConfigError."""
        with pytest.raises(ConfigError, match="Router"):
            CrudRouter(None, overrides=overrides)

    def test_router_without_add_api_route_raises(self, overrides):
        """Test objects that cannot register routes are rejected."""
        with pytest.raises(ConfigError):
            CrudRouter(object(), overrides=overrides)

    def test_overrides_captured(self, router, overrides):
        """Test the overrides object is kept as given."""
        assert CrudRouter(router, overrides=overrides).overrides is overrides


class TestRouteRegistration:
    """Test the registered route set."""

    def test_default_settings_register_six_routes(self, api, router):
        """Test {path: "/users"} registers all operations but delete_all."""
        api.create(make_model(), {"path": "/users"})

        assert _registered(router) == [
            ("GET", "/users"),
            ("GET", "/users/{id}"),
            ("POST", "/users"),
            ("PATCH", "/users/{id}"),
            ("PUT", "/users/{id}"),
            ("DELETE", "/users/{id}"),
        ]

    def test_delete_all_enabled_registers_seven_routes(self, api, router):
        """Test exec=True on deleteAll adds the collection DELETE route last."""
        resource = api.create(
            make_model(), {"path": "/users", "operations": {"deleteAll": {"exec": True}}}
        )

        assert len(resource.routes) == 7
        assert _registered(router)[-1] == ("DELETE", "/users")
        assert resource.routes[-1].operation is Operation.DELETE_ALL

    def test_disabled_operation_skipped(self, api, router):
        """Test exec=False removes an operation's routes."""
        resource = api.create(
            make_model(), {"path": "/users", "operations": {"updateReplace": {"exec": False}}}
        )

        assert Operation.UPDATE_REPLACE not in {entry.operation for entry in resource.routes}
        assert ("PUT", "/users/{id}") not in _registered(router)

    def test_verbs_follow_operation_table(self, api):
        """Test every operation is bound to its fixed verb."""
        resource = api.create(
            make_model(), {"path": "/users", "operations": {"deleteAll": {"exec": True}}}
        )

        verbs = {entry.operation: entry.method for entry in resource.routes}
        assert verbs == {
            Operation.LIST: HTTPMethod.GET,
            Operation.GET: HTTPMethod.GET,
            Operation.CREATE: HTTPMethod.POST,
            Operation.UPDATE_PATCH: HTTPMethod.PATCH,
            Operation.UPDATE_REPLACE: HTTPMethod.PUT,
            Operation.DELETE: HTTPMethod.DELETE,
            Operation.DELETE_ALL: HTTPMethod.DELETE,
        }

    def test_multiple_prefixes_register_in_order(self, api, router):
        """Test prefixes ["/p1", "/p2"] register one route each, in order."""
        api.create(
            make_model(),
            {"path": "/users", "operations": {"list": {"path": {"prefix": ["/p1", "/p2"]}}}},
        )

        assert _registered(router)[:2] == [("GET", "/p1/users"), ("GET", "/p2/users")]

    def test_config_error_registers_nothing(self, api, router):
        """Test malformed settings abort before any route is added."""
        with pytest.raises(ConfigError):
            api.create(make_model(), {"path": {}})

        router.add_api_route.assert_not_called()

    def test_re_registration_creates_independent_routes(self, api, router):
        """Test registering the same resource twice yields two route sets."""
        model = make_model()

        first = api.create(model, {"path": "/users"})
        second = api.create(model, {"path": "/users"})

        assert router.add_api_route.call_count == 12
        assert first.routes is not second.routes
        assert first.adapters is not second.adapters

    def test_registration_is_logged(self, api, mock_logger):
        """Test one info line is emitted per resource."""
        api.create(make_model(), {"path": "/users"})

        mock_logger.info.assert_called_once_with(
            "Resource routes registered",
            entity_kind="BlogPost",
            path="/users",
            routes=6,
        )


class TestDependencies:
    """Test middleware chains."""

    def test_body_operations_start_with_decode_body(self, api):
        """Test create/update routes decode the body first."""
        resource = api.create(make_model(), {"path": "/users"})

        chains = {entry.operation: entry.dependencies for entry in resource.routes}
        assert chains[Operation.CREATE] == (decode_body,)
        assert chains[Operation.UPDATE_PATCH] == (decode_body,)
        assert chains[Operation.UPDATE_REPLACE] == (decode_body,)
        assert chains[Operation.LIST] == ()
        assert chains[Operation.DELETE] == ()

    def test_middleware_appended_after_body_decoding(self, api):
        """Test operation middleware follows decode_body, in declaration order."""

        def first(request):
            return None

        def second(request):
            return None

        resource = api.create(
            make_model(),
            {"path": "/users", "operations": {"create": {"middleware": [first, second]}}},
        )

        create = next(e for e in resource.routes if e.operation is Operation.CREATE)
        assert create.dependencies == (decode_body, first, second)

    def test_routes_use_crud_route_class(self, api, router):
        """Test every route is built with CrudRoute."""
        api.create(make_model(), {"path": "/users"})

        assert {
            call.kwargs["route_class_override"] for call in router.add_api_route.call_args_list
        } == {CrudRoute}

    def test_fastapi_app_registers_through_its_router(self, overrides, mock_logger):
        """Test a FastAPI app target gets CrudRoute routes."""
        app = FastAPI()

        CrudRouter(app, overrides=overrides, logger=mock_logger).create(
            make_model(), {"path": "/users"}
        )

        generated = [route for route in app.routes if isinstance(route, CrudRoute)]
        assert len(generated) == 6

    def test_dependencies_passed_to_router(self, api, router):
        """Test the chain is registered as FastAPI dependencies."""

        def guard(request):
            return None

        api.create(make_model(), {"path": "/users", "operations": {"delete": {"middleware": guard}}})

        delete_call = router.add_api_route.call_args_list[5]
        assert [dep.dependency for dep in delete_call.kwargs["dependencies"]] == [guard]


class TestEndpoints:
    """Test endpoint selection."""

    def test_builtin_adapter_used_by_default(self, api):
        """Test routes point at the resource's built-in adapters."""
        resource = api.create(make_model(), {"path": "/users"})

        get = next(e for e in resource.routes if e.operation is Operation.GET)
        assert get.endpoint == resource.adapters.get

    def test_custom_handler_registered_verbatim(self, api, router):
        """Test a custom handler replaces the adapter for its operation only."""

        async def handler(request):
            return {"custom": True}

        resource = api.create(
            make_model(), {"path": "/users", "operations": {"list": {"handler": handler}}}
        )

        list_entry = resource.routes[0]
        assert list_entry.endpoint is handler
        assert router.add_api_route.call_args_list[0].args[1] is handler
        assert resource.routes[1].endpoint == resource.adapters.get
