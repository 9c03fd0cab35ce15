"""Unit tests for authentication strategy initialization"""

from types import SimpleNamespace
from unittest.mock import MagicMock, call

import pytest

from admin_auth.core.auth import (
    LocalStrategy,
    ProviderConfigError,
    SealedRegistryError,
    StrategyMiddleware,
    bootstrap,
    init,
)

pytestmark = pytest.mark.unit


class TestInit:
    """Test init()"""

    def test_installs_all_providers_and_activates(self, registry, middleware, host_context):
        """Test N providers give N + 1 installs and one activation"""
        create_strategy = MagicMock(return_value={"foo": "bar"})
        host_context.auth_config = {
            "providers": [
                {"uid": "foo", "create_strategy": create_strategy},
                {"uid": "bar", "create_strategy": create_strategy},
            ]
        }

        init(registry, middleware, host_context)

        assert registry.size == 2
        assert middleware.install.call_count == 3
        middleware.activate.assert_called_once_with()
        assert create_strategy.call_count == 2
        create_strategy.assert_called_with(host_context)

    def test_install_order(self, registry, middleware, host_context, provider_factory):
        """Test local strategy first, providers in registration order, activation last"""
        foo, bar = provider_factory("foo"), provider_factory("bar")
        host_context.auth_config = {"providers": [foo, bar]}

        init(registry, middleware, host_context)

        names = [c.args[0].name for c in middleware.install.call_args_list]
        assert names == ["local", "foo", "bar"]
        assert isinstance(middleware.install.call_args_list[0].args[0], LocalStrategy)
        assert middleware.mock_calls[-1] == call.activate()

    def test_no_providers(self, registry, middleware, host_context):
        """Test the local strategy is installed even without providers"""
        init(registry, middleware, host_context)

        assert middleware.install.call_count == 1
        middleware.activate.assert_called_once_with()

    def test_registry_sealed(self, registry, middleware, host_context, foo_provider):
        """Test init seals the registry once the middleware is active"""
        init(registry, middleware, host_context)

        assert registry.is_sealed
        with pytest.raises(SealedRegistryError):
            registry.register(foo_provider)

    def test_invalid_config_does_not_activate(self, registry, middleware, host_context):
        """Bad input: malformed config fails before any install"""
        host_context.auth_config = {"providers": [{"uid": "foo"}]}

        with pytest.raises(ProviderConfigError):
            init(registry, middleware, host_context)

        middleware.install.assert_not_called()
        middleware.activate.assert_not_called()
        assert not registry.is_sealed

    def test_failing_factory_propagates(self, registry, middleware, host_context):
        """Test a raising strategy factory aborts before activation"""
        factory = MagicMock(side_effect=RuntimeError("missing client id"))
        host_context.auth_config = {"providers": [{"uid": "okta", "create_strategy": factory}]}

        with pytest.raises(RuntimeError, match="missing client id"):
            init(registry, middleware, host_context)

        middleware.activate.assert_not_called()

    def test_with_strategy_middleware(self, registry, host_context, provider_factory):
        """Test init against the real middleware"""
        host_context.auth_config = {"providers": [provider_factory("google")]}

        middleware = init(registry, StrategyMiddleware(), host_context)

        assert middleware.is_active
        assert [s.name for s in middleware.strategies] == ["local", "google"]

    def test_installs_under_provider_uid(self, registry, middleware, host_context, provider_factory):
        """Test every strategy is installed under its provider uid"""
        host_context.auth_config = {"providers": [provider_factory("foo")]}

        init(registry, middleware, host_context)

        names = [c.kwargs["name"] for c in middleware.install.call_args_list]
        assert names == ["local", "foo"]

    def test_providers_sharing_strategy_class(self, registry, host_context):
        """Test two providers returning the same unnamed strategy class both stay installed"""
        class OAuth2Strategy:
            def __init__(self, client_id):
                self.client_id = client_id

        host_context.auth_config = {
            "providers": [
                {"uid": "google", "create_strategy": lambda ctx: OAuth2Strategy("g")},
                {"uid": "github", "create_strategy": lambda ctx: OAuth2Strategy("gh")},
            ]
        }

        middleware = init(registry, StrategyMiddleware(), host_context)

        assert len(middleware.strategies) == registry.size + 1
        assert middleware.get("google").client_id == "g"
        assert middleware.get("github").client_id == "gh"
        assert isinstance(middleware.get("local"), LocalStrategy)

    def test_provider_strategy_named_local(self, registry, host_context, provider_factory):
        """Test a provider strategy named 'local' does not displace the built-in one"""
        ldap_strategy = SimpleNamespace(name="local")
        host_context.auth_config = {"providers": [provider_factory("ldap", ldap_strategy)]}

        middleware = init(registry, StrategyMiddleware(), host_context)

        assert len(middleware.strategies) == registry.size + 1
        assert isinstance(middleware.get("local"), LocalStrategy)
        assert middleware.get("ldap") is ldap_strategy

    def test_local_uid_is_reserved(self, registry, middleware, host_context, provider_factory):
        """Bad input: a provider using the 'local' uid is rejected before any install"""
        host_context.auth_config = {"providers": [provider_factory("local")]}

        with pytest.raises(ProviderConfigError, match="reserved"):
            init(registry, middleware, host_context)

        middleware.install.assert_not_called()
        middleware.activate.assert_not_called()


class TestBootstrap:
    """Test bootstrap()"""

    def test_bootstrap_with_config(self, settings, check_credentials, provider_factory):
        registry, middleware = bootstrap(
            settings, check_credentials, {"providers": [provider_factory("github")]}
        )

        assert registry.is_sealed
        assert list(registry) == ["github"]
        assert middleware.is_active
        assert middleware.get("local").check_credentials is check_credentials

    def test_bootstrap_loads_settings(self, settings, check_credentials):
        """Test the configuration is loaded from settings when not given"""
        registry, middleware = bootstrap(settings, check_credentials)

        assert registry.size == 0
        assert [s.name for s in middleware.strategies] == ["local"]
