"""
Pytest configuration and fixtures for admin authentication tests.

Provides fixtures for:
- Provider registry
- Provider records with mocked strategy factories
- Host context with a mocked credential check
- Recording middleware sink
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from admin_auth.config.settings import Settings
from admin_auth.core.auth import HostContext, Provider, ProviderRegistry


@pytest.fixture
def registry() -> ProviderRegistry:
    """Create an empty, open provider registry."""
    registry = ProviderRegistry()
    yield registry
    registry.clear()


def make_provider(uid: str, strategy=None, **extra) -> Provider:
    """Provider whose factory returns ``strategy`` (a named namespace by default)."""
    if strategy is None:
        strategy = SimpleNamespace(name=uid)
    return Provider(uid=uid, create_strategy=MagicMock(return_value=strategy), **extra)


@pytest.fixture
def provider_factory():
    """Build providers with mocked strategy factories."""
    return make_provider


@pytest.fixture
def foo_provider() -> Provider:
    return make_provider("foo")


@pytest.fixture
def bar_provider() -> Provider:
    return make_provider("bar")


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env file."""
    return Settings(_env_file=None, auth_providers=[], credential_checker=None)


@pytest.fixture
def check_credentials() -> AsyncMock:
    """Host credential check accepting every login."""
    return AsyncMock(return_value=(None, {"id": "foo"}, "bar"))


@pytest.fixture
def host_context(settings, check_credentials) -> HostContext:
    return HostContext(
        settings=settings,
        auth_config={"providers": []},
        check_credentials=check_credentials,
    )


@pytest.fixture
def middleware() -> MagicMock:
    """Middleware sink recording install/activate calls, in order, on mock_calls."""
    return MagicMock()
