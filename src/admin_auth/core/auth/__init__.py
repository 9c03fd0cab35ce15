"""Admin authentication provider layer.

Pluggable authentication for the admin panel:
- registry: Named providers (local login plus external identity providers)
- sync: Fill the registry from the authentication configuration
- initializer: Install every provider strategy into the middleware
- callback: Provider callback URLs
"""

from .callback import CALLBACK_URL_TEMPLATE, get_provider_callback_url
from .errors import (
    AdminAuthError,
    MiddlewareStateError,
    ProviderConfigError,
    SealedRegistryError,
    UnknownStrategyError,
)
from .initializer import HostContext, bootstrap, init
from .local import LocalStrategy, create_local_strategy
from .middleware import AuthenticationMiddleware, StrategyMiddleware
from .provider import Provider, Strategy
from .registry import ProviderRegistry, RegistryState
from .sync import AuthConfig, sync_provider_registry_with_config

__all__ = [
    "AdminAuthError",
    "AuthConfig",
    "AuthenticationMiddleware",
    "CALLBACK_URL_TEMPLATE",
    "HostContext",
    "LocalStrategy",
    "MiddlewareStateError",
    "Provider",
    "ProviderConfigError",
    "ProviderRegistry",
    "RegistryState",
    "SealedRegistryError",
    "Strategy",
    "StrategyMiddleware",
    "UnknownStrategyError",
    "bootstrap",
    "create_local_strategy",
    "get_provider_callback_url",
    "init",
    "sync_provider_registry_with_config",
]
