"""Authentication strategy initialization.

Wires the registered providers into the authentication middleware during the
application bootstrap. The order is fixed: sync the registry with the
configuration, install the local strategy, install every provider strategy in
registration order, activate the middleware, seal the registry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import ProviderConfigError
from .local import LOCAL_STRATEGY_NAME, create_local_strategy
from .middleware import AuthenticationMiddleware, StrategyMiddleware
from .registry import ProviderRegistry
from .sync import sync_provider_registry_with_config

logger = logging.getLogger(__name__)


@dataclass
class HostContext:
    """Host application handed to every strategy factory

    Attributes:
        settings: Application settings
        auth_config: Admin authentication configuration ({providers: [...]})
        check_credentials: Host credential check (identifier, secret) -> (error, user, info)
    """
    settings: Any = None
    auth_config: Any = None
    check_credentials: Optional[Callable[..., Any]] = None


def init(
    registry: ProviderRegistry,
    middleware: AuthenticationMiddleware,
    context: HostContext,
) -> AuthenticationMiddleware:
    """Install every authentication strategy and activate the middleware.

    The middleware receives ``registry.size + 1`` installs (the local
    strategy first under ``local``, then one per provider under its uid)
    followed by a single activation. The ``local`` uid is reserved for the
    built-in strategy. The registry is sealed afterwards, so providers registered later can
    never diverge from the installed strategies.

    Args:
        registry: Provider registry, filled here from ``context.auth_config``
        middleware: Sink exposing install(strategy, name=...) and activate()
        context: Host context passed to every strategy factory

    Returns:
        The activated middleware

    Raises:
        ProviderConfigError: If the configuration is malformed or a provider
            uses the reserved 'local' uid
        SealedRegistryError: If the registry was sealed before init
    """
    sync_provider_registry_with_config(registry, context.auth_config)

    if LOCAL_STRATEGY_NAME in registry:
        raise ProviderConfigError(
            f"Provider uid '{LOCAL_STRATEGY_NAME}' is reserved for the built-in local strategy"
        )

    middleware.install(create_local_strategy(context), name=LOCAL_STRATEGY_NAME)
    logger.info(f"Installed authentication strategy: {LOCAL_STRATEGY_NAME}")

    for provider in registry.get_all():
        strategy = provider.build_strategy(context)
        middleware.install(strategy, name=provider.uid)
        logger.info(f"Installed authentication strategy for provider: {provider.uid}")

    middleware.activate()
    registry.seal()

    return middleware


def bootstrap(
    settings: Any,
    check_credentials: Callable[..., Any],
    auth_config: Any = None,
) -> tuple[ProviderRegistry, StrategyMiddleware]:
    """Build the authentication subsystem of the admin application.

    Args:
        settings: Application settings
        check_credentials: Host credential check used by the local strategy
        auth_config: Authentication configuration; loaded from
            ``settings.auth_providers`` when omitted

    Returns:
        Tuple of (sealed registry, active middleware)
    """
    if auth_config is None:
        from admin_auth.config.providers import load_auth_config
        auth_config = load_auth_config(settings)

    context = HostContext(
        settings=settings,
        auth_config=auth_config,
        check_credentials=check_credentials,
    )
    registry = ProviderRegistry()
    middleware = StrategyMiddleware()

    init(registry, middleware, context)
    return registry, middleware
