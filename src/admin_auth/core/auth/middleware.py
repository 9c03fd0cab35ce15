"""Authentication middleware sink.

The initializer only relies on two calls: ``install(strategy, name=...)`` once
per strategy, then ``activate()`` once. StrategyMiddleware is the in-process
implementation used by the admin application: it indexes the installed
strategies by install name (the provider uid, or ``local`` for the built-in
strategy) and dispatches authentication requests to them once activated.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Protocol, runtime_checkable

from admin_auth.domain.models.auth import AuthResult

from .errors import MiddlewareStateError, UnknownStrategyError
from .provider import Strategy

logger = logging.getLogger(__name__)


@runtime_checkable
class AuthenticationMiddleware(Protocol):
    """Contract between the initializer and the authentication middleware"""

    def install(self, strategy: Strategy, name: Optional[str] = None) -> None:
        ...

    def activate(self) -> None:
        ...


def strategy_name(strategy: Strategy) -> str:
    """Name a strategy is installed under (its ``name``, else its class name)"""
    name = getattr(strategy, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(strategy).__name__


class StrategyMiddleware:
    """In-process authentication middleware.

    Strategies are kept in install order. Every install name maps to exactly
    one strategy: installing under a name already taken is refused.
    """

    def __init__(self):
        self._strategies: dict[str, Strategy] = {}
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def strategies(self) -> list[Strategy]:
        """Installed strategies in install order"""
        return list(self._strategies.values())

    def install(self, strategy: Strategy, name: Optional[str] = None) -> None:
        """Install a strategy.

        Args:
            strategy: Strategy instance
            name: Install name (defaults to the strategy's ``name``, else its class name)

        Raises:
            MiddlewareStateError: If the middleware has already been activated
                or the name is already taken
        """
        if self._active:
            raise MiddlewareStateError("Cannot install a strategy after activation")

        name = name or strategy_name(strategy)
        if name in self._strategies:
            raise MiddlewareStateError(f"A strategy is already installed as '{name}'")
        self._strategies[name] = strategy
        logger.debug(f"Strategy installed: {name}")

    def activate(self) -> None:
        """Start serving authentication requests.

        Raises:
            MiddlewareStateError: If the middleware is already active
        """
        if self._active:
            raise MiddlewareStateError("Authentication middleware is already active")

        self._active = True
        logger.info(f"Authentication middleware active with strategies: {list(self._strategies)}")

    def get(self, name: str) -> Optional[Strategy]:
        return self._strategies.get(name)

    async def authenticate(self, name: str, credentials: Mapping) -> AuthResult:
        """Authenticate a request payload with the named strategy.

        Args:
            name: Strategy name (e.g., 'local')
            credentials: Request payload handed to the strategy

        Returns:
            AuthResult produced by the strategy

        Raises:
            MiddlewareStateError: If the middleware is not active yet
            UnknownStrategyError: If no strategy with that name can authenticate
        """
        if not self._active:
            raise MiddlewareStateError("Authentication middleware is not active")

        strategy = self._strategies.get(name)
        if strategy is None or not hasattr(strategy, "authenticate"):
            raise UnknownStrategyError(f"Unknown authentication strategy: {name}")

        return await strategy.authenticate(credentials)
