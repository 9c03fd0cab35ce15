"""Local authentication strategy (username/password).

Built-in strategy installed next to every configured provider. The strategy
does not look at passwords itself: it delegates to the credential check owned
by the host's authentication service and relays its (error, user, info)
answer, either as an AuthResult or through a done(...) callback.
"""

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from admin_auth.domain.models.auth import AuthResult, missing_credentials

logger = logging.getLogger(__name__)

LOCAL_STRATEGY_NAME = "local"

CredentialCheck = Callable[[str, str], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class LocalStrategyOptions:
    """Names of the request fields carrying the credentials"""
    username_field: str = "email"
    password_field: str = "password"


class LocalStrategy:
    """Username/password strategy backed by the host credential check.

    Example:
        strategy = create_local_strategy(context)
        result = await strategy.verify("admin@example.com", "secret")
        if result.ok:
            ...
    """

    name = LOCAL_STRATEGY_NAME

    def __init__(
        self,
        check_credentials: CredentialCheck,
        options: Optional[LocalStrategyOptions] = None
    ):
        """Initialize local strategy.

        Args:
            check_credentials: Host credential check returning (error, user, info)
            options: Credential field names (defaults: email/password)
        """
        self.check_credentials = check_credentials
        self.options = options or LocalStrategyOptions()

    async def verify(self, identifier: str, secret: str) -> AuthResult:
        """Run the credential check.

        Args:
            identifier: User identifier (email)
            secret: User secret (password)

        Returns:
            AuthResult holding the check's triple, or the raised error
        """
        try:
            return await self._check(identifier, secret)
        except Exception as e:
            logger.warning(f"Local credential check failed for {identifier}: {e}")
            return AuthResult.failure(e)

    async def handler(self, identifier: str, secret: str, done: Callable[..., Any]) -> None:
        """Callback-style entry point for callback-driven middleware.

        Calls ``done(error)`` when the credential check raises, and
        ``done(error, user, info)`` otherwise, even when error is None.
        """
        try:
            result = await self._check(identifier, secret)
        except Exception as e:
            done(e)
            return

        done(*result.to_callback_args())

    async def _check(self, identifier: str, secret: str) -> AuthResult:
        outcome = self.check_credentials(identifier, secret)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return AuthResult.from_triple(outcome)

    async def authenticate(self, credentials: Mapping) -> AuthResult:
        """Authenticate a request payload.

        Credentials are read from the configured username/password fields.
        A payload missing either field is refused without running the check.
        """
        identifier = credentials.get(self.options.username_field)
        secret = credentials.get(self.options.password_field)

        if not identifier or not secret:
            return missing_credentials()

        return await self.verify(identifier, secret)


def create_local_strategy(context: Any) -> LocalStrategy:
    """Create the built-in local strategy for a host context.

    Args:
        context: Host context exposing ``check_credentials`` and, optionally,
            ``settings`` with ``local_username_field``/``local_password_field``

    Returns:
        Configured LocalStrategy
    """
    settings = getattr(context, "settings", None)
    defaults = LocalStrategyOptions()
    options = LocalStrategyOptions(
        username_field=getattr(settings, "local_username_field", defaults.username_field),
        password_field=getattr(settings, "local_password_field", defaults.password_field),
    )
    return LocalStrategy(context.check_credentials, options)
