"""Admin authentication errors.

Every error raised by the provider registry, the configuration sync and the
strategy middleware derives from AdminAuthError. Credential-check failures are
never wrapped in one of these: they travel verbatim to the strategy callback.
"""


class AdminAuthError(Exception):
    """Base class for admin authentication errors."""
    pass


class SealedRegistryError(AdminAuthError):
    """A provider was registered after the bootstrap sealed the registry."""

    MESSAGE = "You can't register new provider after the boostrap"

    def __init__(self, message: str = MESSAGE):
        super().__init__(message)


class ProviderConfigError(AdminAuthError, ValueError):
    """Provider configuration is malformed (missing uid, missing factory, bad import path)."""
    pass


class MiddlewareStateError(AdminAuthError):
    """The strategy middleware was used out of order."""
    pass


class UnknownStrategyError(AdminAuthError, LookupError):
    """No strategy with the requested name was installed."""
    pass
