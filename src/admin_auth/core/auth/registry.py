"""Authentication provider registry.

Insertion-ordered store of provider descriptors keyed by uid, with a one-way
seal. The registry is filled from configuration during bootstrap, read once by
the initializer to install strategies, then sealed for the rest of the process
lifetime so that the registry can never diverge from the installed middleware.
"""

import logging
from enum import Enum
from typing import Any, Iterable, Iterator, Optional

from .errors import SealedRegistryError
from .provider import Provider, to_provider

logger = logging.getLogger(__name__)


class RegistryState(Enum):
    """Registry lifecycle state"""
    OPEN = "open"
    SEALED = "sealed"


class ProviderRegistry:
    """Keyed store of authentication providers.

    Registering an existing uid replaces the provider in place (last write
    wins) and keeps the key at its original position. Once ``seal()`` has been
    called, ``register`` and ``register_many`` raise SealedRegistryError while
    reads keep working.

    Example:
        registry = ProviderRegistry()
        registry.register_many(config.providers)
        ...
        registry.seal()
        registry.get("google")
    """

    def __init__(self, providers: Optional[Iterable[Any]] = None):
        """Initialize registry with optional initial providers.

        Args:
            providers: Provider records registered in order before returning
        """
        self._providers: dict[str, Provider] = {}
        self._state = RegistryState.OPEN

        if providers is not None:
            self.register_many(providers)

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_sealed(self) -> bool:
        return self._state is RegistryState.SEALED

    @property
    def size(self) -> int:
        """Number of distinct uids currently stored"""
        return len(self._providers)

    def register(self, provider: Any) -> None:
        """Register a provider, replacing any provider with the same uid.

        Args:
            provider: Provider or provider-shaped record

        Raises:
            SealedRegistryError: If the registry has been sealed
            ProviderConfigError: If the record has no usable uid or factory
        """
        if self.is_sealed:
            raise SealedRegistryError()

        provider = to_provider(provider)
        self._set(provider.uid, provider)

    def register_many(self, providers: Iterable[Any]) -> None:
        """Register each provider in order.

        Raises:
            SealedRegistryError: If the registry has been sealed
        """
        for provider in providers:
            self.register(provider)

    def _set(self, uid: str, provider: Provider) -> None:
        if uid in self._providers:
            logger.debug(f"Replacing authentication provider: {uid}")
        self._providers[uid] = provider

    def get(self, uid: str) -> Optional[Provider]:
        """Get a provider by uid, or None if it is not registered"""
        return self._providers.get(uid)

    def get_all(self) -> list[Provider]:
        """All providers in registration order"""
        return list(self._providers.values())

    def seal(self) -> None:
        """Reject every further registration.

        The transition is one-way; sealing an already sealed registry is a no-op.
        """
        if self.is_sealed:
            return
        self._state = RegistryState.SEALED
        logger.info(f"Provider registry sealed with {self.size} provider(s)")

    def clear(self) -> None:
        """Remove every provider, whatever the lifecycle state (teardown/tests only)."""
        self._providers.clear()

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._providers))

    def __contains__(self, uid: object) -> bool:
        return uid in self._providers

    def __repr__(self) -> str:
        return f"ProviderRegistry(state={self._state.value}, providers={list(self._providers)})"
