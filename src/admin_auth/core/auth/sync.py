"""Configuration to registry synchronization.

Reads the admin authentication configuration and registers every configured
provider, in configuration order. The whole ``providers`` sequence is
validated before the first registration so that a malformed record fails the
bootstrap here instead of surfacing later as a missing strategy factory.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ProviderConfigError
from .provider import Provider, to_provider
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class AuthConfig(BaseModel):
    """Admin authentication configuration value.

    Attributes:
        providers: Ordered provider records
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    providers: list[Provider] = Field(default_factory=list)


def read_providers(config: Any) -> list[Provider]:
    """Extract and validate the provider records of a configuration value.

    Args:
        config: AuthConfig, mapping with a 'providers' key, object with a
            'providers' attribute, or None

    Returns:
        Validated providers in configuration order

    Raises:
        ProviderConfigError: If 'providers' is not a sequence or a record is invalid
    """
    if config is None:
        return []
    if isinstance(config, AuthConfig):
        return list(config.providers)

    if isinstance(config, Mapping):
        records = config.get("providers")
    else:
        records = getattr(config, "providers", None)

    if records is None:
        return []
    if isinstance(records, (str, bytes, Mapping)) or not hasattr(records, "__iter__"):
        raise ProviderConfigError(
            f"providers: expected a sequence of provider records, got {type(records).__name__}"
        )

    return [to_provider(record, index=i) for i, record in enumerate(records)]


def sync_provider_registry_with_config(registry: ProviderRegistry, config: Any) -> None:
    """Register every configured provider into the registry.

    Repeated calls with the same configuration overwrite providers with equal
    values and leave the registry unchanged.

    Args:
        registry: Registry to fill
        config: Admin authentication configuration value

    Raises:
        ProviderConfigError: If the configuration is malformed (nothing is registered)
        SealedRegistryError: If the registry has already been sealed
    """
    providers = read_providers(config)

    for provider in providers:
        registry.register(provider)

    logger.info(f"Provider registry synced with config: {[p.uid for p in providers]}")
