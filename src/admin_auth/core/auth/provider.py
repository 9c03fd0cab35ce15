"""Authentication provider descriptors.

A provider is a named authentication method (the built-in local login, or an
external identity provider) together with a factory that builds the runtime
strategy installed into the authentication middleware. Providers come from
configuration; the registry stores them but never constructs them.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ProviderConfigError


@runtime_checkable
class Strategy(Protocol):
    """Runtime authentication handler produced by a provider factory.

    Strategies are opaque to the registry. The middleware only uses ``name``
    to index them, and ``authenticate`` when a request is dispatched to them.
    """

    name: str


StrategyFactory = Callable[[Any], Strategy]


class Provider(BaseModel):
    """Provider descriptor.

    Attributes:
        uid: Unique provider identifier (e.g., 'local', 'google', 'okta')
        create_strategy: Factory taking the host context and returning a strategy

    Extra attributes (display name, icon, ...) are kept as-is so that
    configuration records round-trip through the registry unchanged.
    """

    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)

    uid: str = Field(..., min_length=1)
    create_strategy: StrategyFactory

    def build_strategy(self, context: Any) -> Strategy:
        """Invoke the strategy factory with the host context"""
        return self.create_strategy(context)


def to_provider(value: Any, index: Optional[int] = None) -> Provider:
    """Coerce a provider-shaped record into a Provider.

    Accepts Provider instances, mappings and plain objects exposing ``uid``
    and ``create_strategy`` attributes.

    Args:
        value: Provider-shaped record
        index: Position of the record in its configuration sequence, for errors

    Returns:
        Validated Provider

    Raises:
        ProviderConfigError: If the record has no usable uid or factory
    """
    if isinstance(value, Provider):
        return value

    where = f"providers[{index}]" if index is not None else "provider"

    if isinstance(value, Mapping):
        data = dict(value)
    elif hasattr(value, "uid"):
        attrs = getattr(value, "__dict__", {})
        data = {k: v for k, v in attrs.items() if not k.startswith("_")}
        data.setdefault("uid", value.uid)
        if hasattr(value, "create_strategy"):
            data.setdefault("create_strategy", value.create_strategy)
    else:
        raise ProviderConfigError(
            f"{where}: expected a provider record, got {type(value).__name__}"
        )

    try:
        return Provider.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "record" for err in e.errors()
        )
        raise ProviderConfigError(f"{where} ({data.get('uid')!r}): invalid {fields}") from e
