"""Provider configuration loading.

Resolves the ``auth_providers`` and ``credential_checker`` import paths of the
settings into Python objects. Paths use the ``package.module:attribute`` form.
"""

import importlib
import logging
from collections.abc import Mapping
from typing import Any, Callable

from admin_auth.config.settings import Settings
from admin_auth.core.auth.errors import ProviderConfigError
from admin_auth.core.auth.sync import AuthConfig, read_providers

logger = logging.getLogger(__name__)


def import_object(path: str) -> Any:
    """Import the object designated by a 'package.module:attribute' path.

    Raises:
        ProviderConfigError: If the path is malformed or cannot be resolved
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ProviderConfigError(f"Invalid import path '{path}': expected 'package.module:attribute'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ProviderConfigError(f"Cannot import module '{module_name}' from '{path}'") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ProviderConfigError(f"'{module_name}' has no attribute '{attr_path}'") from e

    return target


def _expand(path: str, target: Any) -> list[Any]:
    if callable(target) and not isinstance(target, Mapping) and not hasattr(target, "uid"):
        target = target()

    if isinstance(target, (list, tuple)):
        return list(target)
    if isinstance(target, Mapping) or hasattr(target, "uid"):
        return [target]

    raise ProviderConfigError(
        f"'{path}' must resolve to a provider record or a list of them, got {type(target).__name__}"
    )


def load_auth_config(settings: Settings) -> AuthConfig:
    """Build the authentication configuration from the settings.

    Args:
        settings: Application settings

    Returns:
        AuthConfig with the providers in the order the paths are listed

    Raises:
        ProviderConfigError: If a path cannot be resolved or yields an invalid record
    """
    records: list[Any] = []
    for path in settings.auth_providers:
        records.extend(_expand(path, import_object(path)))

    providers = read_providers({"providers": records})
    logger.info(f"Loaded {len(providers)} authentication provider(s) from settings")
    return AuthConfig(providers=providers)


def load_credential_checker(settings: Settings) -> Callable[..., Any]:
    """Resolve the host credential check named in the settings.

    Raises:
        ProviderConfigError: If no checker is configured or the target is not callable
    """
    if not settings.credential_checker:
        raise ProviderConfigError("No credential checker configured (CREDENTIAL_CHECKER)")

    checker = import_object(settings.credential_checker)
    if not callable(checker):
        raise ProviderConfigError(f"Credential checker '{settings.credential_checker}' is not callable")
    return checker
