"""Configuration Settings for Admin Auth

Manages environment variables and application configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    service_name: str = "admin-auth"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Local strategy: request fields carrying the credentials
    local_username_field: str = "email"
    local_password_field: str = "password"

    # Authentication providers: "package.module:attribute" import paths.
    # Each target is a provider record, a list of records, or a callable
    # returning either.
    auth_providers: list[str] = []

    # Host credential check: "package.module:attribute" import path of an
    # (async) callable (identifier, secret) -> (error, user, info)
    credential_checker: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
