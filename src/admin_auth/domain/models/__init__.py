"""Domain models for Admin Auth"""

from admin_auth.domain.models.auth import AuthResult, missing_credentials

__all__ = [
    "AuthResult",
    "missing_credentials",
]
