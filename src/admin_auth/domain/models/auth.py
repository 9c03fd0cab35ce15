"""Authentication Result Model

Purpose: Carry the outcome of a credential check

The credential check owned by the host's authentication service answers with
an (error, user, info) triple. AuthResult keeps that triple as a value so the
strategies can return it, and only the middleware boundary needs to translate
it back into the positional callback convention.

Key Components:
- AuthResult: Either an error or a (user, info) success payload
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class AuthResult:
    """Outcome of an authentication attempt

    Attributes:
        error: Error value from the credential check (None when the check ran)
        user: Authenticated user, or a falsy value when credentials were refused
        info: Extra information from the check (message, scope, ...)
    """
    error: Any = None
    user: Any = None
    info: Any = None

    @classmethod
    def failure(cls, error: Any) -> "AuthResult":
        """Result for a credential check that raised"""
        return cls(error=error)

    @classmethod
    def from_triple(cls, triple) -> "AuthResult":
        """Build a result from an (error, user, info) sequence"""
        error, user, info = triple
        return cls(error=error, user=user, info=info)

    @property
    def ok(self) -> bool:
        """True when the check succeeded and produced a user"""
        return self.error is None and bool(self.user)

    def to_callback_args(self) -> tuple:
        """Positional arguments for a done(error, user, info) callback"""
        return (self.error, self.user, self.info)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "ok": self.ok,
            "error": None if self.error is None else str(self.error),
            "user": self.user,
            "info": self.info,
        }


def missing_credentials(info: Optional[dict] = None) -> AuthResult:
    """Failure result for a request that did not carry both credential fields"""
    return AuthResult(error=None, user=False, info=info or {"message": "Missing credentials"})
