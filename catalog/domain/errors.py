"""Domain exceptions shared by use cases, repositories and the API layer."""
from dataclasses import dataclass
from typing import Any, List, Optional


class CatalogError(Exception):
    """Base class for all catalog domain errors."""


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field."""
    field: str
    reason: str
    value: Optional[Any] = None

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.reason, "value": self.value}


class ValidationError(CatalogError):
    """Malformed or out-of-range input. Carries every violation found, not just the first."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Validation failed for: {fields}")

    @classmethod
    def single(cls, field: str, reason: str, value: Any = None) -> "ValidationError":
        return cls([FieldError(field=field, reason=reason, value=value)])


class StoreError(CatalogError):
    """Data-layer failure. The message is for logs only, never for API callers."""


class NotFoundError(CatalogError):
    """Requested record does not exist."""


class ConflictError(CatalogError):
    """Write would violate a uniqueness or integrity rule."""


class PermissionDeniedError(CatalogError):
    """Caller is authenticated but not allowed to perform the action."""


class AuthenticationError(CatalogError):
    """Credentials are missing, wrong or expired."""


class AccountLockedError(AuthenticationError):
    """Too many failed logins; account is temporarily locked."""


class ResetError(CatalogError):
    """Password reset could not be completed."""


class InvalidOrExpiredTokenError(ResetError):
    """Reset token is unknown, expired, superseded or already used.

    Deliberately carries no detail about which of those applies.
    """

    def __init__(self):
        super().__init__("Invalid or expired password reset token")
