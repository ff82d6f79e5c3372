"""Data Transfer Objects for authentication and password reset."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from catalog.domain.entities.user import User

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent"
)
RESET_TOKEN_VALID_MESSAGE = "Reset token is valid"
RESET_TOKEN_INVALID_MESSAGE = "Invalid or expired password reset token"
RESET_COMPLETED_MESSAGE = "Password has been reset successfully"


@dataclass(frozen=True)
class ResetAcknowledgement:
    """Identical for every reset request, whether or not the account exists."""
    message: str = RESET_REQUESTED_MESSAGE


@dataclass(frozen=True)
class TokenValidation:
    valid: bool
    expires_at: Optional[datetime] = None

    @property
    def message(self) -> str:
        return RESET_TOKEN_VALID_MESSAGE if self.valid else RESET_TOKEN_INVALID_MESSAGE


@dataclass
class AuthResultDTO:
    """Authenticated user together with a freshly issued access token."""
    user: User
    token: str
