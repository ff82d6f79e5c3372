"""Password reset ticket value object."""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PasswordResetTicket:
    """Hash of a single-use reset token and its absolute expiry.

    The raw token is never stored; only `token_hash` is.
    """
    token_hash: str
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now

    def matches(self, token_hash: str, now: datetime) -> bool:
        return self.token_hash == token_hash and self.is_active(now)
