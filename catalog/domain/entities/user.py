"""User domain entity."""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from catalog.domain.value_objects.reset_ticket import PasswordResetTicket


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class User:
    """User domain entity.

    The password reset ticket is embedded in the user aggregate: a user holds at
    most one ticket, and issuing a new one replaces the old.
    """
    id: Optional[int]
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    is_active: bool = True
    reset_ticket: Optional[PasswordResetTicket] = None
    last_login_at: Optional[datetime] = None
    login_attempts: int = 0
    locked_until: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.email = normalize_email(self.email)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_locked(self, now: datetime) -> bool:
        return bool(self.locked_until and self.locked_until > now)

    def register_failed_login(self, now: datetime, max_attempts: int, lock_for: timedelta):
        """Count a failed login, locking the account once the limit is reached."""
        if self.locked_until and self.locked_until <= now:
            # Previous lock has lapsed; start counting again
            self.login_attempts = 0
            self.locked_until = None
        self.login_attempts += 1
        if self.login_attempts >= max_attempts:
            self.locked_until = now + lock_for

    def register_successful_login(self, now: datetime):
        self.login_attempts = 0
        self.locked_until = None
        self.last_login_at = now
