"""User repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from catalog.domain.entities.user import User
from catalog.domain.value_objects.reset_ticket import PasswordResetTicket


class UserRepository(ABC):
    """Repository interface for User entity, including its reset ticket."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email."""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create new user."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist email, role and active flag.

        Never touches the password hash or the reset ticket; those change only
        through `consume_reset_ticket` and `save_reset_ticket`.
        """
        pass

    @abstractmethod
    async def record_login(
        self,
        user_id: int,
        login_attempts: int,
        locked_until: Optional[datetime],
        last_login_at: Optional[datetime],
    ) -> User:
        """Write only the login-tracking columns of one user."""
        pass

    @abstractmethod
    async def save_reset_ticket(self, user_id: int, ticket: PasswordResetTicket) -> None:
        """Store a ticket on the user, replacing any previous one."""
        pass

    @abstractmethod
    async def find_by_reset_ticket(self, email: str, token_hash: str, now: datetime) -> Optional[User]:
        """Active user matching email and token hash whose ticket expires after `now`."""
        pass

    @abstractmethod
    async def consume_reset_ticket(
        self,
        email: str,
        token_hash: str,
        now: datetime,
        new_password_hash: str,
    ) -> bool:
        """Atomically set the password and clear the ticket.

        Applies only if the same conditions as `find_by_reset_ticket` still hold
        at write time. Returns True if exactly one user was updated.
        """
        pass
