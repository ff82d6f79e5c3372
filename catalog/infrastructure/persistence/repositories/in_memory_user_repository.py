"""In-memory implementation of UserRepository for testing."""
from dataclasses import replace
from datetime import datetime
from typing import Optional

from catalog.domain.entities.user import User, normalize_email
from catalog.domain.errors import ConflictError, NotFoundError
from catalog.domain.repositories.user_repository import UserRepository
from catalog.domain.value_objects.reset_ticket import PasswordResetTicket
from catalog.infrastructure.persistence.repositories.in_memory_store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation for testing.

    Ticket checks and writes contain no awaits, so each runs to completion
    without another coroutine interleaving.
    """

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()

    def _find_active_ticket(self, email: str, token_hash: str, now: datetime) -> Optional[User]:
        email = normalize_email(email)
        for user in self.store.users.values():
            if (
                user.email == email
                and user.is_active
                and user.reset_ticket is not None
                and user.reset_ticket.matches(token_hash, now)
            ):
                return user
        return None

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return self.store.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        email = normalize_email(email)
        for user in self.store.users.values():
            if user.email == email:
                return user
        return None

    async def create(self, user: User) -> User:
        if any(existing.email == user.email for existing in self.store.users.values()):
            raise ConflictError(f"User with email {user.email} already exists")
        now = datetime.utcnow()
        stored = replace(user, id=self.store.next_id("users"), created_at=now, updated_at=now)
        self.store.users[stored.id] = stored
        return stored

    async def update(self, user: User) -> User:
        existing = self.store.users.get(user.id)
        if existing is None:
            raise NotFoundError(f"User {user.id} not found")
        stored = replace(
            user,
            password_hash=existing.password_hash,
            reset_ticket=existing.reset_ticket,
            login_attempts=existing.login_attempts,
            locked_until=existing.locked_until,
            last_login_at=existing.last_login_at,
            updated_at=datetime.utcnow(),
        )
        self.store.users[stored.id] = stored
        return stored

    async def record_login(
        self,
        user_id: int,
        login_attempts: int,
        locked_until: Optional[datetime],
        last_login_at: Optional[datetime],
    ) -> User:
        existing = self.store.users.get(user_id)
        if existing is None:
            raise NotFoundError(f"User {user_id} not found")
        stored = replace(
            existing,
            login_attempts=login_attempts,
            locked_until=locked_until,
            last_login_at=last_login_at,
        )
        self.store.users[user_id] = stored
        return stored

    async def save_reset_ticket(self, user_id: int, ticket: PasswordResetTicket) -> None:
        existing = self.store.users.get(user_id)
        if existing is None:
            raise NotFoundError(f"User {user_id} not found")
        self.store.users[user_id] = replace(existing, reset_ticket=ticket)

    async def find_by_reset_ticket(self, email: str, token_hash: str, now: datetime) -> Optional[User]:
        return self._find_active_ticket(email, token_hash, now)

    async def consume_reset_ticket(
        self,
        email: str,
        token_hash: str,
        now: datetime,
        new_password_hash: str,
    ) -> bool:
        user = self._find_active_ticket(email, token_hash, now)
        if user is None:
            return False
        self.store.users[user.id] = replace(
            user,
            password_hash=new_password_hash,
            reset_ticket=None,
            updated_at=now,
        )
        return True
