"""SQLAlchemy implementation of UserRepository."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.domain.entities.user import User as UserEntity, UserRole, normalize_email
from catalog.domain.errors import ConflictError, NotFoundError, StoreError
from catalog.domain.repositories.user_repository import UserRepository
from catalog.domain.value_objects.reset_ticket import PasswordResetTicket
from catalog.infrastructure.persistence import models

logger = logging.getLogger(__name__)


def _to_entity(row: models.User) -> UserEntity:
    ticket = None
    if row.reset_password_token and row.reset_password_expires:
        ticket = PasswordResetTicket(
            token_hash=row.reset_password_token,
            expires_at=row.reset_password_expires,
        )
    return UserEntity(
        id=row.id,
        email=row.email,
        password_hash=row.password,
        role=UserRole(row.role),
        is_active=bool(row.is_active),
        reset_ticket=ticket,
        last_login_at=row.last_login_at,
        login_attempts=row.login_attempts or 0,
        locked_until=row.locked_until,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyUserRepository(UserRepository):
    """User repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, error: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error(f"User store failure while {action}: {error}")
        return StoreError(f"Failed while {action}")

    def _active_ticket_filter(self, email: str, token_hash: str, now: datetime):
        return self.session.query(models.User).filter(
            models.User.email == normalize_email(email),
            models.User.reset_password_token == token_hash,
            models.User.reset_password_expires > now,
            models.User.is_active.is_(True),
        )

    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        try:
            row = self.session.get(models.User, user_id)
        except SQLAlchemyError as e:
            raise self._fail("loading user", e)
        return _to_entity(row) if row else None

    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        try:
            row = (
                self.session.query(models.User)
                .filter(models.User.email == normalize_email(email))
                .first()
            )
        except SQLAlchemyError as e:
            raise self._fail("loading user by email", e)
        return _to_entity(row) if row else None

    async def create(self, user: UserEntity) -> UserEntity:
        now = datetime.utcnow()
        row = models.User(
            email=user.email,
            password=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            login_attempts=0,
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except IntegrityError:
            self.session.rollback()
            raise ConflictError(f"User with email {user.email} already exists")
        except SQLAlchemyError as e:
            raise self._fail("creating user", e)
        return _to_entity(row)

    async def update(self, user: UserEntity) -> UserEntity:
        try:
            row = self.session.get(models.User, user.id)
            if not row:
                raise NotFoundError(f"User {user.id} not found")
            row.email = user.email
            row.role = user.role.value
            row.is_active = user.is_active
            row.updated_at = datetime.utcnow()
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("updating user", e)
        return _to_entity(row)

    async def record_login(
        self,
        user_id: int,
        login_attempts: int,
        locked_until: Optional[datetime],
        last_login_at: Optional[datetime],
    ) -> UserEntity:
        try:
            # Column-scoped UPDATE so a password reset committed meanwhile survives
            updated = (
                self.session.query(models.User)
                .filter(models.User.id == user_id)
                .update(
                    {
                        models.User.login_attempts: login_attempts,
                        models.User.locked_until: locked_until,
                        models.User.last_login_at: last_login_at,
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("recording login", e)
        if updated != 1:
            raise NotFoundError(f"User {user_id} not found")
        return await self.get_by_id(user_id)

    async def save_reset_ticket(self, user_id: int, ticket: PasswordResetTicket) -> None:
        try:
            updated = (
                self.session.query(models.User)
                .filter(models.User.id == user_id)
                .update(
                    {
                        models.User.reset_password_token: ticket.token_hash,
                        models.User.reset_password_expires: ticket.expires_at,
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("saving reset ticket", e)
        if updated != 1:
            raise NotFoundError(f"User {user_id} not found")

    async def find_by_reset_ticket(self, email: str, token_hash: str, now: datetime) -> Optional[UserEntity]:
        try:
            row = self._active_ticket_filter(email, token_hash, now).first()
        except SQLAlchemyError as e:
            raise self._fail("looking up reset ticket", e)
        return _to_entity(row) if row else None

    async def consume_reset_ticket(
        self,
        email: str,
        token_hash: str,
        now: datetime,
        new_password_hash: str,
    ) -> bool:
        try:
            # Single conditional UPDATE; a concurrent consumer sees rowcount 0
            updated = self._active_ticket_filter(email, token_hash, now).update(
                {
                    models.User.password: new_password_hash,
                    models.User.reset_password_token: None,
                    models.User.reset_password_expires: None,
                    models.User.updated_at: now,
                },
                synchronize_session=False,
            )
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("consuming reset ticket", e)
        return updated == 1
