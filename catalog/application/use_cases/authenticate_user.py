"""Use cases: registration, login and current-user lookup."""
import logging
import re
from datetime import datetime, timedelta
from typing import Callable

from catalog.application.dto.auth_dto import AuthResultDTO
from catalog.config import settings
from catalog.core.security import create_access_token, get_password_hash, verify_password
from catalog.domain.entities.user import User, UserRole, normalize_email
from catalog.domain.errors import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    FieldError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from catalog.domain.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def password_problems(password: str) -> list:
    """Return the reasons `password` is too weak, empty if it is acceptable."""
    problems = []
    if not settings.PASSWORD_MIN_LENGTH <= len(password) <= settings.PASSWORD_MAX_LENGTH:
        problems.append(
            f"Password must be {settings.PASSWORD_MIN_LENGTH}-{settings.PASSWORD_MAX_LENGTH} characters"
        )
    if not re.search(r"[a-z]", password):
        problems.append("Password must contain a lowercase letter")
    if not re.search(r"[A-Z]", password):
        problems.append("Password must contain an uppercase letter")
    if not re.search(r"\d", password):
        problems.append("Password must contain a digit")
    return problems


def check_password_strength(password: str, field: str = "password"):
    problems = password_problems(password)
    if problems:
        raise ValidationError([FieldError(field=field, reason=reason) for reason in problems])


class RegisterUserUseCase:
    """Register a regular user. Accounts created here are never admins."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, email: str, password: str) -> AuthResultDTO:
        check_password_strength(password)
        email = normalize_email(email)
        if await self._user_repo.get_by_email(email):
            raise ConflictError("User with this email already exists")
        user = await self._user_repo.create(
            User(id=None, email=email, password_hash=get_password_hash(password), role=UserRole.USER)
        )
        logger.info(f"Registered user {user.id}")
        return AuthResultDTO(user=user, token=create_access_token(user.id, user.role.value))


class LoginUserUseCase:
    """Password login with temporary lockout after repeated failures."""

    def __init__(
        self,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._user_repo = user_repository
        self._clock = clock

    async def _record_login(self, user: User) -> User:
        return await self._user_repo.record_login(
            user.id, user.login_attempts, user.locked_until, user.last_login_at
        )

    async def execute(self, email: str, password: str) -> AuthResultDTO:
        """Execute use case to log a user in.

        Raises:
            AuthenticationError: Unknown email or wrong password
            AccountLockedError: Too many recent failures
            PermissionDeniedError: Account is deactivated
        """
        now = self._clock()
        user = await self._user_repo.get_by_email(email)
        if not user:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        if user.is_locked(now):
            raise AccountLockedError("Account is temporarily locked due to too many failed login attempts")
        if not user.is_active:
            raise PermissionDeniedError("Account is deactivated")

        if not verify_password(password, user.password_hash):
            user.register_failed_login(
                now,
                max_attempts=settings.MAX_LOGIN_ATTEMPTS,
                lock_for=timedelta(minutes=settings.LOGIN_LOCK_MINUTES),
            )
            await self._record_login(user)
            if user.is_locked(now):
                logger.warning(f"User {user.id} locked after {user.login_attempts} failed logins")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        user.register_successful_login(now)
        user = await self._record_login(user)
        return AuthResultDTO(user=user, token=create_access_token(user.id, user.role.value))


class GetCurrentUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def execute(self, user_id: int) -> User:
        user = await self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user
