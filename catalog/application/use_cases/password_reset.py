"""Use cases: password reset token lifecycle.

A user holds at most one reset ticket: the sha256 digest of a random token and
an absolute expiry. The raw token only ever leaves the process inside the reset
link. Callers cannot tell whether an account exists from any of these
operations.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from urllib.parse import quote

from catalog.application.dto.auth_dto import ResetAcknowledgement, TokenValidation
from catalog.application.ports.notifications import PasswordResetNotifier
from catalog.application.use_cases.authenticate_user import check_password_strength
from catalog.config import settings
from catalog.core.security import generate_reset_token, get_password_hash, hash_reset_token
from catalog.domain.entities.user import normalize_email
from catalog.domain.errors import InvalidOrExpiredTokenError
from catalog.domain.repositories.user_repository import UserRepository
from catalog.domain.value_objects.reset_ticket import PasswordResetTicket

logger = logging.getLogger(__name__)


def build_reset_url(raw_token: str, email: str, client_url: Optional[str] = None) -> str:
    base = (client_url or settings.CLIENT_URL).rstrip("/")
    return f"{base}/reset-password?token={raw_token}&email={quote(email, safe='')}"


class RequestPasswordResetUseCase:
    """Issue a reset ticket and hand the link to the notifier."""

    def __init__(
        self,
        user_repository: UserRepository,
        notifier: PasswordResetNotifier,
        clock: Callable[[], datetime] = datetime.utcnow,
        ttl: Optional[timedelta] = None,
    ):
        self._user_repo = user_repository
        self._notifier = notifier
        self._clock = clock
        self._ttl = ttl or timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES)

    async def execute(self, email: str) -> ResetAcknowledgement:
        """Execute use case to request a password reset.

        Args:
            email: Address typed by the requester

        Returns:
            The same acknowledgement for known, unknown and inactive accounts
        """
        email = normalize_email(email)
        user = await self._user_repo.get_by_email(email)

        # Token work happens on every path so both take the same time
        raw_token = generate_reset_token()
        ticket = PasswordResetTicket(
            token_hash=hash_reset_token(raw_token),
            expires_at=self._clock() + self._ttl,
        )

        if user is None or not user.is_active:
            # Matching store round-trip in place of the ticket write
            await self._user_repo.find_by_reset_ticket(email, ticket.token_hash, self._clock())
            logger.info("Password reset requested for an unknown or inactive account")
            return ResetAcknowledgement()

        await self._user_repo.save_reset_ticket(user.id, ticket)
        try:
            self._notifier.send_reset_link(user.email, build_reset_url(raw_token, user.email))
        except Exception as e:
            logger.error(f"Failed to dispatch password reset email for user {user.id}: {e}")
        else:
            logger.info(f"Password reset link dispatched for user {user.id}")
        return ResetAcknowledgement()


class ValidateResetTokenUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._user_repo = user_repository
        self._clock = clock

    async def execute(self, raw_token: str, email: str) -> TokenValidation:
        """Check a token without consuming it. Never says why a token is rejected."""
        user = await self._user_repo.find_by_reset_ticket(
            normalize_email(email), hash_reset_token(raw_token), self._clock()
        )
        if user is None:
            return TokenValidation(valid=False)
        return TokenValidation(valid=True, expires_at=user.reset_ticket.expires_at)


class ConsumePasswordResetUseCase:
    """Set a new password and clear the ticket in one conditional write."""

    def __init__(
        self,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._user_repo = user_repository
        self._clock = clock

    async def execute(self, raw_token: str, email: str, new_password: str) -> None:
        """Execute use case to reset the password.

        Raises:
            ValidationError: If the new password is too weak
            InvalidOrExpiredTokenError: If the ticket is missing, expired,
                superseded or was consumed concurrently
        """
        check_password_strength(new_password, field="newPassword")
        email = normalize_email(email)
        token_hash = hash_reset_token(raw_token)

        if await self._user_repo.find_by_reset_ticket(email, token_hash, self._clock()) is None:
            raise InvalidOrExpiredTokenError()

        password_hash = get_password_hash(new_password)
        # Expiry is checked again at write time, against the time of the write
        consumed = await self._user_repo.consume_reset_ticket(
            email, token_hash, self._clock(), password_hash
        )
        if not consumed:
            raise InvalidOrExpiredTokenError()
        logger.info("Password reset completed")
