"""Shared dependencies for API endpoints."""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.core.dependencies import get_user_repository
from catalog.core.security import decode_access_token
from catalog.domain.entities.user import User
from catalog.domain.repositories.user_repository import UserRepository

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Resolve the bearer token to an active user.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or its user
            is gone; 403 if the account is deactivated
    """
    if credentials is None:
        raise _unauthorized("Access token required")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Invalid or expired token")

    user = await user_repo.get_by_id(user_id)
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow only administrators through."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user
