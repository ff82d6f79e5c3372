"""Authentication and password reset routes."""
import logging

from fastapi import APIRouter, Depends, Query, status

from catalog.api.dependencies import get_current_user
from catalog.api.v1.schemas.auth_schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TokenValidationResponse,
    UserResponse,
    UserSchema,
)
from catalog.api.v1.schemas.common import MessageResponse
from catalog.application.dto.auth_dto import RESET_COMPLETED_MESSAGE
from catalog.application.use_cases.authenticate_user import LoginUserUseCase, RegisterUserUseCase
from catalog.application.use_cases.password_reset import (
    ConsumePasswordResetUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
)
from catalog.config import settings
from catalog.core.dependencies import (
    get_consume_password_reset_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_request_password_reset_use_case,
    get_validate_reset_token_use_case,
)
from catalog.domain.entities.user import User
from catalog.domain.errors import InvalidOrExpiredTokenError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def user_schema(user: User) -> UserSchema:
    return UserSchema(
        id=user.id,
        email=user.email,
        role=user.role.value,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
        created_at=user.created_at,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    """Register a regular user account and log it in."""
    result = await use_case.execute(body.email, body.password)
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=user_schema(result.user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    result = await use_case.execute(body.email, body.password)
    return AuthResponse(
        message="Logged in successfully",
        token=result.token,
        user=user_schema(result.user),
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return UserResponse(user=user_schema(current_user))


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    logger.info(f"User {current_user.id} logged out")
    return MessageResponse(message="Logged out successfully")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    body: ForgotPasswordRequest,
    use_case: RequestPasswordResetUseCase = Depends(get_request_password_reset_use_case),
):
    """Start a password reset. The response never reveals whether the account exists."""
    acknowledgement = await use_case.execute(body.email)
    return MessageResponse(message=acknowledgement.message)


@router.get(
    "/validate-reset-token",
    response_model=TokenValidationResponse,
    response_model_exclude_none=True,
)
async def validate_reset_token(
    token: str = Query(
        ...,
        min_length=settings.PASSWORD_RESET_TOKEN_MIN_LENGTH,
        max_length=settings.PASSWORD_RESET_TOKEN_MAX_LENGTH,
    ),
    email: str = Query(..., max_length=255),
    use_case: ValidateResetTokenUseCase = Depends(get_validate_reset_token_use_case),
):
    """Check a reset link before showing the new-password form. Invalid tokens get 400."""
    validation = await use_case.execute(token, email)
    if not validation.valid:
        raise InvalidOrExpiredTokenError()
    return TokenValidationResponse(
        success=validation.valid,
        message=validation.message,
        expires_at=validation.expires_at,
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    use_case: ConsumePasswordResetUseCase = Depends(get_consume_password_reset_use_case),
):
    await use_case.execute(body.token, body.email, body.new_password)
    return MessageResponse(message=RESET_COMPLETED_MESSAGE)
