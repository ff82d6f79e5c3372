"""Pydantic schemas for authentication and password reset."""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from catalog.api.v1.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSchema(CamelModel):
    id: int
    email: str
    role: str
    is_active: bool
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    success: bool = True
    message: str
    token: str
    user: UserSchema


class UserResponse(CamelModel):
    success: bool = True
    user: UserSchema


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=32, max_length=128)
    email: EmailStr
    new_password: str = Field(..., max_length=128)


class TokenValidationResponse(CamelModel):
    success: bool
    message: str
    expires_at: Optional[datetime] = None
