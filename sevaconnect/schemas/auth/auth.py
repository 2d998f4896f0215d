"""
Registration, login and password reset schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from sevaconnect.models.base.enums import UserRole
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseSchema
from sevaconnect.schemas.user.user import UserResponse

__all__ = [
    "RegistrationStart",
    "RegistrationRequest",
    "LoginRequest",
    "LoginResponse",
    "PasswordResetRequest",
    "PasswordResetConfirm",
]

PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{6,18}$"


class RegistrationStart(BaseCreateSchema):
    """First registration step: checks for duplicates and sends a code."""

    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    role: UserRole
    society_id: str = Field(..., min_length=1)


class RegistrationRequest(BaseCreateSchema):
    """Second registration step, carrying the code the user received."""

    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    password: str = Field(..., min_length=4, max_length=128)
    role: UserRole
    society_id: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=4, max_length=10)
    address: Optional[str] = Field(None, max_length=1000)
    skills: List[str] = Field(default_factory=list)


class LoginRequest(BaseCreateSchema):
    identifier: str = Field(..., min_length=1, description="Username or phone")
    password: str = Field(..., min_length=1)


class LoginResponse(BaseSchema):
    token: str
    user: UserResponse


class PasswordResetRequest(BaseCreateSchema):
    identifier: str = Field(..., min_length=1, description="Username or phone")


class PasswordResetConfirm(BaseCreateSchema):
    identifier: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=4, max_length=10)
