"""
Society schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from sevaconnect.models.base.enums import UserRole
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "SocietyCreate",
    "SocietyCreated",
    "SocietyResponse",
    "SocietyStats",
    "SocietyWithStats",
    "SocietyActivity",
]


class SocietyCreate(BaseCreateSchema):
    """
    New society together with its admin account.

    ``phone`` becomes the admin's username. A random initial password is
    generated when ``initial_password`` is omitted.
    """

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=1000)
    code: str = Field(..., min_length=1, max_length=50)
    phone: str = Field(..., min_length=5, max_length=20)
    initial_password: Optional[str] = Field(None, min_length=4, max_length=128)


class SocietyCreated(BaseSchema):
    society_id: str
    admin_id: str
    initial_password: str


class SocietyResponse(BaseResponseSchema):
    name: str
    address: str
    code: str


class SocietyStats(BaseSchema):
    total_users: int = 0
    pending_verifications: int = 0
    active_bookings_today: int = 0


class SocietyWithStats(SocietyResponse):
    household_count: int = 0
    maid_count: int = 0
    expected_bookings: int = 0


class SocietyActivity(BaseSchema):
    """Recent registration shown on the society admin dashboard."""

    user_id: str
    name: str
    role: UserRole
    is_verified: bool
    activity_type: str = "registration"
