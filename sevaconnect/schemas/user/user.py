"""
User schemas.

Responses never carry the password hash.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import Field

from sevaconnect.models.base.enums import LeavePeriod, UserRole
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema

__all__ = ["UserResponse", "ProfileUpdate", "LeaveRequest"]


class UserResponse(BaseResponseSchema):
    name: str
    username: str
    phone: Optional[str] = None
    role: UserRole
    society_id: Optional[str] = None
    is_verified: bool
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    leaves: List[str] = Field(default_factory=list)
    must_change_password: bool = False

    # Filled for maids from the review ledger
    rating: float = 0.0
    review_count: int = 0


class ProfileUpdate(BaseUpdateSchema):
    """Fields a user may change on their own profile."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, max_length=1000)
    avatar_url: Optional[str] = Field(None, max_length=500)


class LeaveRequest(BaseCreateSchema):
    """Mark or clear a maid's leave for one date; ``period=None`` clears it."""

    date: Date
    period: Optional[LeavePeriod] = None
