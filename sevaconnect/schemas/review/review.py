"""
Review schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import Field

from sevaconnect.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["ReviewCreate", "ReviewResponse", "RatingSummary"]


class ReviewCreate(BaseCreateSchema):
    """
    Household review of a completed booking.

    ``household_name`` is copied from the household's account when omitted.
    """

    booking_id: str = Field(..., min_length=1)
    maid_id: str = Field(..., min_length=1)
    household_id: str = Field(..., min_length=1)
    household_name: Optional[str] = Field(None, max_length=200)
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: str = Field("", max_length=2000)


class ReviewResponse(BaseResponseSchema):
    booking_id: str
    maid_id: str
    household_id: str
    household_name: Optional[str] = None
    rating: int
    comment: str
    date: Date


class RatingSummary(BaseSchema):
    maid_id: str
    review_count: int = 0
    average_rating: float = Field(0.0, description="Average rounded to one decimal")
