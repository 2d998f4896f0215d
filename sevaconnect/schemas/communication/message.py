"""
Booking chat schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from sevaconnect.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = ["MessageCreate", "MessageResponse"]


class MessageCreate(BaseCreateSchema):
    booking_id: str = Field(..., min_length=1)
    sender_id: str = Field(..., min_length=1)
    sender_name: str = Field(..., min_length=1, max_length=200)
    text: str = Field(..., min_length=1, max_length=4000)


class MessageResponse(BaseSchema):
    id: str
    booking_id: str
    sender_id: str
    sender_name: str
    text: str
    timestamp: datetime
