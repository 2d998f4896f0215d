"""
Booking request and response schemas.
"""

from __future__ import annotations

from datetime import date as Date, time as Time
from decimal import Decimal
from typing import Optional

from pydantic import Field, model_validator

from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.base.enums import BookingFrequency, BookingStatus, OtpPhase
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "BookingCreate",
    "BookingPatch",
    "BookingResponse",
    "OtpIssued",
]

OTP_PATTERN = r"^\d{4}$"


class BookingCreate(BaseCreateSchema):
    """
    Booking request from a household.

    ``price_at_booking`` may be supplied when the caller already resolved the
    price; otherwise the offering's effective price is snapshotted.
    """

    society_service_id: str = Field(..., min_length=1, description="Offering being booked")
    household_id: str = Field(..., min_length=1)
    maid_id: str = Field(..., min_length=1)

    date: Date = Field(..., description="Service date (first date for a recurring series)")
    start_time: Time
    end_time: Time

    # Recurrence
    is_recurring: bool = False
    frequency: Optional[BookingFrequency] = None
    custom_frequency_days: Optional[int] = Field(None, ge=1)

    custom_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    custom_description: Optional[str] = Field(None, max_length=1000)
    price_at_booking: Optional[Decimal] = Field(None, ge=0, decimal_places=2)

    @model_validator(mode="after")
    def validate_schedule(self) -> "BookingCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        if self.frequency == BookingFrequency.CUSTOM and not self.custom_frequency_days:
            raise ValueError("custom_frequency_days is required for CUSTOM frequency")
        return self


class BookingPatch(BaseUpdateSchema):
    """Generic field patch; only these fields can be changed after creation."""

    date: Optional[Date] = None
    start_time: Optional[Time] = None
    end_time: Optional[Time] = None
    status: Optional[BookingStatus] = None
    start_otp: Optional[str] = Field(None, pattern=OTP_PATTERN)
    end_otp: Optional[str] = Field(None, pattern=OTP_PATTERN)
    custom_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)


class BookingResponse(BaseResponseSchema):
    society_service_id: str
    household_id: str
    maid_id: str
    date: Date
    start_time: Time
    end_time: Time
    status: BookingStatus
    start_otp: Optional[str] = None
    end_otp: Optional[str] = None
    maid_requested_start: bool = False
    maid_requested_end: bool = False
    is_recurring: bool = False
    frequency: Optional[BookingFrequency] = None
    custom_frequency_days: Optional[int] = None
    is_reviewed: bool = False
    custom_price: Optional[Decimal] = None
    custom_description: Optional[str] = None
    price_at_booking: Decimal

    # Display fields joined from the offering and users
    service_name: Optional[LocalizedString] = None
    service_icon: Optional[str] = None
    maid_name: Optional[str] = None
    household_name: Optional[str] = None
    household_address: Optional[str] = None
    household_phone: Optional[str] = None


class OtpIssued(BaseSchema):
    """Code issued for a booking phase, returned to the initiating party."""

    booking_id: str
    phase: OtpPhase
    otp: str = Field(..., pattern=OTP_PATTERN)
