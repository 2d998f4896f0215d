"""
Booking model.

A single row represents either a one-off slot or a whole recurring series;
recurrence is described, never expanded into further rows.
"""

from datetime import date as Date, time as Time
from decimal import Decimal
from functools import partial
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date as SQLDate,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Time as SQLTime,
)
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.models.base.enums import BookingFrequency, BookingStatus, OtpPhase
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["Booking"]


class Booking(TimestampMixin, BaseModel):
    """
    A household's booking of a maid for a society offering.

    Attributes:
        society_service_id: Offering booked, kept even if it is later retired
        status: Lifecycle state, advanced by OTP verification
        start_otp / end_otp: Issued four digit codes, ``None`` when not issued
        maid_requested_start / maid_requested_end: A code is awaiting entry
        price_at_booking: Effective price frozen at creation time
        custom_price / custom_description: Ad hoc per-booking overrides
    """

    __tablename__ = "bookings"

    __table_args__ = (
        CheckConstraint(
            "custom_frequency_days IS NULL OR custom_frequency_days >= 1",
            name="ck_bookings_custom_frequency_positive",
        ),
        Index("ix_bookings_household_date", "household_id", "date"),
        Index("ix_bookings_maid_date", "maid_id", "date"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.BOOKING),
    )

    society_service_id: Mapped[str] = mapped_column(
        ForeignKey("society_services.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    household_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    maid_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False)

    # Schedule
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)

    start_time: Mapped[Time] = mapped_column(SQLTime, nullable=False)

    end_time: Mapped[Time] = mapped_column(SQLTime, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus),
        nullable=False,
        default=BookingStatus.REQUESTED,
        index=True,
    )

    # OTP state
    start_otp: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)

    end_otp: Mapped[Optional[str]] = mapped_column(String(4), nullable=True)

    maid_requested_start: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    maid_requested_end: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Recurrence descriptor
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    frequency: Mapped[Optional[BookingFrequency]] = mapped_column(
        Enum(BookingFrequency),
        nullable=True,
    )

    custom_frequency_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_reviewed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Pricing
    custom_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    custom_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price_at_booking: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Effective price frozen at creation; never recomputed",
    )

    def otp_for(self, phase: OtpPhase) -> Optional[str]:
        return self.start_otp if phase is OtpPhase.START else self.end_otp

    def is_otp_requested(self, phase: OtpPhase) -> bool:
        if phase is OtpPhase.START:
            return self.maid_requested_start
        return self.maid_requested_end
