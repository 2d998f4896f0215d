"""
Base models package.

Provides the declarative base, custom column types and enums shared by all
database models.
"""

from sevaconnect.models.base.base_model import Base, BaseModel, TimestampMixin, utcnow
from sevaconnect.models.base.enums import (
    BOOKING_TRANSITIONS,
    SELF_REGISTRATION_ROLES,
    TERMINAL_BOOKING_STATUSES,
    BookingFrequency,
    BookingStatus,
    LeavePeriod,
    OtpPhase,
    UserRole,
)
from sevaconnect.models.base.types import LocalizedJSON, StringList

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "utcnow",
    "BOOKING_TRANSITIONS",
    "SELF_REGISTRATION_ROLES",
    "TERMINAL_BOOKING_STATUSES",
    "BookingFrequency",
    "BookingStatus",
    "LeavePeriod",
    "OtpPhase",
    "UserRole",
    "LocalizedJSON",
    "StringList",
]
