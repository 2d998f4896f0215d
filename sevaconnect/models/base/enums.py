"""
Database enums.

Shared by the ORM models and the pydantic schemas so both layers agree on
the stored values.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    SYS_ADMIN = "SYS_ADMIN"
    SOCIETY_ADMIN = "SOCIETY_ADMIN"
    MAID = "MAID"
    HOUSEHOLD = "HOUSEHOLD"

    @property
    def is_admin(self) -> bool:
        return self in (UserRole.SYS_ADMIN, UserRole.SOCIETY_ADMIN)


SELF_REGISTRATION_ROLES = frozenset({UserRole.MAID, UserRole.HOUSEHOLD})


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    REQUESTED = "REQUESTED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_BOOKING_STATUSES

    def can_transition_to(self, target: "BookingStatus") -> bool:
        return target in BOOKING_TRANSITIONS.get(self, frozenset())


TERMINAL_BOOKING_STATUSES = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
    BookingStatus.REJECTED,
})

BOOKING_TRANSITIONS = {
    BookingStatus.REQUESTED: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
        BookingStatus.REJECTED,
    }),
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.IN_PROGRESS,
        BookingStatus.CANCELLED,
        BookingStatus.REJECTED,
    }),
    BookingStatus.IN_PROGRESS: frozenset({BookingStatus.COMPLETED}),
}


class OtpPhase(str, enum.Enum):
    """Booking phase confirmed with a one-time code."""
    START = "start"
    END = "end"

    @property
    def target_status(self) -> BookingStatus:
        if self is OtpPhase.START:
            return BookingStatus.IN_PROGRESS
        return BookingStatus.COMPLETED


class BookingFrequency(str, enum.Enum):
    """Recurrence of a booking series."""
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    CUSTOM = "CUSTOM"


class LeavePeriod(str, enum.Enum):
    """Part of the day a maid is on leave."""
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    FULL = "FULL"
