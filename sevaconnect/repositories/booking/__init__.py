from sevaconnect.repositories.booking.booking_repository import ACTIVE_BOOKING_STATUSES, BookingRepository

__all__ = ["ACTIVE_BOOKING_STATUSES", "BookingRepository"]
