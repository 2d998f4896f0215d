"""
Booking service layer.

Provides business logic for:
- Booking creation with a frozen price
- Guarded status transitions and the administrative override
- OTP issue and verification for the start and end phases
"""

from sevaconnect.services.booking.booking_service import BookingService
from sevaconnect.services.booking.booking_otp_service import BookingOtpService

__all__ = [
    "BookingService",
    "BookingOtpService",
]
