from sevaconnect.schemas.booking.booking import BookingCreate, BookingPatch, BookingResponse, OtpIssued

__all__ = ["BookingCreate", "BookingPatch", "BookingResponse", "OtpIssued"]
