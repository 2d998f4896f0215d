"""
ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from sevaconnect.models.base import Base, BaseModel
from sevaconnect.models.booking.booking import Booking
from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.models.communication.message import ChatMessage
from sevaconnect.models.review.review import Review
from sevaconnect.models.society.society import Society
from sevaconnect.models.user.user import User

__all__ = [
    "Base",
    "BaseModel",
    "Booking",
    "ChatMessage",
    "Review",
    "Service",
    "Society",
    "SocietyService",
    "User",
]
