"""
Data access layer.

Repositories wrap a session and never commit; services own transactions.
"""

from sevaconnect.repositories.base import BaseRepository
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.catalogue import ServiceRepository, SocietyServiceRepository
from sevaconnect.repositories.communication import MessageRepository
from sevaconnect.repositories.review import ReviewRepository
from sevaconnect.repositories.society import SocietyRepository
from sevaconnect.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "MessageRepository",
    "ReviewRepository",
    "ServiceRepository",
    "SocietyRepository",
    "SocietyServiceRepository",
    "UserRepository",
]
