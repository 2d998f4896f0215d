"""
Communication service layer: per-booking chat.
"""

from sevaconnect.services.communication.message_service import MessageService

__all__ = ["MessageService"]
