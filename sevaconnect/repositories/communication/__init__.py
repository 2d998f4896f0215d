from sevaconnect.repositories.communication.message_repository import MessageRepository

__all__ = ["MessageRepository"]
