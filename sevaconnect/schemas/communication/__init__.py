from sevaconnect.schemas.communication.message import MessageCreate, MessageResponse

__all__ = ["MessageCreate", "MessageResponse"]
