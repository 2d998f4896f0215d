"""
Booking chat service.

Messages are appended with a server-assigned id and timestamp and read back
in timestamp order, with the id as a stable tie-break. Senders are not
checked against the booking's participants.
"""

from typing import Any, Dict, List, Mapping, Sequence, Union

from sqlalchemy.orm import Session

from sevaconnect.models.communication.message import ChatMessage
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.communication import MessageRepository
from sevaconnect.schemas.communication.message import MessageCreate, MessageResponse
from sevaconnect.services.base import BaseService, ServiceResult


class MessageService(BaseService):
    """
    Append and read booking chat messages.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = MessageRepository(db_session)
        self.booking_repository = BookingRepository(db_session)

    def send_message(
        self,
        data: Union[MessageCreate, Mapping[str, Any]],
    ) -> ServiceResult[MessageResponse]:
        """
        Append a message to a booking's chat.

        Args:
            data: booking_id, sender_id, sender_name and text, all non-blank

        Returns:
            ServiceResult containing the stored message
        """
        try:
            request = self._coerce(MessageCreate, data)
            with self.transaction():
                self.booking_repository.get_or_raise(request.booking_id)
                message = self.repository.create(
                    ChatMessage(
                        booking_id=request.booking_id,
                        sender_id=request.sender_id,
                        sender_name=request.sender_name,
                        text=request.text,
                    )
                )

            self._logger.debug(
                f"Message {message.id} appended to booking {request.booking_id}",
                extra={"booking_id": request.booking_id, "sender_id": request.sender_id},
            )
            return ServiceResult.success(MessageResponse.model_validate(message))
        except Exception as e:
            return self._handle_exception(e, "send message")

    def list_messages(self, booking_id: str) -> ServiceResult[List[MessageResponse]]:
        """All messages of a booking, oldest first; equal timestamps fall back to id order."""
        try:
            messages = self.repository.list_for_booking(booking_id)
            return ServiceResult.success(
                [MessageResponse.model_validate(m) for m in messages],
                metadata={"count": len(messages)},
            )
        except Exception as e:
            return self._handle_exception(e, "list messages", booking_id)

    def get_message_counts(self, booking_ids: Sequence[str]) -> ServiceResult[Dict[str, int]]:
        """
        Count messages per booking.

        Every requested id is present in the result, with 0 for bookings
        that have no messages or do not exist.
        """
        try:
            ids = list(dict.fromkeys(b for b in booking_ids if b))
            return ServiceResult.success(self.repository.counts_for(ids))
        except Exception as e:
            return self._handle_exception(e, "count messages")
