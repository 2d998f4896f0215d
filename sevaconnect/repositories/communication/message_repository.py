"""
Booking chat repository.
"""

from typing import Dict, List, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from sevaconnect.models.communication.message import ChatMessage
from sevaconnect.repositories.base.base_repository import BaseRepository


class MessageRepository(BaseRepository[ChatMessage]):
    """Append-only message log per booking."""

    def __init__(self, db: Session):
        super().__init__(ChatMessage, db)

    def list_for_booking(self, booking_id: str) -> List[ChatMessage]:
        return self.find_all(
            ChatMessage.booking_id == booking_id,
            order_by=(ChatMessage.timestamp.asc(), ChatMessage.id.asc()),
        )

    def counts_for(self, booking_ids: Sequence[str]) -> Dict[str, int]:
        """Message count per booking id; ids without messages map to 0."""
        counts = {booking_id: 0 for booking_id in booking_ids}
        if not counts:
            return counts

        stmt = (
            select(ChatMessage.booking_id, func.count(ChatMessage.id))
            .where(ChatMessage.booking_id.in_(list(counts)))
            .group_by(ChatMessage.booking_id)
        )
        for booking_id, count in self.db.execute(stmt):
            counts[booking_id] = int(count)
        return counts

    def delete_for_sender_or_bookings(self, sender_id: str, booking_ids: Sequence[str]) -> int:
        criteria = [ChatMessage.sender_id == sender_id]
        if booking_ids:
            criteria.append(ChatMessage.booking_id.in_(list(booking_ids)))
        result = self.db.execute(
            delete(ChatMessage).where(or_(*criteria)).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
