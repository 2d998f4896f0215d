"""
Booking chat message model.
"""

from datetime import datetime
from functools import partial

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.models.base.base_model import BaseModel, utcnow
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["ChatMessage"]


class ChatMessage(BaseModel):
    """Append-only chat line attached to a booking."""

    __tablename__ = "messages"

    __table_args__ = (
        Index("ix_messages_booking_timestamp", "booking_id", "timestamp"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.MESSAGE),
    )

    booking_id: Mapped[str] = mapped_column(ForeignKey("bookings.id"), nullable=False)

    sender_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    sender_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Denormalized at send time",
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
