"""
Maid review model.
"""

from datetime import date as Date
from functools import partial
from typing import Optional

from sqlalchemy import CheckConstraint, Date as SQLDate, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["Review"]


class Review(TimestampMixin, BaseModel):
    """A household's rating of the maid who served a booking."""

    __tablename__ = "reviews"

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.REVIEW),
    )

    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id"),
        nullable=False,
        unique=True,
        comment="At most one review per booking",
    )

    maid_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    household_id: Mapped[str] = mapped_column(String(64), nullable=False)

    household_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    comment: Mapped[str] = mapped_column(Text, nullable=False, default="")

    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
