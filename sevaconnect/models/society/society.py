"""
Society (residential complex) model.
"""

from functools import partial

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["Society"]


class Society(TimestampMixin, BaseModel):
    """A residential complex whose households book services from its maids."""

    __tablename__ = "societies"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.SOCIETY),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    address: Mapped[str] = mapped_column(Text, nullable=False, default="")

    code: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
        comment="Short join code shown to residents",
    )
