"""
Per-society offering model.
"""

from decimal import Decimal
from functools import partial
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.models.base.types import LocalizedJSON
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["SocietyService"]


class SocietyService(TimestampMixin, BaseModel):
    """
    A society's offering of a service.

    With ``service_id`` set, the row adopts a catalogue entry and every
    nullable column is a local override (``NULL`` inherits the catalogue
    value). Without it the offering is exclusive to the society and the
    overrides are its only definition.
    """

    __tablename__ = "society_services"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.SOCIETY_SERVICE),
    )

    society_id: Mapped[str] = mapped_column(
        ForeignKey("societies.id"),
        nullable=False,
        index=True,
    )

    # Link only; catalogue rows with offerings cannot be hard deleted
    service_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    name: Mapped[Optional[LocalizedString]] = mapped_column(LocalizedJSON, nullable=True)

    description: Mapped[Optional[LocalizedString]] = mapped_column(LocalizedJSON, nullable=True)

    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_generic: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def is_exclusive(self) -> bool:
        return self.service_id is None
