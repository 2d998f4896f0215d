"""
Global service catalogue model.
"""

from decimal import Decimal
from functools import partial
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.models.base.types import LocalizedJSON
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["Service"]


class Service(TimestampMixin, BaseModel):
    """
    Catalogue entry maintained by the system administrator.

    Societies adopt an entry through a ``SocietyService`` row. Retirement is
    a soft delete via ``is_active``.
    """

    __tablename__ = "services"

    __table_args__ = (
        CheckConstraint("base_price >= 0", name="ck_services_base_price_non_negative"),
        CheckConstraint("duration_minutes >= 0", name="ck_services_duration_non_negative"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.SERVICE),
    )

    name: Mapped[LocalizedString] = mapped_column(LocalizedJSON, nullable=False)

    description: Mapped[Optional[LocalizedString]] = mapped_column(LocalizedJSON, nullable=True)

    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    icon: Mapped[str] = mapped_column(String(100), nullable=False)

    is_generic: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Eligible for default adoption by every society",
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
