"""
User account model.
"""

from functools import partial
from typing import List, Optional

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sevaconnect.models.base.base_model import BaseModel, TimestampMixin
from sevaconnect.models.base.enums import UserRole
from sevaconnect.models.base.types import StringList
from sevaconnect.utils.identifiers import IdPrefix, new_id

__all__ = ["User"]


class User(TimestampMixin, BaseModel):
    """
    Account for every role.

    Attributes:
        username: Login identifier, equal to the phone for self-registered users
        password_hash: bcrypt hash, never exposed in responses
        society_id: Owning society (absent for SYS_ADMIN)
        is_verified: Set by a society admin after reviewing a MAID/HOUSEHOLD
        skills: Skill tags (MAID only)
        leaves: Leave markers ``YYYY-MM-DD`` or ``YYYY-MM-DD:PERIOD`` (MAID only)
        must_change_password: Set after an OTP password reset or admin creation
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=partial(new_id, IdPrefix.USER),
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
        index=True,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        nullable=False,
        index=True,
    )

    society_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("societies.id"),
        nullable=True,
        index=True,
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    skills: Mapped[List[str]] = mapped_column(StringList, nullable=False, default=list)

    leaves: Mapped[List[str]] = mapped_column(StringList, nullable=False, default=list)

    must_change_password: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
