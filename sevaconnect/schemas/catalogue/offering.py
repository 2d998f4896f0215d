"""
Society offering schemas.

Override fields are nullable: ``None`` on an offering means "inherit the
linked catalogue value".
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from sevaconnect.core.localization import LocalizedString
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "OfferingCreate",
    "OfferingUpdate",
    "OfferingView",
]


class OfferingCreate(BaseCreateSchema):
    """
    Adopt a catalogue service for a society, or define an exclusive one.

    Without ``service_id`` the offering is exclusive and name (with English
    text), price, duration and icon become mandatory.
    """

    society_id: str = Field(..., min_length=1, description="Owning society")
    service_id: Optional[str] = Field(None, description="Linked catalogue service")
    name: Optional[LocalizedString] = None
    description: Optional[LocalizedString] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes")
    icon: Optional[str] = Field(None, min_length=1, max_length=100)
    is_generic: Optional[bool] = None

    @field_validator("name", "description")
    @classmethod
    def blank_text_is_unset(cls, v: Optional[LocalizedString]) -> Optional[LocalizedString]:
        """Blank text is not stored as an override, so the catalogue text applies."""
        if v is not None and not any(text.strip() for text in v.values()):
            return None
        return v


class OfferingUpdate(BaseUpdateSchema):
    """
    Partial update of local overrides.

    Omitted fields keep their current override; an explicit ``None`` clears
    it so the catalogue value applies again.
    """

    name: Optional[LocalizedString] = None
    description: Optional[LocalizedString] = None
    price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    duration: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = Field(None, min_length=1, max_length=100)
    is_generic: Optional[bool] = None
    is_active: Optional[bool] = None


class OfferingView(BaseSchema):
    """
    Effective view of an offering after coalescing with its catalogue entry.

    ``description`` is always a mapping: when neither the offering nor the
    catalogue has one it is ``{"en": ""}``, and blank text means undefined.
    """

    id: str
    society_id: str
    service_id: Optional[str] = None
    name: LocalizedString
    description: LocalizedString
    effective_price: Decimal
    base_price: Optional[Decimal] = Field(None, description="Catalogue price; absent for exclusive offerings")
    price_override: Optional[Decimal] = Field(None, description="Set only when the society overrode the price")
    duration_minutes: Optional[int] = None
    icon: Optional[str] = None
    is_generic: bool = False
    is_active: bool = True
    is_exclusive: bool = False
    created_at: Optional[datetime] = None
