"""
Global catalogue schemas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from sevaconnect.core.localization import LocalizedString
from sevaconnect.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema

__all__ = [
    "LocalizedName",
    "ServiceCreate",
    "ServiceUpdate",
    "ServiceResponse",
]


def _require_fallback_text(value: LocalizedString) -> LocalizedString:
    if not value.has_fallback:
        raise ValueError("name must include English (en) text")
    return value


# Localized text that must carry the fallback locale
LocalizedName = Annotated[LocalizedString, AfterValidator(_require_fallback_text)]


class ServiceCreate(BaseCreateSchema):
    """Catalogue entry created by the system administrator."""

    name: LocalizedName = Field(..., description="Localized name; a plain string is stored as English")
    description: Optional[LocalizedString] = Field(None, description="Localized description")
    base_price: Decimal = Field(..., ge=0, decimal_places=2, description="Catalogue price")
    duration_minutes: int = Field(..., ge=0, description="Typical duration in minutes")
    icon: str = Field(..., min_length=1, max_length=100, description="Icon token")
    is_generic: bool = Field(False, description="Eligible for default adoption by all societies")


class ServiceUpdate(BaseUpdateSchema):
    """Partial catalogue update. Only ``description`` may be cleared."""

    name: Optional[LocalizedName] = None
    description: Optional[LocalizedString] = None
    base_price: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    duration_minutes: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = Field(None, min_length=1, max_length=100)
    is_generic: Optional[bool] = None
    is_active: Optional[bool] = None


class ServiceResponse(BaseResponseSchema):
    name: LocalizedString
    # NULL reads back as an empty English string
    description: LocalizedString
    base_price: Decimal
    duration_minutes: int
    icon: str
    is_generic: bool
    is_active: bool
