"""
Offering resolution.

Merges a society's offering row with its linked catalogue entry into the
effective view callers see. Each field resolves as
``local override -> catalogue value -> undefined``. The function is pure so
it can be exercised without a database.
"""

from typing import Any, Optional

from sevaconnect.core.exceptions import DataIntegrityError
from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.schemas.catalogue.offering import OfferingView


def _coalesce(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_offering(offering: SocietyService, service: Optional[Service]) -> OfferingView:
    """
    Build the effective view of ``offering``.

    Args:
        offering: The society's row, whose non-null columns are overrides
        service: The linked catalogue row, or None for exclusive offerings

    Raises:
        DataIntegrityError: If neither side carries a price
    """
    base_price = service.base_price if service is not None else None
    effective_price = _coalesce(offering.price, base_price)
    if effective_price is None:
        raise DataIntegrityError(
            f"Offering {offering.id} has no price override and no catalogue price",
            table="society_services",
        )

    name = _coalesce(offering.name, service.name if service is not None else None)
    description = _coalesce(offering.description, service.description if service is not None else None)

    return OfferingView(
        id=offering.id,
        society_id=offering.society_id,
        service_id=offering.service_id,
        name=LocalizedString.parse(name),
        description=LocalizedString.parse(description),
        effective_price=effective_price,
        base_price=base_price,
        price_override=offering.price,
        duration_minutes=_coalesce(
            offering.duration, service.duration_minutes if service is not None else None
        ),
        icon=_coalesce(offering.icon, service.icon if service is not None else None),
        is_generic=bool(_coalesce(offering.is_generic, service.is_generic if service is not None else None, False)),
        is_active=bool(offering.is_active) if offering.is_active is not None else True,
        is_exclusive=offering.service_id is None,
        created_at=offering.created_at,
    )


__all__ = ["resolve_offering"]
