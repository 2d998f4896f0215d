"""
Society offering management.

An offering either adopts a catalogue service, overriding any subset of its
fields, or is exclusive to the society and fully defined by its own columns.
Every read returns the coalesced ``OfferingView``.
"""

from typing import Any, Callable, Dict, List, Mapping, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import ResourceNotFoundError, ValidationError
from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.repositories.catalogue import ServiceRepository, SocietyServiceRepository
from sevaconnect.repositories.society import SocietyRepository
from sevaconnect.schemas.catalogue.offering import OfferingCreate, OfferingUpdate, OfferingView
from sevaconnect.services.base import BaseService, ServiceResult
from sevaconnect.services.catalogue.offering_resolver import resolve_offering

# Fields an exclusive offering cannot do without
EXCLUSIVE_REQUIRED_FIELDS = ("name", "price", "duration", "icon")


def _override(column: str) -> Callable[[SocietyService, Any], None]:
    def apply(offering: SocietyService, value: Any) -> None:
        setattr(offering, column, value)
    return apply


def _localized_override(column: str) -> Callable[[SocietyService, Any], None]:
    def apply(offering: SocietyService, value: Any) -> None:
        # None clears the override; anything else is normalized
        setattr(offering, column, LocalizedString.parse_optional(value))
    return apply


def _set_active(offering: SocietyService, value: Any) -> None:
    if value is None:
        raise ValidationError("is_active cannot be null", field="is_active")
    offering.is_active = value


_APPLIERS: Dict[str, Callable[[SocietyService, Any], None]] = {
    "name": _localized_override("name"),
    "description": _localized_override("description"),
    "price": _override("price"),
    "duration": _override("duration"),
    "icon": _override("icon"),
    "is_generic": _override("is_generic"),
    "is_active": _set_active,
}


def missing_exclusive_fields(values: Mapping[str, Any]) -> List[str]:
    """Return the mandatory exclusive-offering fields absent from ``values``."""
    missing = []
    for field_name in EXCLUSIVE_REQUIRED_FIELDS:
        value = values.get(field_name)
        if field_name == "name":
            if value is None or not LocalizedString.parse(value).has_fallback:
                missing.append(field_name)
        elif value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field_name)
    return missing


class OfferingService(BaseService):
    """
    Activate catalogue services for a society and manage local overrides.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = SocietyServiceRepository(db_session)
        self.service_repository = ServiceRepository(db_session)
        self.society_repository = SocietyRepository(db_session)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_offerings(
        self,
        society_id: str,
        include_inactive: bool = True,
    ) -> ServiceResult[List[OfferingView]]:
        """
        List a society's offerings by creation time. Offerings created in the
        same instant come back in id order, which is stable but arbitrary.

        Args:
            society_id: Owning society
            include_inactive: Include soft-deleted offerings

        Returns:
            ServiceResult containing the effective views
        """
        try:
            rows = self.repository.list_with_services(society_id, include_inactive=include_inactive)
            views = [resolve_offering(offering, service) for offering, service in rows]
            return ServiceResult.success(views, metadata={"count": len(views)})
        except Exception as e:
            return self._handle_exception(e, "list offerings", society_id)

    def get_offering(self, offering_id: str) -> ServiceResult[OfferingView]:
        try:
            return ServiceResult.success(self._view(offering_id))
        except Exception as e:
            return self._handle_exception(e, "get offering", offering_id)

    def _view(self, offering_id: str) -> OfferingView:
        row = self.repository.get_with_service(offering_id)
        if row is None:
            raise ResourceNotFoundError("SocietyService", offering_id)
        return resolve_offering(*row)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create_offering(
        self,
        data: Union[OfferingCreate, Mapping[str, Any]],
    ) -> ServiceResult[OfferingView]:
        """
        Create an offering for a society.

        With ``service_id`` the catalogue service is activated for the
        society and only the supplied overrides are stored. Without it the
        offering is exclusive and name (with English text), price, duration
        and icon are required.

        Returns:
            ServiceResult containing the effective view
        """
        try:
            request = self._coerce(OfferingCreate, data)

            if request.service_id is None:
                missing = missing_exclusive_fields(request.model_dump())
                if missing:
                    raise ValidationError(
                        "Exclusive services require name (with English), price, duration, and icon. "
                        f"Missing: {', '.join(missing)}",
                        field_errors={f: ["required for exclusive services"] for f in missing},
                        field=missing[0],
                    )

            with self.transaction():
                self.society_repository.get_or_raise(request.society_id)
                if request.service_id is not None:
                    self.service_repository.get_or_raise(request.service_id)

                offering = self.repository.create(
                    SocietyService(
                        society_id=request.society_id,
                        service_id=request.service_id,
                        name=request.name,
                        description=request.description,
                        price=request.price,
                        duration=request.duration,
                        icon=request.icon,
                        is_generic=request.is_generic,
                        is_active=True,
                    )
                )
                view = self._view(offering.id)

            self._log_operation(
                "create offering",
                offering.id,
                society_id=request.society_id,
                exclusive=view.is_exclusive,
            )
            return ServiceResult.success(view, message="Offering created successfully")
        except Exception as e:
            return self._handle_exception(e, "create offering")

    def update_offering(
        self,
        offering_id: str,
        data: Union[OfferingUpdate, Mapping[str, Any]],
    ) -> ServiceResult[OfferingView]:
        """
        Apply a partial update to the local override columns.

        Omitted fields are untouched; an explicit None reverts the field to
        the catalogue value. The catalogue row and the link are never
        modified.

        Returns:
            ServiceResult containing the recomputed view
        """
        try:
            changes = self._coerce(OfferingUpdate, data).changes()

            with self.transaction():
                offering = self.repository.get_or_raise(offering_id)

                if offering.is_exclusive:
                    cleared = [
                        f for f in EXCLUSIVE_REQUIRED_FIELDS
                        if f in changes and missing_exclusive_fields({f: changes[f]})
                    ]
                    if cleared:
                        raise ValidationError(
                            f"Exclusive services cannot clear: {', '.join(cleared)}",
                            field_errors={f: ["required for exclusive services"] for f in cleared},
                            field=cleared[0],
                        )

                for field_name, value in changes.items():
                    _APPLIERS[field_name](offering, value)
                self.repository.flush()
                view = self._view(offering_id)

            self._log_operation("update offering", offering_id, fields=sorted(changes))
            return ServiceResult.success(view, message="Offering updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update offering", offering_id)

    def delete_offering(self, offering_id: str) -> ServiceResult[OfferingView]:
        """
        Soft delete an offering.

        The row stays so existing bookings keep their reference.
        """
        try:
            with self.transaction():
                offering = self.repository.get_or_raise(offering_id)
                self.repository.update(offering, {"is_active": False})
                view = self._view(offering_id)

            self._log_operation("delete offering", offering_id)
            return ServiceResult.success(view, message="Offering deactivated")
        except Exception as e:
            return self._handle_exception(e, "delete offering", offering_id)
