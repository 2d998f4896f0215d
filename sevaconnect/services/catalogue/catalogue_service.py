"""
Global service catalogue management.

Catalogue entries are maintained by the system administrator and adopted by
societies through offerings. Retirement is a soft delete; a hard delete is
only allowed while no society offers the service.
"""

from typing import Any, Callable, Dict, List, Mapping, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import ConflictError, ValidationError
from sevaconnect.core.localization import LocalizedString
from sevaconnect.models.catalogue.service import Service
from sevaconnect.repositories.catalogue import ServiceRepository
from sevaconnect.schemas.catalogue.service import ServiceCreate, ServiceResponse, ServiceUpdate
from sevaconnect.services.base import BaseService, ServiceResult

# Columns that may never be cleared
_NON_NULLABLE = ("name", "base_price", "duration_minutes", "icon", "is_generic", "is_active")


def _set(column: str) -> Callable[[Service, Any], None]:
    def apply(service: Service, value: Any) -> None:
        setattr(service, column, value)
    return apply


def _set_localized(column: str) -> Callable[[Service, Any], None]:
    def apply(service: Service, value: Any) -> None:
        setattr(service, column, LocalizedString.parse_optional(value))
    return apply


_APPLIERS: Dict[str, Callable[[Service, Any], None]] = {
    "name": _set_localized("name"),
    "description": _set_localized("description"),
    "base_price": _set("base_price"),
    "duration_minutes": _set("duration_minutes"),
    "icon": _set("icon"),
    "is_generic": _set("is_generic"),
    "is_active": _set("is_active"),
}


class CatalogueService(BaseService):
    """
    Create, edit and retire catalogue services.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = ServiceRepository(db_session)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_services(self, include_inactive: bool = False) -> ServiceResult[List[ServiceResponse]]:
        """
        List catalogue services ordered by English name.

        Args:
            include_inactive: Include retired services

        Returns:
            ServiceResult containing the services
        """
        try:
            services = self.repository.list_services(include_inactive=include_inactive)
            return ServiceResult.success(
                [ServiceResponse.model_validate(s) for s in services],
                metadata={"count": len(services)},
            )
        except Exception as e:
            return self._handle_exception(e, "list services")

    def get_service(self, service_id: str) -> ServiceResult[ServiceResponse]:
        try:
            service = self.repository.get_or_raise(service_id)
            return ServiceResult.success(ServiceResponse.model_validate(service))
        except Exception as e:
            return self._handle_exception(e, "get service", service_id)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create_service(
        self,
        data: Union[ServiceCreate, Mapping[str, Any]],
    ) -> ServiceResult[ServiceResponse]:
        """
        Add a catalogue service.

        Args:
            data: Name (plain string or locale mapping with English text),
                optional description, base price, duration, icon and the
                generic flag

        Returns:
            ServiceResult containing the created service
        """
        try:
            request = self._coerce(ServiceCreate, data)
            with self.transaction():
                service = self.repository.create(
                    Service(
                        name=request.name,
                        description=request.description,
                        base_price=request.base_price,
                        duration_minutes=request.duration_minutes,
                        icon=request.icon,
                        is_generic=request.is_generic,
                        is_active=True,
                    )
                )

            self._log_operation("create service", service.id)
            return ServiceResult.success(
                ServiceResponse.model_validate(service),
                message="Service created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create service")

    def update_service(
        self,
        service_id: str,
        data: Union[ServiceUpdate, Mapping[str, Any]],
    ) -> ServiceResult[ServiceResponse]:
        """
        Apply a partial update.

        Only fields present in ``data`` are changed. ``description`` is the
        one field that may be cleared with an explicit None.
        """
        try:
            changes = self._coerce(ServiceUpdate, data).changes()
            cleared = sorted(f for f in _NON_NULLABLE if f in changes and changes[f] is None)
            if cleared:
                raise ValidationError(
                    f"These fields cannot be cleared: {', '.join(cleared)}",
                    field_errors={f: ["may not be null"] for f in cleared},
                    field=cleared[0],
                )

            with self.transaction():
                service = self.repository.get_or_raise(service_id)
                for field_name, value in changes.items():
                    _APPLIERS[field_name](service, value)
                self.repository.flush()

            self._log_operation("update service", service_id, fields=sorted(changes))
            return ServiceResult.success(
                ServiceResponse.model_validate(service),
                message="Service updated successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "update service", service_id)

    def deactivate_service(self, service_id: str) -> ServiceResult[ServiceResponse]:
        """Retire a service without deleting it."""
        try:
            with self.transaction():
                service = self.repository.get_or_raise(service_id)
                self.repository.update(service, {"is_active": False})

            self._log_operation("deactivate service", service_id)
            return ServiceResult.success(
                ServiceResponse.model_validate(service),
                message="Service deactivated",
            )
        except Exception as e:
            return self._handle_exception(e, "deactivate service", service_id)

    def delete_service(self, service_id: str) -> ServiceResult[bool]:
        """
        Hard delete a catalogue service.

        Rejected while any society offering links to it; offerings are never
        removed as a side effect.
        """
        try:
            with self.transaction():
                service = self.repository.get_or_raise(service_id)
                if self.repository.has_offerings(service_id):
                    raise ConflictError(
                        "Service is offered by one or more societies; deactivate it instead",
                        details={"service_id": service_id},
                    )
                self.repository.delete(service)

            self._logger.warning(f"Catalogue service {service_id} deleted", extra={"service_id": service_id})
            return ServiceResult.success(True, message="Service deleted")
        except Exception as e:
            return self._handle_exception(e, "delete service", service_id)
