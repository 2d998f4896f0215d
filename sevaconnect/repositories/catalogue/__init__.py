from sevaconnect.repositories.catalogue.service_repository import ServiceRepository
from sevaconnect.repositories.catalogue.society_service_repository import (
    OfferingRow,
    SocietyServiceRepository,
)

__all__ = ["OfferingRow", "ServiceRepository", "SocietyServiceRepository"]
