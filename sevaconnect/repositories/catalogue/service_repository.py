"""
Global catalogue repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.repositories.base.base_repository import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    """Global catalogue access."""

    def __init__(self, db: Session):
        super().__init__(Service, db)

    def list_services(self, include_inactive: bool = False) -> List[Service]:
        criteria = [] if include_inactive else [Service.is_active.is_(True)]
        services = self.find_all(*criteria)
        # Localized names are JSON, so order on the fallback text in Python
        return sorted(services, key=lambda s: (s.name.fallback_text.lower(), s.id))

    def has_offerings(self, service_id: str) -> bool:
        stmt = select(SocietyService.id).where(SocietyService.service_id == service_id).limit(1)
        return self.db.scalar(stmt) is not None
