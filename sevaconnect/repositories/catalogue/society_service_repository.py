"""
Society offering repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from sevaconnect.models.catalogue.service import Service
from sevaconnect.models.catalogue.society_service import SocietyService
from sevaconnect.repositories.base.base_repository import BaseRepository

OfferingRow = Tuple[SocietyService, Optional[Service]]


class SocietyServiceRepository(BaseRepository[SocietyService]):
    """Society offerings, read together with their linked catalogue row."""

    def __init__(self, db: Session):
        super().__init__(SocietyService, db)

    def _with_service(self):
        # LEFT JOIN: exclusive offerings come back with service None
        return (
            select(SocietyService, Service)
            .outerjoin(Service, SocietyService.service_id == Service.id)
        )

    def list_with_services(self, society_id: str, include_inactive: bool = True) -> List[OfferingRow]:
        stmt = self._with_service().where(SocietyService.society_id == society_id)
        if not include_inactive:
            stmt = stmt.where(SocietyService.is_active.is_(True))
        # id only makes equal timestamps deterministic; it is not insertion order
        stmt = stmt.order_by(SocietyService.created_at.asc(), SocietyService.id.asc())
        return [(offering, service) for offering, service in self.db.execute(stmt)]

    def get_with_service(self, offering_id: str) -> Optional[OfferingRow]:
        stmt = self._with_service().where(SocietyService.id == offering_id)
        row = self.db.execute(stmt).first()
        if row is None:
            return None
        return row[0], row[1]
