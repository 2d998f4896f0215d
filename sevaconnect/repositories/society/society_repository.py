"""
Society repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from sevaconnect.models.society.society import Society
from sevaconnect.repositories.base.base_repository import BaseRepository


class SocietyRepository(BaseRepository[Society]):

    def __init__(self, db: Session):
        super().__init__(Society, db)

    def list_societies(self) -> List[Society]:
        return self.find_all(order_by=(Society.name.asc(), Society.id.asc()))

    def get_by_code(self, code: str) -> Optional[Society]:
        return self.find_one(Society.code == code)
