"""
User repository.
"""

from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from sevaconnect.models.base.enums import UserRole
from sevaconnect.models.user.user import User
from sevaconnect.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Account lookups by id, username or phone."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_by_identifier(self, identifier: str) -> Optional[User]:
        """Match the login identifier against username or phone."""
        return self.find_one(or_(User.username == identifier, User.phone == identifier))

    def is_phone_registered(self, *phones: str) -> bool:
        candidates = [p for p in phones if p]
        if not candidates:
            return False
        return self.exists(or_(User.phone.in_(candidates), User.username.in_(candidates)))

    def list_society_members(self, society_id: str) -> List[User]:
        """Residents and maids of a society; society admins are excluded."""
        return self.find_all(
            User.society_id == society_id,
            User.role != UserRole.SOCIETY_ADMIN,
            order_by=(User.created_at.asc(), User.id.asc()),
        )

    def count_by_role(self, society_id: str, role: UserRole) -> int:
        return self.count(User.society_id == society_id, User.role == role)

    def recent_members(self, society_id: str, limit: int = 5) -> List[User]:
        """Newest residents and maids of a society."""
        stmt = (
            select(User)
            .where(User.society_id == society_id, User.role != UserRole.SOCIETY_ADMIN)
            .order_by(User.created_at.desc(), User.id.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt))
