"""
Review repository.
"""

from typing import List, Sequence, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from sevaconnect.models.review.review import Review
from sevaconnect.repositories.base.base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Per-maid review log."""

    def __init__(self, db: Session):
        super().__init__(Review, db)

    def list_for_maid(self, maid_id: str) -> List[Review]:
        return self.find_all(
            Review.maid_id == maid_id,
            order_by=(Review.date.desc(), Review.created_at.desc()),
        )

    def exists_for_booking(self, booking_id: str) -> bool:
        return self.exists(Review.booking_id == booking_id)

    def rating_stats(self, maid_id: str) -> Tuple[int, float]:
        """Return ``(review_count, average_rating)`` for a maid."""
        stmt = select(func.count(Review.id), func.avg(Review.rating)).where(Review.maid_id == maid_id)
        count, average = self.db.execute(stmt).one()
        return int(count or 0), float(average or 0)

    def delete_for_maid_or_bookings(self, maid_id: str, booking_ids: Sequence[str]) -> int:
        criteria = [Review.maid_id == maid_id]
        if booking_ids:
            criteria.append(Review.booking_id.in_(list(booking_ids)))
        result = self.db.execute(
            delete(Review).where(or_(*criteria)).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
