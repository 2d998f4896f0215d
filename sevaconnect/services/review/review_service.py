"""
Review service.

A household reviews the maid of a booking once. Storing the review and
flagging the booking as reviewed happen in one transaction.
"""

from datetime import date as Date
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import ConflictError
from sevaconnect.models.base.base_model import utcnow
from sevaconnect.models.review.review import Review
from sevaconnect.repositories.booking import BookingRepository
from sevaconnect.repositories.review import ReviewRepository
from sevaconnect.repositories.user import UserRepository
from sevaconnect.schemas.review.review import RatingSummary, ReviewCreate, ReviewResponse
from sevaconnect.services.base import BaseService, ServiceResult


class ReviewService(BaseService):
    """
    Add and read maid reviews.
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.repository = ReviewRepository(db_session)
        self.booking_repository = BookingRepository(db_session)
        self.user_repository = UserRepository(db_session)

    def add_review(
        self,
        data: Union[ReviewCreate, Mapping[str, Any]],
        review_date: Optional[Date] = None,
    ) -> ServiceResult[ReviewResponse]:
        """
        Add a review and mark its booking as reviewed.

        Args:
            data: booking_id, maid_id, household_id, rating (1-5), optional
                household_name and comment
            review_date: Defaults to the current UTC date

        Returns:
            ServiceResult containing the review, or CONFLICT if the booking
            already has one
        """
        try:
            request = self._coerce(ReviewCreate, data)

            with self.transaction():
                booking = self.booking_repository.get_or_raise(request.booking_id)
                if booking.is_reviewed or self.repository.exists_for_booking(booking.id):
                    raise ConflictError(
                        "This booking has already been reviewed",
                        details={"booking_id": booking.id},
                    )

                household_name = request.household_name
                if not household_name:
                    household = self.user_repository.get_by_id(request.household_id)
                    household_name = household.name if household else None

                review = self.repository.create(
                    Review(
                        booking_id=booking.id,
                        maid_id=request.maid_id,
                        household_id=request.household_id,
                        household_name=household_name,
                        rating=request.rating,
                        comment=request.comment or "",
                        date=review_date or utcnow().date(),
                    )
                )
                self.booking_repository.update(booking, {"is_reviewed": True})

            self._log_operation("add review", review.id, booking_id=booking.id, rating=request.rating)
            return ServiceResult.success(
                ReviewResponse.model_validate(review),
                message="Review added",
            )
        except Exception as e:
            return self._handle_exception(e, "add review")

    def list_reviews_for_maid(self, maid_id: str) -> ServiceResult[List[ReviewResponse]]:
        """Reviews of a maid, most recent first."""
        try:
            reviews = self.repository.list_for_maid(maid_id)
            return ServiceResult.success(
                [ReviewResponse.model_validate(r) for r in reviews],
                metadata={"count": len(reviews)},
            )
        except Exception as e:
            return self._handle_exception(e, "list reviews", maid_id)

    def get_rating_summary(self, maid_id: str) -> ServiceResult[RatingSummary]:
        try:
            return ServiceResult.success(self.rating_summary(maid_id))
        except Exception as e:
            return self._handle_exception(e, "get rating summary", maid_id)

    def rating_summary(self, maid_id: str) -> RatingSummary:
        count, average = self.repository.rating_stats(maid_id)
        return RatingSummary(
            maid_id=maid_id,
            review_count=count,
            average_rating=round(average, 1) if count else 0.0,
        )
