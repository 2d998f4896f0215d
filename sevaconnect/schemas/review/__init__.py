from sevaconnect.schemas.review.review import RatingSummary, ReviewCreate, ReviewResponse

__all__ = ["RatingSummary", "ReviewCreate", "ReviewResponse"]
