from sevaconnect.repositories.review.review_repository import ReviewRepository

__all__ = ["ReviewRepository"]
