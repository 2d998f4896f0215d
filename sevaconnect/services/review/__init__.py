"""
Review service layer.
"""

from sevaconnect.services.review.review_service import ReviewService

__all__ = ["ReviewService"]
