"""
services/review_service.py
--------------------------
Business logic for movie reviews.
Builds Review objects from request data and delegates persistence
to the injected ReviewRepository.
"""

from datetime import datetime
from typing import Callable

from models.review import Review
from repositories.base import ReviewRepository
from utils.dates import now_utc, tidy_release_date
from utils.logger import get_logger

logger = get_logger(__name__)


class ReviewService:
    """
    Handles all business logic related to reviews.

    Workflow:
        1. Receive validated fields from the handler.
        2. Normalize the release date and stamp the creation time.
        3. Persist via the repository.
        4. Return the stored Review.
    """

    def __init__(self, repo: ReviewRepository, clock: Callable[[], datetime] = now_utc):
        self.repo = repo
        self.clock = clock

    def create_review(
        self,
        title: str,
        director: str,
        release_date: str,
        rating: str,
        review_notes: str,
    ) -> Review:
        """Create and persist a new review; the returned Review carries its new id."""
        review = Review.new(title, director, release_date, rating, review_notes, now=self.clock())
        message = self.repo.create(review)
        logger.debug(message)
        return review

    def get_review(self, review_id: int) -> Review:
        return self.repo.get_by_id(review_id)

    def update_review(
        self,
        review_id: int,
        title: str,
        director: str,
        release_date: str,
        rating: str,
        review_notes: str,
    ) -> Review:
        """
        Replace every client-editable field of an existing review.

        Returns:
            The updated Review, with its original creation timestamp.
        """
        review = Review(
            id=review_id,
            title=title,
            director=director,
            release_date=tidy_release_date(release_date),
            rating=rating,
            review_notes=review_notes,
        )
        self.repo.update(review)
        logger.info(f"Updated review #{review_id}")
        return review

    def delete_review(self, review_id: int) -> None:
        self.repo.delete(review_id)

    def close(self) -> None:
        self.repo.close()
