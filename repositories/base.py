"""
repositories/base.py
--------------------
Abstract interface for review storage.

Defines the contract every backend must follow so the service and the
HTTP layer can run against PostgreSQL or an in-memory store unchanged.
"""

from abc import ABC, abstractmethod

from models.review import Review


class ReviewRepository(ABC):
    """Abstract base class for review stores."""

    @abstractmethod
    def create(self, review: Review) -> str:
        """
        Insert a new review.

        The review's ``id`` is ignored and populated in place with the
        database-assigned key.

        Returns:
            A confirmation message including the creation timestamp.

        Raises:
            PersistenceError: If the insert cannot complete.
            StoreTimeoutError: If the operation exceeds its time bound.
        """

    @abstractmethod
    def update(self, review: Review) -> None:
        """
        Update the row matching ``review.id``.

        ``date_created`` is never written; it is filled in place from the
        stored row.

        Raises:
            NotFoundError: If no row has that id.
        """

    @abstractmethod
    def delete(self, review_id: int) -> None:
        """
        Hard-delete the row matching ``review_id``.

        Raises:
            NotFoundError: If no row has that id.
        """

    @abstractmethod
    def get_by_id(self, review_id: int) -> Review:
        """
        Fetch a single review.

        Raises:
            NotFoundError: If no row has that id.
        """

    def close(self) -> None:
        """Release backend resources. No-op by default."""


def confirmation_message(review: Review) -> str:
    return f"Review Created :: Recorded In DB:: {review.date_created}"
