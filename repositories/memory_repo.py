"""
repositories/memory_repo.py
---------------------------
In-memory review store with the same semantics as the PostgreSQL one.
Used by the test-suite and for running the API without a database
(STORE_BACKEND=memory).
"""

import itertools
import threading
from dataclasses import replace

from errors import NotFoundError
from models.review import Review
from repositories.base import ReviewRepository, confirmation_message
from utils.logger import get_logger

logger = get_logger(__name__)


class MemoryReviewRepository(ReviewRepository):
    """Thread-safe dict-backed review store. Ids start at 1."""

    def __init__(self):
        self._rows: dict[int, Review] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def create(self, review: Review) -> str:
        with self._lock:
            review.id = next(self._ids)
            self._rows[review.id] = replace(review)
        logger.info(f"Created review #{review.id}")
        return confirmation_message(review)

    def get_by_id(self, review_id: int) -> Review:
        with self._lock:
            row = self._rows.get(review_id)
        if row is None:
            raise NotFoundError(f"review with id {review_id} not found")
        return replace(row)

    def update(self, review: Review) -> None:
        with self._lock:
            stored = self._rows.get(review.id)
            if stored is None:
                raise NotFoundError(f"review with id {review.id} not found")
            review.date_created = stored.date_created
            self._rows[review.id] = replace(review)

    def delete(self, review_id: int) -> None:
        with self._lock:
            if self._rows.pop(review_id, None) is None:
                raise NotFoundError(f"review with id {review_id} not found")
        logger.info(f"Deleted review #{review_id}")

    def __len__(self) -> int:
        return len(self._rows)
