"""
repositories/review_repo.py
---------------------------
PostgreSQL data access for movie reviews.
All SQL related to the `reviews` table lives here.

Statements are prepared server-side once per physical connection and
run with EXECUTE, so values are always bound by the driver and the
query plans are reused.

Every operation runs against one deadline: the pool wait gets what is left
of it, and each statement is capped with SET LOCAL statement_timeout.
"""

import time
from typing import Callable

import psycopg2
import psycopg2.errors

from db.connection import ConnectionPool
from errors import NotFoundError, PersistenceError, ReviewError, StoreTimeoutError
from models.review import Review
from repositories.base import ReviewRepository, confirmation_message
from utils.logger import get_logger

logger = get_logger(__name__)

PREPARED_STATEMENTS = {
    "review_create": """
        PREPARE review_create (text, text, text, text, text, text) AS
        INSERT INTO public.reviews (title, director, releaseDate, rating, reviewNotes, dateCreated)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING id;
    """,
    "review_update": """
        PREPARE review_update (text, text, text, text, text, integer) AS
        UPDATE public.reviews
        SET title = $1, director = $2, releaseDate = $3, rating = $4, reviewNotes = $5
        WHERE id = $6
        RETURNING dateCreated;
    """,
    "review_delete": """
        PREPARE review_delete (integer) AS
        DELETE FROM public.reviews WHERE id = $1;
    """,
    "review_get_by_id": """
        PREPARE review_get_by_id (integer) AS
        SELECT id, title, director, releaseDate, rating, reviewNotes, dateCreated
        FROM public.reviews WHERE id = $1;
    """,
}


class PostgresReviewRepository(ReviewRepository):
    """Repository for CRUD operations on the reviews table."""

    def __init__(
        self,
        pool: ConnectionPool,
        timeout: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.pool = pool
        self.timeout = timeout
        self.clock = clock

    # ── CREATE ────────────────────────────────────────────

    def create(self, review: Review) -> str:
        """
        Insert a new review record.

        Args:
            review: The Review to persist; its `id` is populated on success.

        Returns:
            Confirmation message with the creation timestamp.
        """
        deadline = self.clock() + self.timeout
        conn = self.pool.get_connection(timeout=self.timeout)
        try:
            self._ensure_prepared(conn, deadline)
            with conn.cursor() as cur:
                self._bound(cur, deadline)
                cur.execute("EXECUTE review_create (%s, %s, %s, %s, %s, %s);", (
                    review.title, review.director, review.release_date,
                    review.rating, review.review_notes, review.date_created,
                ))
                review.id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Created review #{review.id}")
            return confirmation_message(review)
        except (psycopg2.Error, StoreTimeoutError) as e:
            self._rollback(conn)
            raise self._translate(e, "failed to create review") from e
        finally:
            self.pool.release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, review_id: int) -> Review:
        """
        Fetch a single review by ID.

        Raises:
            NotFoundError: If no review has this id.
        """
        deadline = self.clock() + self.timeout
        conn = self.pool.get_connection(timeout=self.timeout)
        try:
            self._ensure_prepared(conn, deadline)
            with conn.cursor() as cur:
                self._bound(cur, deadline)
                cur.execute("EXECUTE review_get_by_id (%s);", (review_id,))
                row = cur.fetchone()
            conn.commit()
        except (psycopg2.Error, StoreTimeoutError) as e:
            self._rollback(conn)
            raise self._translate(e, "failed to get review") from e
        finally:
            self.pool.release_connection(conn)
        if row is None:
            raise NotFoundError(f"review with id {review_id} not found")
        return Review.from_row(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, review: Review) -> None:
        """
        Update an existing review record.

        Args:
            review: Review with updated fields (must have id set).

        Raises:
            NotFoundError: If no review has this id.
        """
        deadline = self.clock() + self.timeout
        conn = self.pool.get_connection(timeout=self.timeout)
        try:
            self._ensure_prepared(conn, deadline)
            with conn.cursor() as cur:
                self._bound(cur, deadline)
                cur.execute("EXECUTE review_update (%s, %s, %s, %s, %s, %s);", (
                    review.title, review.director, review.release_date,
                    review.rating, review.review_notes, review.id,
                ))
                row = cur.fetchone()
            conn.commit()
        except (psycopg2.Error, StoreTimeoutError) as e:
            self._rollback(conn)
            raise self._translate(e, f"failed to update review #{review.id}") from e
        finally:
            self.pool.release_connection(conn)
        if row is None:
            raise NotFoundError(f"review with id {review.id} not found")
        review.date_created = row[0]

    # ── DELETE ────────────────────────────────────────────

    def delete(self, review_id: int) -> None:
        """
        Delete a review by ID.

        Raises:
            NotFoundError: If no review has this id.
        """
        deadline = self.clock() + self.timeout
        conn = self.pool.get_connection(timeout=self.timeout)
        try:
            self._ensure_prepared(conn, deadline)
            with conn.cursor() as cur:
                self._bound(cur, deadline)
                cur.execute("EXECUTE review_delete (%s);", (review_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        except (psycopg2.Error, StoreTimeoutError) as e:
            self._rollback(conn)
            raise self._translate(e, f"failed to delete review #{review_id}") from e
        finally:
            self.pool.release_connection(conn)
        if not deleted:
            raise NotFoundError(f"review with id {review_id} not found")
        logger.info(f"Deleted review #{review_id}")

    def close(self) -> None:
        self.pool.close()

    # ── HELPERS ───────────────────────────────────────────

    def _bound(self, cur, deadline: float) -> None:
        """Cap the next statement at the time left before the deadline."""
        remaining = deadline - self.clock()
        if remaining <= 0:
            raise StoreTimeoutError("operation deadline exceeded")
        # statement_timeout = 0 would mean no limit at all
        cur.execute("SET LOCAL statement_timeout = %s;", (max(1, int(remaining * 1000)),))

    def _ensure_prepared(self, conn, deadline: float) -> None:
        """Prepare all statements on this session the first time it is used."""
        if getattr(conn, "prepared", False):
            return
        with conn.cursor() as cur:
            # Prepared statements outlive aborted transactions; start clean.
            self._bound(cur, deadline)
            cur.execute("DEALLOCATE ALL;")
            for sql in PREPARED_STATEMENTS.values():
                self._bound(cur, deadline)
                cur.execute(sql)
        conn.commit()
        conn.prepared = True

    @staticmethod
    def _rollback(conn) -> None:
        if not conn.closed:
            conn.rollback()

    @staticmethod
    def _translate(error: Exception, context: str) -> ReviewError:
        """Map a driver error or a spent deadline onto the store's failure taxonomy."""
        if isinstance(error, (psycopg2.errors.QueryCanceled, StoreTimeoutError)):
            logger.error(f"{context}: operation timed out")
            return StoreTimeoutError(f"{context}: operation timed out")
        logger.error(f"{context}: {error}")
        return PersistenceError(f"{context}: {str(error).strip()}")
