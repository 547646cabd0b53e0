"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool for connection reuse across
request threads, bounded by a maximum number of open connections,
a number of idle connections kept for reuse, and a maximum lifetime
per physical connection.
"""

import threading
import time

import psycopg2
from psycopg2 import extensions, pool

from errors import PersistenceError, StoreTimeoutError
from utils.logger import get_logger

logger = get_logger(__name__)


class TimedConnection(extensions.connection):
    """psycopg2 connection that remembers when it was opened."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.opened_at = time.monotonic()
        # Set by the repository once its statements are prepared on this session.
        self.prepared = False
        # Set once the connection has been handed back to the pool.
        self.reused = False


class ConnectionPool:
    """
    Bounded pool of PostgreSQL connections.

    Usage:
        db_pool = ConnectionPool(DATABASE_URL)
        db_pool.init()

        conn = db_pool.get_connection()
        try:
            ...
        finally:
            db_pool.release_connection(conn)

    Callers beyond ``max_open`` block until a connection is released or
    ``acquire_timeout`` elapses. Returned connections beyond ``max_idle``
    are closed. Reused connections older than ``max_lifetime`` are
    replaced on checkout.
    """

    def __init__(
        self,
        dsn: str,
        max_open: int = 25,
        max_idle: int = 5,
        max_lifetime: float = 300.0,
        acquire_timeout: float = 10.0,
        statement_timeout: float = 10.0,
    ):
        if max_open < 1:
            raise ValueError("max_open must be at least 1")
        self.dsn = dsn
        self.max_open = max_open
        self.max_idle = min(max_idle, max_open)
        self.max_lifetime = max_lifetime
        self.acquire_timeout = acquire_timeout
        self.statement_timeout = statement_timeout
        self._pool: pool.ThreadedConnectionPool | None = None
        self._slots = threading.BoundedSemaphore(max_open)

    def init(self) -> None:
        """
        Open the pool and verify the database is reachable.

        Raises:
            PersistenceError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(
                self.max_idle,
                self.max_open,
                self.dsn,
                connect_timeout=max(1, int(self.acquire_timeout)),
                options=f"-c statement_timeout={int(self.statement_timeout * 1000)}",
                connection_factory=TimedConnection,
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise PersistenceError("could not connect to the review database") from e

        try:
            self._ping()
        except (psycopg2.Error, PersistenceError, StoreTimeoutError) as e:
            logger.error(f"Database ping failed: {e}")
            self.close()
            raise PersistenceError("could not reach the review database") from e
        logger.info(
            f"Database connection pool initialized (max_open={self.max_open}, "
            f"max_idle={self.max_idle}, max_lifetime={self.max_lifetime}s)."
        )

    def _ping(self) -> None:
        conn = self.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
            conn.commit()
        finally:
            self.release_connection(conn)

    def get_connection(self, timeout: float | None = None):
        """
        Get a connection from the pool, waiting for a free slot if needed.

        Args:
            timeout: Seconds the whole checkout may take, waiting included.
                Defaults to ``acquire_timeout``.

        Returns:
            A psycopg2 connection object.

        Raises:
            RuntimeError: If the pool has not been initialized.
            StoreTimeoutError: If no connection is ready within the timeout.
            PersistenceError: If a new physical connection cannot be opened.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call init() first.")
        if timeout is None:
            timeout = self.acquire_timeout
        deadline = time.monotonic() + timeout
        if timeout <= 0 or not self._slots.acquire(timeout=timeout):
            logger.warning("Timed out waiting for a database connection.")
            raise StoreTimeoutError("timed out waiting for a database connection")
        try:
            conn = self._checkout()
        except Exception:
            self._slots.release()
            raise
        if time.monotonic() >= deadline:
            # Opening a new physical connection can outlast the caller's budget.
            self.release_connection(conn)
            logger.warning("Database connection became ready after the deadline.")
            raise StoreTimeoutError("timed out waiting for a database connection")
        return conn

    def _checkout(self):
        while True:
            try:
                conn = self._pool.getconn()
            except (psycopg2.Error, pool.PoolError) as e:
                logger.error(f"Failed to get a database connection: {e}")
                raise PersistenceError("could not connect to the review database") from e
            if not conn.closed and not self._expired(conn):
                return conn
            logger.debug("Discarding closed or expired database connection.")
            self._pool.putconn(conn, close=True)

    def _expired(self, conn) -> bool:
        opened_at = getattr(conn, "opened_at", None)
        # Fresh connections are never expired; max_lifetime <= 0 disables recycling.
        if opened_at is None or not conn.reused or self.max_lifetime <= 0:
            return False
        return time.monotonic() - opened_at >= self.max_lifetime

    def release_connection(self, conn) -> None:
        """
        Return a connection back to the pool.

        Args:
            conn: The psycopg2 connection to release.
        """
        try:
            if self._pool is not None and not self._pool.closed:
                conn.reused = True
                self._pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")
