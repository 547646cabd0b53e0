"""
db/init_db.py
-------------
Explicit administrative schema setup for the reviews table.
The service never runs this on its own; run it against a fresh database:
    python -m db.init_db
    python -m db.init_db --drop     # destructive, development only
"""

import argparse

from config import DATABASE_URL
from db.connection import ConnectionPool
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Reviews table: one row per movie review
CREATE TABLE IF NOT EXISTS public.reviews (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR NOT NULL,
    director        VARCHAR NOT NULL,
    rating          VARCHAR NOT NULL,
    releaseDate     VARCHAR NOT NULL,
    reviewNotes     VARCHAR NOT NULL,
    dateCreated     VARCHAR NOT NULL
);
"""

DROP_SQL = "DROP TABLE IF EXISTS public.reviews;"


def _run(db_pool: ConnectionPool, sql: str) -> None:
    conn = db_pool.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    except Exception as e:
        conn.rollback()
        logger.error(f"Schema statement failed: {e}")
        raise
    finally:
        db_pool.release_connection(conn)


def create_tables(db_pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create the reviews table.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run(db_pool, SCHEMA_SQL)
    logger.info("Reviews table created.")


def drop_tables(db_pool: ConnectionPool) -> None:
    """
    Remove the reviews table.
    WARNING: permanently deletes all review data.
    """
    _run(db_pool, DROP_SQL)
    logger.warning("Reviews table dropped.")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create or drop the reviews table.")
    parser.add_argument("--drop", action="store_true", help="drop the reviews table instead of creating it")
    args = parser.parse_args(argv)

    db_pool = ConnectionPool(DATABASE_URL, max_open=1, max_idle=1)
    db_pool.init()
    try:
        if args.drop:
            drop_tables(db_pool)
        else:
            create_tables(db_pool)
    finally:
        db_pool.close()


if __name__ == "__main__":
    main()
