"""
main.py
-------
Entry point for the Movie Review API server.

Responsibilities:
    - Build the review store (PostgreSQL pool or in-memory) from config.
    - Inject it into the FastAPI application.
    - Serve with uvicorn; SIGINT/SIGTERM trigger a graceful shutdown that
      waits for in-flight requests up to SHUTDOWN_GRACE_SECONDS.

Schema setup is a separate administrative step: python -m db.init_db
"""

import uvicorn

import config
from app import create_app
from db.connection import ConnectionPool
from repositories.base import ReviewRepository
from repositories.memory_repo import MemoryReviewRepository
from repositories.review_repo import PostgresReviewRepository
from services.review_service import ReviewService
from utils.logger import get_logger

logger = get_logger(__name__)


def build_repository() -> ReviewRepository:
    """Construct the store selected by STORE_BACKEND."""
    if config.STORE_BACKEND == "memory":
        logger.warning("Using the in-memory review store; data is lost on exit.")
        return MemoryReviewRepository()
    if config.STORE_BACKEND != "postgres":
        raise ValueError(f"Unknown STORE_BACKEND {config.STORE_BACKEND!r} (expected 'postgres' or 'memory')")

    logger.info(f"Connecting to PostgreSQL at {config.DB_HOST}:{config.DB_PORT}/{config.DB_NAME}...")
    db_pool = ConnectionPool(
        config.DATABASE_URL,
        max_open=config.DB_MAX_OPEN_CONNS,
        max_idle=config.DB_MAX_IDLE_CONNS,
        max_lifetime=config.DB_CONN_MAX_LIFETIME_SECONDS,
        acquire_timeout=config.DB_OPERATION_TIMEOUT_SECONDS,
        statement_timeout=config.DB_OPERATION_TIMEOUT_SECONDS,
    )
    db_pool.init()
    return PostgresReviewRepository(db_pool, timeout=config.DB_OPERATION_TIMEOUT_SECONDS)


def main() -> None:
    """Initialize the store and run the HTTP server."""

    # ── 1. Store setup ────────────────────────────────────
    repo = build_repository()

    # ── 2. Build the application ──────────────────────────
    app = create_app(ReviewService(repo))

    # ── 3. Serve until interrupted ────────────────────────
    logger.info(f"Review API listening on {config.API_HOST}:{config.API_PORT}. Press Ctrl+C to stop.")
    uvicorn.run(
        app,
        host=config.API_HOST,
        port=config.API_PORT,
        timeout_keep_alive=config.API_KEEPALIVE_SECONDS,
        timeout_graceful_shutdown=config.SHUTDOWN_GRACE_SECONDS,
        log_level=config.LOG_LEVEL.lower(),
        # uvicorn's loggers propagate to the handler utils.logger installed
        log_config=None,
    )
    logger.info("Review API stopped.")


if __name__ == "__main__":
    main()
