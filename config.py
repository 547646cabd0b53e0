"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
Defaults are suitable for a local development database.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "postgres")
DB_USER: str = os.getenv("DB_USER", "postgres")
DB_PASSWORD: str = os.getenv("DB_PASSWORD", "test")
DB_SSLMODE: str = os.getenv("DB_SSLMODE", "disable")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    f"?sslmode={DB_SSLMODE}"
)

# ── Connection Pool ───────────────────────────────────────
DB_MAX_OPEN_CONNS: int = int(os.getenv("DB_MAX_OPEN_CONNS", "25"))
DB_MAX_IDLE_CONNS: int = int(os.getenv("DB_MAX_IDLE_CONNS", "5"))
DB_CONN_MAX_LIFETIME_SECONDS: float = float(os.getenv("DB_CONN_MAX_LIFETIME_SECONDS", "300"))
DB_OPERATION_TIMEOUT_SECONDS: float = float(os.getenv("DB_OPERATION_TIMEOUT_SECONDS", "10"))

# 'postgres' | 'memory'
STORE_BACKEND: str = os.getenv("STORE_BACKEND", "postgres").lower()

# ── HTTP Server ───────────────────────────────────────────
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8080"))
API_KEEPALIVE_SECONDS: int = int(os.getenv("API_KEEPALIVE_SECONDS", "60"))
SHUTDOWN_GRACE_SECONDS: int = int(os.getenv("SHUTDOWN_GRACE_SECONDS", "30"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
