"""
Environment-based settings.

Every value is read when requested so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def db_pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def db_pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1)


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 8080)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def http_logging_enabled() -> bool:
    return _env_str("HTTP_LOGGING", "on").lower() != "off"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def migrations_dir() -> str:
    return _env_str("MIGRATIONS_DIR", "db/migrations")


def wait_interval_s() -> float:
    return _env_float("WAIT_INTERVAL_S", 5.0)


def wait_timeout_s() -> float:
    return _env_float("WAIT_TIMEOUT_S", 300.0)


DEFAULT_LOADTEST_SIZES = (1000, 5000, 10000, 50000)


def loadtest_sizes() -> list[int]:
    raw = os.environ.get("LOADTEST_SIZES", "").strip()
    sizes = []
    for part in raw.split(","):
        try:
            size = int(part)
        except ValueError:
            continue
        if size > 0:
            sizes.append(size)
    return sizes or list(DEFAULT_LOADTEST_SIZES)
