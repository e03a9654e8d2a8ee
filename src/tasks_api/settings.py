from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

from psycopg.conninfo import make_conninfo


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - HOST / PORT: listen address for the HTTP server (default 0.0.0.0:5000)
    - DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME: PostgreSQL connection
    - DB_POOL_MIN_SIZE / DB_POOL_MAX_SIZE: connection pool bounds (default 1..10)
    - DB_POOL_TIMEOUT: seconds a statement waits to borrow a connection (default 30)
    - DB_CONNECT_TIMEOUT: seconds to wait for the first connections at startup (default 10)
    - DB_SHUTDOWN_TIMEOUT: seconds to wait for in-flight statements on shutdown (default 10)
    - SCHEMA_INIT_FATAL: 'true' to abort startup when the tasks table cannot be created
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level (default INFO)
    """

    host: str = "0.0.0.0"
    port: int = 5000
    db_host: str = "database"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "crud_db"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout: float = 30.0
    db_connect_timeout: float = 10.0
    db_shutdown_timeout: float = 10.0
    schema_init_fatal: bool = False
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def conninfo(self) -> str:
        """libpq connection string for the configured database."""
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            dbname=self.db_name,
        )


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_float(value: str, default: float) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    min_size = max(_parse_int(_get_env("DB_POOL_MIN_SIZE", "1"), 1), 0)
    max_size = max(_parse_int(_get_env("DB_POOL_MAX_SIZE", "10"), 10), 1)
    if min_size > max_size:
        min_size = max_size

    return Settings(
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "5000"), 5000),
        db_host=_get_env("DB_HOST", "database").strip(),
        db_port=_parse_int(_get_env("DB_PORT", "5432"), 5432),
        db_user=_get_env("DB_USER", "postgres"),
        db_password=_get_env("DB_PASSWORD", "postgres"),
        db_name=_get_env("DB_NAME", "crud_db"),
        db_pool_min_size=min_size,
        db_pool_max_size=max_size,
        db_pool_timeout=_parse_float(_get_env("DB_POOL_TIMEOUT", "30"), 30.0),
        db_connect_timeout=_parse_float(_get_env("DB_CONNECT_TIMEOUT", "10"), 10.0),
        db_shutdown_timeout=_parse_float(_get_env("DB_SHUTDOWN_TIMEOUT", "10"), 10.0),
        schema_init_fatal=_parse_bool(_get_env("SCHEMA_INIT_FATAL", "false"), False),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
