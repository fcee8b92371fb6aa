from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PORT: port the RPC server listens on. Default 8080
    - PERSISTENCE_BACKEND: 'sqlite' (default) or 'memory'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/todos.db'; ':memory:' for a throwaway db
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level (default: INFO)
    - LOG_FORMAT: 'text' (default) or 'json'
    """

    port: int = DEFAULT_PORT
    persistence_backend: str = "sqlite"
    sqlite_db_path: str = "./data/todos.db"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def database_url(self) -> str:
        if self.sqlite_db_path == ":memory:":
            return "sqlite://"
        return f"sqlite:///{self.sqlite_db_path}"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return DEFAULT_PORT
    if not (0 < port < 65536):
        return DEFAULT_PORT
    return port


def _parse_origins(raw: str) -> List[str]:
    """
    Split CORS_ALLOW_ORIGINS into the allow_origins list that create_app
    hands to CORSMiddleware. A lone "*", or a value with no usable entry,
    opens the RPC endpoints to browsers on any origin.
    """
    entries = [o.strip() for o in raw.split(",") if o.strip()]
    if not entries or entries == ["*"]:
        return ["*"]
    return entries


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "sqlite").strip().lower()
    if backend not in {"memory", "sqlite"}:
        # Fallback to sqlite if unsupported
        backend = "sqlite"

    log_format = _get_env("LOG_FORMAT", "text").strip().lower()
    if log_format not in {"text", "json"}:
        log_format = "text"

    return Settings(
        port=_parse_port(_get_env("PORT", str(DEFAULT_PORT))),
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/todos.db").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        log_format=log_format,
    )
