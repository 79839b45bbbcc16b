"""Configuration module for the Prompt Curator application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from prompt_curator.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    SERVER_HOST: str
    SERVER_PORT: int
    RPC_PREFIX: str
    CORS_ORIGINS: tuple[str, ...]
    API_BASE_URL: str
    CLIENT_TIMEOUT_SECONDS: float
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))
    server_port = int(os.getenv("SERVER_PORT", "2022"))
    rpc_prefix = "/" + os.getenv("RPC_PREFIX", "/rpc").strip().strip("/")

    config = Config(
        APP_NAME="Prompt Curator",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./prompt_curator.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(os.getenv("DB_CONNECTIVITY_REQUIRED"), default=False),
        SERVER_HOST=os.getenv("SERVER_HOST", "0.0.0.0"),
        SERVER_PORT=server_port,
        RPC_PREFIX=rpc_prefix,
        CORS_ORIGINS=_as_list(os.getenv("CORS_ORIGINS"), default=("*",)),
        API_BASE_URL=os.getenv("API_BASE_URL", f"http://localhost:{server_port}{rpc_prefix}").rstrip("/"),
        CLIENT_TIMEOUT_SECONDS=float(os.getenv("CLIENT_TIMEOUT_SECONDS", "10")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", "prompt_curator.log"),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if not 1 <= config.SERVER_PORT <= 65535:
        raise ConfigurationError("SERVER_PORT must be between 1 and 65535.")
    if config.RPC_PREFIX == "/":
        raise ConfigurationError("RPC_PREFIX must not be empty.")
    if urlparse(config.API_BASE_URL).scheme not in {"http", "https"}:
        raise ConfigurationError("API_BASE_URL must be an http:// or https:// URL.")
    if config.CLIENT_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("CLIENT_TIMEOUT_SECONDS must be > 0.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "*" in config.CORS_ORIGINS:
        raise ConfigurationError("Production CORS_ORIGINS must list explicit origins.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
