# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Environment driven configuration.

Every section is its own ``BaseSettings`` so it reads its variables from the
process environment and ``.env`` independently of the others.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasktracker.shared.logging import logger

_INSECURE_SECRET_KEYS = frozenset({"", "dev", "development", "test", "changeme"})


def _as_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


Flag = Annotated[bool, BeforeValidator(_as_flag)]

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///tasktracker.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    cookie_secure: Flag = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: Literal["Lax", "Strict", "None"] = Field("Lax", alias="COOKIE_SAMESITE")
    # Any werkzeug method spec, e.g. "scrypt" or "pbkdf2:sha256:600000"
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    enable_hsts: Flag = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG


class SessionConfig(BaseSettings):
    backend: Literal["database", "memory"] = Field("database", alias="SESSION_BACKEND")
    lifetime: int = Field(24 * 60 * 60, ge=1, alias="SESSION_LIFETIME")
    cookie_name: str = Field("session_token", min_length=1, alias="SESSION_COOKIE_NAME")
    sweep_interval: float = Field(300.0, ge=0.0, alias="SESSION_SWEEP_INTERVAL")

    model_config = _SECTION_CONFIG

    @property
    def lifetime_delta(self) -> timedelta:
        return timedelta(seconds=self.lifetime)


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: Flag = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    @model_validator(mode="after")
    def _check_production(self) -> "AppConfig":
        if not self.is_production():
            return self
        if self.secret_key in _INSECURE_SECRET_KEYS:
            raise ValueError("SECRET_KEY must be set to a strong random value in production")

        if not self.security.cookie_secure:
            logger.warning("config: COOKIE_SECURE is off in production; serve over HTTPS")
        if not self.security.enable_hsts:
            logger.warning("config: ENABLE_HSTS is off in production")
        if self.session.backend == "memory":
            logger.warning("config: in-memory sessions are lost on restart")
        return self


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "DatabaseConfig", "SecurityConfig", "SessionConfig", "load_config"]
