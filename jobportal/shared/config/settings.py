# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobportal.domain.users.entities import ClaimsPolicy

_INSECURE_SECRETS = ("dev", "development", "test", "change-me", "")


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///jobportal.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)


class AuthConfig(BaseSettings):
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_issuer: str = Field("job portal project", alias="JWT_ISSUER")
    # Comma separated; kept as a string so the env value is not JSON-decoded.
    jwt_audience: str = Field("users", alias="JWT_AUDIENCE")
    jwt_ttl_seconds: int = Field(3600, ge=1, alias="JWT_TTL_SECONDS")
    jwt_leeway_seconds: int = Field(0, ge=0, alias="JWT_LEEWAY_SECONDS")
    password_hash_scheme: str = Field("bcrypt", alias="PASSWORD_HASH_SCHEME")
    bcrypt_rounds: int = Field(12, ge=4, le=31, alias="BCRYPT_ROUNDS")
    werkzeug_method: str = Field("scrypt", alias="WERKZEUG_METHOD")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)

    @field_validator("password_hash_scheme", mode="before")
    @classmethod
    def _normalise_scheme(cls, value: str) -> str:
        return str(value).strip().lower()

    @model_validator(mode="after")
    def _require_audience(self) -> "AuthConfig":
        if not self.audiences:
            raise ValueError("JWT_AUDIENCE must name at least one audience")
        return self

    @property
    def audiences(self) -> tuple[str, ...]:
        return tuple(item.strip() for item in self.jwt_audience.split(",") if item.strip())

    def claims_policy(self) -> ClaimsPolicy:
        return ClaimsPolicy(
            issuer=self.jwt_issuer,
            audience=self.audiences,
            ttl=timedelta(seconds=self.jwt_ttl_seconds),
        )


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.jwt_secret in _INSECURE_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure JWT_SECRET detected in production!\n"
                "   JWT_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.database.url.startswith("sqlite"):
            print(
                "\n⚠️  PRODUCTION WARNING: DATABASE_URL points at SQLite.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_logging else self.log_level.upper()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "load_config"]
