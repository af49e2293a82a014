# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

DEFAULT_ISSUER = "job portal project"
DEFAULT_AUDIENCE = ("users",)
DEFAULT_TOKEN_TTL = timedelta(hours=1)


def _numeric_date(value: datetime) -> datetime:
    """Truncate to whole seconds in UTC, the resolution of a JWT NumericDate."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(microsecond=0)


@dataclass(slots=True, frozen=True)
class NewUser:

    name: str
    email: str
    password: str = field(repr=False)


@dataclass(slots=True, frozen=True)
class User:

    name: str
    email: str
    password_hash: str = field(repr=False)
    id: int | None = None
    created_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class LoginCredentials:

    email: str
    password: str = field(repr=False)


@dataclass(slots=True, frozen=True)
class Claims:
    """Registered JWT claims for an authenticated user."""

    issuer: str
    subject: str
    audience: tuple[str, ...]
    issued_at: datetime
    expires_at: datetime

    @property
    def lifetime(self) -> timedelta:
        return self.expires_at - self.issued_at

    def is_expired(self, now: datetime | None = None) -> bool:
        return _numeric_date(now or datetime.now(UTC)) >= self.expires_at

    def to_payload(self) -> dict[str, Any]:
        return {
            "iss": self.issuer,
            "sub": self.subject,
            "aud": list(self.audience),
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Claims:
        audience = payload.get("aud") or ()
        if isinstance(audience, str):
            audience = (audience,)
        return cls(
            issuer=str(payload["iss"]),
            subject=str(payload["sub"]),
            audience=tuple(audience),
            issued_at=datetime.fromtimestamp(int(payload["iat"]), UTC),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), UTC),
        )


@dataclass(slots=True, frozen=True)
class ClaimsPolicy:
    """How login claims are stamped: who issues them, for whom, and for how long."""

    issuer: str = DEFAULT_ISSUER
    audience: tuple[str, ...] = DEFAULT_AUDIENCE
    ttl: timedelta = DEFAULT_TOKEN_TTL

    def issue(self, subject: str, now: datetime | None = None) -> Claims:
        issued_at = _numeric_date(now or datetime.now(UTC))
        return Claims(
            issuer=self.issuer,
            subject=subject,
            audience=tuple(self.audience),
            issued_at=issued_at,
            expires_at=issued_at + self.ttl,
        )


@dataclass(slots=True, frozen=True)
class AccessToken:

    token: str = field(repr=False)
    claims: Claims
