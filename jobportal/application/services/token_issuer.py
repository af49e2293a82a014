"""Signing and verification of login claims as JWT access tokens."""

from __future__ import annotations

from collections.abc import Sequence

import jwt

from jobportal.domain.users.entities import Claims
from jobportal.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from jobportal.shared.config import AuthConfig

_REQUIRED_CLAIMS = ["iss", "sub", "aud", "iat", "exp"]


class JwtTokenIssuer:
    def __init__(
        self,
        *,
        secret: str,
        issuer: str,
        audience: Sequence[str],
        algorithm: str = "HS256",
        leeway: int = 0,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._audience = list(audience)
        self._algorithm = algorithm
        self._leeway = leeway

    @classmethod
    def from_config(cls, config: AuthConfig) -> JwtTokenIssuer:
        return cls(
            secret=config.jwt_secret,
            issuer=config.jwt_issuer,
            audience=config.audiences,
            algorithm=config.jwt_algorithm,
            leeway=config.jwt_leeway_seconds,
        )

    def issue(self, claims: Claims) -> str:
        return jwt.encode(claims.to_payload(), self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Claims:
        """Verify ``token`` and return its claims.

        Raises ``TokenExpiredError`` once ``exp`` has passed and
        ``InvalidTokenError`` for any other signature or claim failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                leeway=self._leeway,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(context={"reason": type(exc).__name__}) from exc
        return Claims.from_payload(payload)
