"""Password hashing strategies."""

from __future__ import annotations

from typing import ClassVar

import bcrypt
from werkzeug.security import check_password_hash, generate_password_hash

from jobportal.domain.users.exceptions import HashingError
from jobportal.domain.users.repositories import PasswordHasher
from jobportal.shared.config import AuthConfig


class BcryptPasswordHasher(PasswordHasher):
    # bcrypt only consumes the first 72 bytes of its input.
    MAX_PASSWORD_BYTES: ClassVar[int] = 72

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        encoded = password.encode("utf-8")
        if len(encoded) > self.MAX_PASSWORD_BYTES:
            raise HashingError(f"password exceeds {self.MAX_PASSWORD_BYTES} bytes")
        try:
            return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._rounds)).decode("ascii")
        except (ValueError, TypeError) as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("ascii"))
        except (ValueError, TypeError, UnicodeEncodeError):
            return False


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(self, method: str = "scrypt") -> None:
        self._method = method

    def hash(self, password: str) -> str:
        try:
            return str(generate_password_hash(password, method=self._method))
        except (ValueError, TypeError) as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            return False


def build_password_hasher(config: AuthConfig) -> PasswordHasher:
    scheme = config.password_hash_scheme
    if scheme == "bcrypt":
        return BcryptPasswordHasher(rounds=config.bcrypt_rounds)
    if scheme == "werkzeug":
        return WerkzeugPasswordHasher(method=config.werkzeug_method)
    raise ValueError(f"Unsupported password hash scheme: {scheme!r}")
