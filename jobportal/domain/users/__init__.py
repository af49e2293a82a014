# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AccessToken, Claims, ClaimsPolicy, LoginCredentials, NewUser, User
from .exceptions import (
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserAlreadyExistsError,
)
from .repositories import PasswordHasher, UserRepository

__all__ = [
    "AccessToken",
    "Claims",
    "ClaimsPolicy",
    "HashingError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginCredentials",
    "NewUser",
    "PasswordHasher",
    "TokenExpiredError",
    "User",
    "UserAlreadyExistsError",
    "UserRepository",
]
