# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Claims, LoginCredentials, User


class UserRepository(Protocol):
    def create_user(self, record: User) -> User: ...
    def user_login(self, credentials: LoginCredentials) -> Claims: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
