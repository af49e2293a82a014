# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jobportal.domain.users.entities import Claims, LoginCredentials, NewUser, User
from jobportal.domain.users.repositories import PasswordHasher, UserRepository


class UserService:
    """Registration and login on top of an injected user repository.

    The service owns the hashing step only. Storage, credential checks and
    claim construction belong to the repository, whose results and errors are
    passed through untouched.
    """

    def __init__(
        self,
        *,
        users: UserRepository | None,
        password_hasher: PasswordHasher,
    ) -> None:
        if users is None:
            raise ValueError("user repository is required")
        self._users = users
        self._password_hasher = password_hasher

    def create_user(self, new_user: NewUser) -> User:
        hashed = self._password_hasher.hash(new_user.password)
        record = User(name=new_user.name, email=new_user.email, password_hash=hashed)
        return self._users.create_user(record)

    def user_login(self, email: str, password: str) -> Claims:
        return self._users.user_login(LoginCredentials(email=email, password=password))
