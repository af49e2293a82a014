"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.orm import Session

from jobportal.application.services.password_hashing import build_password_hasher
from jobportal.application.services.token_issuer import JwtTokenIssuer
from jobportal.application.services.user_service import UserService
from jobportal.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from jobportal.domain.users.repositories import PasswordHasher
from jobportal.infrastructure.db import SessionLocal
from jobportal.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from jobportal.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        session_factory: Callable[[], Session] | None = None,
    ) -> None:
        self._config = config
        self._session_factory = session_factory

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return build_password_hasher(self.config.auth)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(
            self._session_factory or SessionLocal,
            password_hasher=self.password_hasher,
            claims_policy=self.config.auth.claims_policy(),
        )

    @cached_property
    def user_service(self) -> UserService:
        return UserService(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer.from_config(self.config.auth)

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(users=self.user_service, token_issuer=self.token_issuer)
