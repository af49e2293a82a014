# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobportal.domain.users.entities import Claims, ClaimsPolicy, LoginCredentials
from jobportal.domain.users.entities import User as DomainUser
from jobportal.domain.users.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from jobportal.domain.users.repositories import PasswordHasher, UserRepository
from jobportal.infrastructure.db.models import User
from jobportal.infrastructure.unit_of_work import unit_of_work_scope
from jobportal.shared.errors import RepositoryError
from jobportal.shared.logging import logger


def _normalise_email(email: str) -> str:
    return email.strip().lower()


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at is not None and created_at.tzinfo is None:
        # SQLite drops the offset on the way back.
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        password_hasher: PasswordHasher,
        claims_policy: ClaimsPolicy | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._password_hasher = password_hasher
        self._claims_policy = claims_policy or ClaimsPolicy()
        self._dummy_hash: str | None = None

    def create_user(self, record: DomainUser) -> DomainUser:
        email = _normalise_email(record.email)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                if self._find_by_email(session, email) is not None:
                    raise UserAlreadyExistsError(context={"email": email})
                row = User(name=record.name, email=email, password_hash=record.password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                created = _to_domain(row)
        except IntegrityError as exc:
            logger.warning("users.create: unique constraint hit on insert")
            raise UserAlreadyExistsError(context={"email": email}) from exc
        except SQLAlchemyError as exc:
            logger.exception("users.create: database failure")
            raise RepositoryError("create_user", type(exc).__name__) from exc

        logger.info(f"users.create: ok id={created.id}")
        return created

    def user_login(self, credentials: LoginCredentials) -> Claims:
        email = _normalise_email(credentials.email)
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = self._find_by_email(session, email)
                user = _to_domain(row) if row is not None else None
        except SQLAlchemyError as exc:
            logger.exception("users.login: database failure")
            raise RepositoryError("user_login", type(exc).__name__) from exc

        # Unknown emails are verified against a placeholder hash as well.
        hashed = user.password_hash if user is not None else self._unknown_user_hash()
        if not self._password_hasher.verify(credentials.password, hashed) or user is None:
            logger.info(f"users.login: rejected email={email}")
            raise InvalidCredentialsError()

        return self._claims_policy.issue(str(user.id), now=datetime.now(UTC))

    def _unknown_user_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    @staticmethod
    def _find_by_email(session: Session, email: str) -> User | None:
        stmt = select(User).where(func.lower(User.email) == email)
        return session.execute(stmt).scalar_one_or_none()
