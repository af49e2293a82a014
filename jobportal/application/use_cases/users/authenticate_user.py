# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from jobportal.application.services.token_issuer import JwtTokenIssuer
from jobportal.application.services.user_service import UserService
from jobportal.domain.users.entities import AccessToken
from jobportal.shared.logging import logger


class AuthenticateUserUseCase:
    def __init__(self, *, users: UserService, token_issuer: JwtTokenIssuer) -> None:
        self._users = users
        self._token_issuer = token_issuer

    def execute(self, email: str, password: str) -> AccessToken:
        claims = self._users.user_login(email, password)
        token = self._token_issuer.issue(claims)
        logger.info(
            f"auth.login: ok subject={claims.subject} expires_at={claims.expires_at.isoformat()}"
        )
        return AccessToken(token=token, claims=claims)
