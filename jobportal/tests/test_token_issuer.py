from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from jobportal.application.services.token_issuer import JwtTokenIssuer
from jobportal.domain.users.entities import ClaimsPolicy
from jobportal.domain.users.exceptions import InvalidTokenError, TokenExpiredError
from jobportal.shared.config import AuthConfig

SECRET = "unit-test-secret-0123456789abcdef0123456789"


@pytest.fixture()
def issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret=SECRET, issuer="job portal project", audience=["users"])


def test_issue_signs_registered_claims(issuer: JwtTokenIssuer) -> None:
    claims = ClaimsPolicy().issue("1")

    token = issuer.issue(claims)

    decoded = jwt.decode(token, SECRET, algorithms=["HS256"], audience="users")
    assert decoded["iss"] == "job portal project"
    assert decoded["sub"] == "1"
    assert decoded["aud"] == ["users"]
    assert decoded["exp"] - decoded["iat"] == 3600


def test_decode_returns_original_claims(issuer: JwtTokenIssuer) -> None:
    claims = ClaimsPolicy().issue("17")

    assert issuer.decode(issuer.issue(claims)) == claims


def test_decode_rejects_expired_token(issuer: JwtTokenIssuer) -> None:
    past = datetime.now(UTC) - timedelta(hours=2)
    token = issuer.issue(ClaimsPolicy().issue("1", now=past))

    with pytest.raises(TokenExpiredError) as excinfo:
        issuer.decode(token)

    assert excinfo.value.code == "token_expired"


def test_decode_rejects_foreign_signature(issuer: JwtTokenIssuer) -> None:
    other = JwtTokenIssuer(
        secret="another-secret-0123456789abcdef0123456789",
        issuer="job portal project",
        audience=["users"],
    )
    token = other.issue(ClaimsPolicy().issue("1"))

    with pytest.raises(InvalidTokenError) as excinfo:
        issuer.decode(token)

    assert excinfo.value.context == {"reason": "InvalidSignatureError"}


def test_decode_rejects_wrong_audience(issuer: JwtTokenIssuer) -> None:
    token = issuer.issue(ClaimsPolicy(audience=("admins",)).issue("1"))

    with pytest.raises(InvalidTokenError):
        issuer.decode(token)


def test_decode_rejects_wrong_issuer(issuer: JwtTokenIssuer) -> None:
    token = issuer.issue(ClaimsPolicy(issuer="someone else").issue("1"))

    with pytest.raises(InvalidTokenError):
        issuer.decode(token)


def test_decode_requires_subject(issuer: JwtTokenIssuer) -> None:
    now = int(datetime.now(UTC).timestamp())
    token = jwt.encode(
        {"iss": "job portal project", "aud": ["users"], "iat": now, "exp": now + 60},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        issuer.decode(token)


def test_decode_rejects_garbage(issuer: JwtTokenIssuer) -> None:
    with pytest.raises(InvalidTokenError):
        issuer.decode("not.a.jwt")


def test_from_config_uses_auth_settings() -> None:
    config = AuthConfig(
        jwt_secret=SECRET,
        jwt_issuer="job portal project",
        jwt_audience="users, recruiters",
    )
    issuer = JwtTokenIssuer.from_config(config)
    claims = config.claims_policy().issue("5")

    decoded = issuer.decode(issuer.issue(claims))

    assert decoded.audience == ("users", "recruiters")


def test_empty_secret_is_rejected() -> None:
    with pytest.raises(ValueError):
        JwtTokenIssuer(secret="", issuer="job portal project", audience=["users"])
