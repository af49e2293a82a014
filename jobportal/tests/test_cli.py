from __future__ import annotations

import os
from pathlib import Path

import jwt
import pytest
from loguru import logger as loguru_logger
from sqlalchemy.engine import Engine

from jobportal import cli
from jobportal.cli import main
from jobportal.shared.logging import get_correlation_id


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch) -> str:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "cli.log"))
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    assert main(["--database-url", url, "init-db"]) == 0
    return url


def test_create_user_then_login_prints_token(database_url: str, capsys) -> None:
    capsys.readouterr()

    assert main([
        "--database-url", database_url,
        "create-user", "--name", "teju", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
    ]) == 0
    assert "teju@gmail.com" in capsys.readouterr().out

    assert main([
        "--database-url", database_url,
        "login", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
    ]) == 0
    token = capsys.readouterr().out.strip()

    claims = jwt.decode(
        token,
        os.environ["JWT_SECRET"],
        algorithms=["HS256"],
        audience="users",
    )
    assert claims["iss"] == "job portal project"
    assert claims["exp"] - claims["iat"] == 3600


def test_login_with_bad_password_exits_non_zero(database_url: str, capsys) -> None:
    main([
        "--database-url", database_url,
        "create-user", "--name", "teju", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
    ])
    capsys.readouterr()

    code = main([
        "--database-url", database_url,
        "login", "--email", "teju@gmail.com", "--password", "wrong",
    ])

    assert code == 1
    assert "invalid_credentials" in capsys.readouterr().err


def test_create_user_rejects_blank_name(database_url: str, capsys) -> None:
    code = main([
        "--database-url", database_url,
        "create-user", "--name", "  ", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
    ])

    assert code == 1
    assert "validation_error" in capsys.readouterr().err


def test_duplicate_user_reports_conflict(database_url: str, capsys) -> None:
    args = [
        "--database-url", database_url,
        "create-user", "--name", "teju", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
    ]
    assert main(args) == 0
    capsys.readouterr()

    assert main(args) == 1
    assert "user_already_exists" in capsys.readouterr().err


def test_each_invocation_tags_its_records_with_one_correlation_id(
    database_url: str, monkeypatch
) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    seen: list[str] = []
    sink_id = loguru_logger.add(
        lambda message: seen.append(message.record["extra"].get("correlation_id", "-")),
        level="DEBUG",
    )
    try:
        main([
            "--database-url", database_url,
            "create-user", "--name", "teju", "--email", "teju@gmail.com", "--password", "ufhudihfuih",
        ])
        first = set(seen)
        seen.clear()
        main([
            "--database-url", database_url,
            "login", "--email", "teju@gmail.com", "--password", "wrong",
        ])
        second = set(seen)
    finally:
        loguru_logger.remove(sink_id)

    assert len(first) == 1 and "-" not in first
    assert len(second) == 1 and "-" not in second
    assert first != second
    assert get_correlation_id() == "-"


def test_engine_is_disposed_after_each_command(database_url: str, monkeypatch) -> None:
    disposed: list[Engine] = []
    original = Engine.dispose

    def recording_dispose(self: Engine, *args, **kwargs) -> None:
        disposed.append(self)
        original(self, *args, **kwargs)

    monkeypatch.setattr(Engine, "dispose", recording_dispose)

    assert main(["--database-url", database_url, "init-db"]) == 0
    assert main([
        "--database-url", database_url,
        "login", "--email", "nobody@gmail.com", "--password", "ufhudihfuih",
    ]) == 1

    assert len(disposed) == 2
