# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command line entrypoint for managing job portal accounts."""

from __future__ import annotations

import argparse
import secrets
import sys
from collections.abc import Sequence

from sqlalchemy.engine import Engine

from jobportal.container import Container
from jobportal.domain.users.entities import NewUser
from jobportal.infrastructure.db import build_engine, build_session_factory, init_db
from jobportal.shared.config import DatabaseConfig, load_config
from jobportal.shared.errors import AppError, ValidationError
from jobportal.shared.logging import (
    clear_correlation_id,
    logger,
    set_correlation_id,
    setup_logging,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobportal", description="Job portal account tools")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this invocation",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the database schema")

    create = sub.add_parser("create-user", help="Register a new user")
    create.add_argument("--name", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", required=True)

    login = sub.add_parser("login", help="Verify credentials and print an access token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)
    return parser


def _require(value: str, field: str) -> str:
    if not value.strip():
        raise ValidationError(field=field, context={"reason": "must not be empty"})
    return value


def _run(args: argparse.Namespace) -> int:
    config = load_config()
    database = config.database
    if args.database_url:
        database = DatabaseConfig(url=args.database_url)
    engine = build_engine(database)
    container = Container(config=config, session_factory=build_session_factory(engine))
    try:
        return _dispatch(args, engine, container)
    finally:
        engine.dispose()


def _dispatch(args: argparse.Namespace, engine: Engine, container: Container) -> int:
    if args.command == "init-db":
        init_db(engine)
        print("Database schema ready")
        return 0

    if args.command == "create-user":
        new_user = NewUser(
            name=_require(args.name, "name"),
            email=_require(args.email, "email"),
            password=_require(args.password, "password"),
        )
        user = container.user_service.create_user(new_user)
        logger.info(f"cli.create_user: ok id={user.id}")
        print(f"Created user {user.id} <{user.email}>")
        return 0

    access = container.authenticate_user_use_case.execute(
        _require(args.email, "email"), _require(args.password, "password")
    )
    print(access.token)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = load_config()
    setup_logging(args.log_level or config.effective_log_level(), log_file=config.log_file)
    set_correlation_id(secrets.token_urlsafe(8))
    try:
        return _run(args)
    except AppError as exc:
        logger.warning(f"cli.{args.command}: {exc.code}")
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        clear_correlation_id()


if __name__ == "__main__":
    sys.exit(main())
