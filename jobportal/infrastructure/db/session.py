# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from jobportal.shared.config import DatabaseConfig, load_config
from jobportal.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    if config.url.startswith("sqlite"):
        # SQLite pools reject the sizing options used for server databases.
        return create_engine(
            config.url,
            echo=False,
            future=True,
            connect_args={
                "check_same_thread": False,
                "timeout": config.pool_timeout,
            },
        )
    return create_engine(
        config.url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


ENGINE: Engine = build_engine(_config.database)

SessionLocal = scoped_session(build_session_factory(ENGINE))


def init_db(engine: Engine | None = None) -> None:
    # Table classes register on Base.metadata at import.
    from jobportal.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine or ENGINE)
    logger.info("Database schema ensured")
