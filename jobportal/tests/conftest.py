from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

# Module-level engine and config are built on first import; point them at
# throwaway locations before any jobportal module is loaded.
_TMP = Path(tempfile.mkdtemp(prefix="jobportal-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP / 'default.db'}")
os.environ.setdefault("LOG_FILE", str(_TMP / "jobportal.log"))
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from jobportal.infrastructure.db import build_engine, build_session_factory, init_db  # noqa: E402
from jobportal.shared.config import DatabaseConfig, load_config  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture()
def session_factory(tmp_path: Path) -> Iterator[sessionmaker[Session]]:
    engine = build_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'users.db'}"))
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()
