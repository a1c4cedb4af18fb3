import os
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from casepaper.config.settings import Settings
from casepaper.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "casepaper" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "casepaper_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def clinic_id(integration_pool: None) -> Generator[str, None, None]:
    """A clinic id unique to the test; rows under it are removed afterwards."""
    clinic = f"clinic-{uuid.uuid4()}"
    yield clinic
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM ocr_results WHERE clinic_id LIKE %s", (f"{clinic}%",))
            cur.execute("DELETE FROM ocr_uploads WHERE clinic_id LIKE %s", (f"{clinic}%",))
        conn.commit()
