import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from faxintake.config.settings import Settings
from faxintake.database.connection import close_pool, get_connection, init_pool
from faxintake.database.schema import ensure_schema


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "authpilot_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def blob_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Blob names appended here have their records deleted after the test."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for blob_name in cleanup:
                cur.execute(
                    "DELETE FROM authorization_records WHERE blob_name = %s", (blob_name,)
                )
        conn.commit()


@pytest.fixture
def unique_blob_name(blob_cleanup: list[str], request: pytest.FixtureRequest) -> str:
    name = f"it-{request.node.name[:40]}-{os.urandom(4).hex()}/fax.pdf"
    blob_cleanup.append(name)
    return name
