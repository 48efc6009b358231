"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Any

from fastapi.testclient import TestClient

from jobly.api.app import create_app
from jobly.auth import create_token
from jobly.config import reset_settings
from jobly.database import Database, close_database
from jobly.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Deterministic settings; nothing read from a developer's .env."""
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh console-less logger per test, so metrics start at zero."""
    reset_logger()
    get_logger(enable_console=False)
    yield
    reset_logger()


@pytest.fixture(autouse=True)
def no_global_database():
    yield
    close_database()


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db(db_url) -> Database:
    """Empty database with tables created."""
    database = Database(db_url)
    database.create_tables()
    yield database
    database.close()


@pytest.fixture
def seeded_db(db) -> Database:
    """
    Three companies (c1..c3 with 1..3 employees). c1 has four jobs;
    c2 and c3 have none.
    """
    for n in (1, 2, 3):
        db.query(
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [f"c{n}", f"C{n}", f"Desc{n}", n, f"http://c{n}.img"],
        )
    for title, salary, equity in [
        ("Job1", 100, "0.1"),
        ("Job2", 200, "0.2"),
        ("Job3", 300, "0"),
        ("Job4", None, None),
    ]:
        db.query(
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, 'c1')""",
            [title, salary, equity],
        )
    return db


@pytest.fixture
def job_ids(seeded_db) -> Dict[str, int]:
    """Title -> generated id for the seeded jobs."""
    rows = seeded_db.query("SELECT id, title FROM jobs")
    return {row["title"]: row["id"] for row in rows}


@pytest.fixture
def client(seeded_db, db_url) -> TestClient:
    """API client against the seeded database."""
    with TestClient(create_app(db_url)) as c:
        yield c


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_token('admin', is_admin=True)}"}


@pytest.fixture
def user_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_token('u1', is_admin=False)}"}


@pytest.fixture
def new_company() -> Dict[str, Any]:
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 10,
        "logoUrl": "http://new.img",
    }
