"""
Pytest configuration and shared fixtures for the contact reconciliation tests.

Every test gets its own sqlite file under tmp_path; nothing touches the
configured contacts.db.
"""
import pytest

from db_setup import get_db_connection, init_db
from settings import settings


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the store at a fresh, initialised database."""
    path = str(tmp_path / "contacts.db")
    monkeypatch.setattr(settings, "database_path", path)
    init_db(path)
    return path


@pytest.fixture
def all_rows(db_path):
    """Return a callable listing every Contact row, by id."""
    def _rows():
        conn = get_db_connection(db_path)
        try:
            rows = conn.execute("SELECT * FROM Contact ORDER BY id").fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()
    return _rows
