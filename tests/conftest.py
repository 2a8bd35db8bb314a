"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Any

from saned.database import User, init_database, get_session
from saned.logger import StructuredLogger, reset_logger
from saned.match_store import MatchStore
from saned.repositories import MatchRepository, UserDirectory


@pytest.fixture(autouse=True)
def quiet_environment(monkeypatch, tmp_path):
    """Keep log files out of the working tree and reset the global logger."""
    monkeypatch.setenv("SANED_LOG_FILE", "0")
    monkeypatch.setenv("SANED_LOG_DIR", str(tmp_path / "logs"))
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def db_path(tmp_path) -> Path:
    path = tmp_path / "saned.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Create a temporary database and return a session."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    return StructuredLogger(
        name="saned-test",
        log_dir=tmp_path,
        enable_file=False,
        enable_console=False,
    )


@pytest.fixture
def users(db_session) -> UserDirectory:
    return UserDirectory(db_session)


@pytest.fixture
def matches(db_session) -> MatchRepository:
    return MatchRepository(db_session)


@pytest.fixture
def store(users, matches, quiet_logger) -> MatchStore:
    return MatchStore(users, matches, logger=quiet_logger)


@pytest.fixture
def make_user():
    """Factory for unsaved users with explicit ids and increasing created_at."""
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _make(user_id: str, **overrides) -> User:
        counter["n"] += 1
        fields: Dict[str, Any] = {
            "id": user_id,
            "first_name": user_id.capitalize(),
            "last_name": "Test",
            "email": f"{user_id}@example.com",
            "role": "startup",
            "organization": None,
            "location": None,
            "tags": None,
            "interests": None,
            "created_at": base + timedelta(minutes=counter["n"]),
        }
        fields.update(overrides)
        return User(**fields)

    return _make


@pytest.fixture
def add_user(users, make_user):
    """Factory that persists users through the directory."""

    def _add(user_id: str, **overrides) -> User:
        return users.add(make_user(user_id, **overrides))

    return _add


@pytest.fixture
def valid_profile() -> Dict[str, Any]:
    """Valid user profile payload."""
    return {
        "first_name": "Ahmed",
        "last_name": "Al-Farsi",
        "email": "ahmed@techstartup.sa",
        "role": "startup",
        "organization": "EcoTech Solutions",
        "location": "Jeddah",
        "tags": ["sustainability", "cleantech", "urban"],
        "interests": ["Green Energy"],
    }
