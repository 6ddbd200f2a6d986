"""Shared pytest fixtures for all tests."""

import itertools
import sqlite3
from datetime import date

import pytest
from pathlib import Path

from config import Config, get_migrations_dir
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "tripbudget",
        db_data_dir=tmp_path / "tripbudget" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "tripbudget" / "logs",
        storage_key="trip-budget-test",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager with schema already set up.

    This fixture provides a DatabaseManager that uses an in-memory database
    with all migrations already applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn):
            self.conn = conn

        def connect(self):
            """Return a context manager for the test connection."""
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            """Return a fake path for the test database."""
            return Path(":memory:")

        def get_migrations_dir(self):
            """Get the migrations directory path."""
            return get_migrations_dir()

    class _TestConnectionContext:
        """Context manager for test database connections."""

        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db)


@pytest.fixture
def id_factory():
    """Deterministic expense ids: exp-1, exp-2, ..."""
    counter = itertools.count(1)
    return lambda: f"exp-{next(counter)}"


@pytest.fixture
def color_picker():
    """Deterministic category colors cycling through three values."""
    colors = itertools.cycle(["#111111", "#222222", "#333333"])
    return lambda: next(colors)


@pytest.fixture
def services(test_config, db_manager_with_schema, id_factory, color_picker):
    """Create a Services container with test database.

    This fixture provides access to all services with a clean test database
    and a tracker whose ids, colors and dates are deterministic.

    Returns:
        Services: Services container for testing.
    """
    return Services(
        test_config,
        db_manager=db_manager_with_schema,
        id_factory=id_factory,
        color_picker=color_picker,
        today=lambda: date(2025, 3, 14),
    )


@pytest.fixture
def tracker(services):
    """A loaded BudgetTracker backed by the test database."""
    services.tracker.load()
    return services.tracker
