"""
Shared pytest fixtures for Finance Tracker tests.
"""

import pytest
import os
import sys
from datetime import date
from unittest.mock import MagicMock

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storage import Storage


class TestConfig:
    """Test configuration backed by in-memory storage - no real MySQL needed."""
    SECRET_KEY = 'test-secret-key-for-testing-only'
    TESTING = True
    STORAGE_BACKEND = 'memory'
    DEFAULT_CURRENCY = 'USD'
    LOG_LEVEL = 'WARNING'

    @staticmethod
    def init_db(app):
        app.storage = Storage.in_memory()


def make_mock_connection():
    """Create a mock MySQL connection with cursor context manager."""
    conn = MagicMock()
    cursor = MagicMock()
    cursor.__enter__ = MagicMock(return_value=cursor)
    cursor.__exit__ = MagicMock(return_value=False)
    conn.cursor.return_value = cursor
    return conn, cursor


def this_month(day=1):
    today = date.today()
    return today.replace(day=day)


def last_month(day=1):
    first = date.today().replace(day=1)
    if first.month == 1:
        return first.replace(year=first.year - 1, month=12, day=day)
    return first.replace(month=first.month - 1, day=day)


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def storage(app):
    """The in-memory storage behind the test app."""
    return app.storage


@pytest.fixture
def mock_pool():
    """Provide a mock connection pool with its connection and cursor."""
    conn, cursor = make_mock_connection()
    pool = MagicMock()
    pool.get_connection.return_value = conn
    return pool, conn, cursor
