"""
Shared pytest fixtures for Condo Manager tests.
"""

import pytest
import os
import sys

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import Config


class TestConfig(Config):
    """Test configuration backed by a private in-memory SQLite database."""
    __test__ = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'


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
def fresh_app():
    """A second application with its own empty database."""
    from app import create_app
    yield create_app(config_class=TestConfig)


@pytest.fixture
def fresh_client(fresh_app):
    return fresh_app.test_client()

