"""
Pytest fixtures for API key manager tests
"""
import os
import tempfile

import pytest


@pytest.fixture
def app():
    """Create application for testing"""
    # Use a temporary database for tests
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    # Set environment variables before building the app
    os.environ['DATABASE_PATH'] = db_path
    os.environ['SECRET_KEY'] = 'test-secret-key-for-testing'

    from keymanager import create_app
    from keymanager.config import TestingConfig
    from keymanager.db import init_db

    flask_app = create_app(TestingConfig)
    flask_app.config.update({
        'TESTING': True,
        'RATELIMIT_ENABLED': False,
    })

    # Initialize the test database
    init_db()

    yield flask_app

    # Cleanup
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def authenticated_client(app):
    """Test client whose requests carry the gateway user header for u1"""
    client = app.test_client()
    client.environ_base['HTTP_X_USER_ID'] = 'u1'
    return client


@pytest.fixture
def other_client(app):
    """Test client acting as a second user, u2"""
    client = app.test_client()
    client.environ_base['HTTP_X_USER_ID'] = 'u2'
    return client


@pytest.fixture
def manager(app):
    """Key manager bound to the test database"""
    return app.extensions['key_manager']


@pytest.fixture
def runner(app):
    """Create a CLI test runner"""
    return app.test_cli_runner()
