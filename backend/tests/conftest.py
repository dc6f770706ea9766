import os
import sys
import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:5173']
    MIN_PASSWORD_LENGTH = 6
    # Keep hashing fast in tests
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    # Only hold a context while building and dropping tables; test client
    # requests must each get their own context and `g`
    with application.app_context():
        # Ensure models are imported so tables are created
        import scoreboard.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_ctx(flask_app):
    """An application context for calling the engine directly."""
    with flask_app.app_context():
        yield flask_app
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def register(test_client, email='player@example.com', password='secret123', display_name=None):
    payload = {'email': email, 'password': password}
    if display_name:
        payload['displayName'] = display_name
    return test_client.post('/api/auth/register', json=payload)


@pytest.fixture()
def auth_client(flask_app):
    """A test client with a freshly registered, logged in user."""
    test_client = flask_app.test_client()
    res = register(test_client)
    assert res.status_code == 201
    return test_client
