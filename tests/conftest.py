import base64

import pytest
from fastapi.testclient import TestClient

from task_system.app import create_app
from task_system.auth_service import AuthenticationService
from task_system.config import Config
from task_system.repositories import TaskRepository, UserRepository
from task_system.security import PasswordAuthenticator
from task_system.task_service import TaskService
from task_system.user_service import UserService

TEST_SIGNING_KEY = base64.b64encode(b"test-signing-key-that-is-32-bytes!").decode()


class TestConfig(Config):
    __test__ = False  # not a test class, despite the name

    DATABASE_URL = "sqlite://"
    TOKEN_SIGNING_KEY = TEST_SIGNING_KEY
    TOKEN_EXPIRE_MINUTES = 60
    BCRYPT_ROUNDS = 4
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 50


@pytest.fixture()
def app():
    # fresh in-memory database per test
    app = create_app(TestConfig)
    yield app
    app.state.engine.dispose()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture()
def token_service(app):
    return app.state.token_service


@pytest.fixture()
def user_service(db):
    return UserService(UserRepository(db))


@pytest.fixture()
def auth_service(app, user_service, token_service):
    authenticator = PasswordAuthenticator(user_service, app.state.pwd_context)
    return AuthenticationService(user_service, token_service, authenticator)


@pytest.fixture()
def task_service(db, user_service):
    return TaskService(TaskRepository(db), user_service)


@pytest.fixture()
def make_user(auth_service, token_service):
    """Sign a user up and return the identity carried by their token."""

    def _make(email, username="someone", password="secret123"):
        token = auth_service.sign_up(email, username, password)
        return token_service.extract_user(token)

    return _make


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def signup(client, email, username="someone", password="secret123"):
    r = client.post("/auth/signup", json={"email": email, "username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]
