"""
Shared pytest fixtures.

Environment variables are set before the package is imported so the
module-level settings pick up an in-memory SQLite database, a test signing
key and a cheap PBKDF2 iteration count.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-entropy"
os.environ["PASSWORD_ITERATIONS"] = "1000"
os.environ["AUTO_CREATE_SCHEMA"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402

from catalog_api.entities.role import Role  # noqa: E402
from catalog_api.infrastructure.database.session import (  # noqa: E402
    create_schema,
    db_session,
    drop_schema,
    new_session,
)
from catalog_api.main import create_app  # noqa: E402
from catalog_api.repositories.product_repository import ProductRepository  # noqa: E402
from catalog_api.repositories.user_repository import UserRepository  # noqa: E402
from catalog_api.services.user_service import UserService  # noqa: E402

DEFAULT_PASSWORD = "pw123"


@pytest.fixture(scope="session")
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture(autouse=True)
def clean_db(app):
    drop_schema()
    create_schema()
    yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session():
    s = new_session()
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def user_repo(session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def product_repo(session) -> ProductRepository:
    return ProductRepository(session)


@pytest.fixture
def create_account():
    """Persist (and commit) a user, optionally promoted to another role."""

    def _create(email: str, password: str = DEFAULT_PASSWORD, role: Role = Role.USER, **extra) -> str:
        with db_session() as s:
            service = UserService(UserRepository(s))
            user = service.create_user(
                email=email,
                password=password,
                first_name=extra.pop("first_name", "Test"),
                last_name=extra.pop("last_name", "User"),
                **extra,
            )
            if role != Role.USER:
                user = service.change_role(user.id, role)
            return str(user.id)

    return _create


@pytest.fixture
def login(client):
    def _login(email: str, password: str = DEFAULT_PASSWORD) -> str:
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()["token"]

    return _login


@pytest.fixture
def auth_headers(create_account, login):
    """Headers for a freshly created account with the given role."""

    def _headers(role: Role = Role.USER, email: str | None = None) -> dict:
        email = email or f"{role.value.lower()}@x.com"
        create_account(email, role=role)
        return {"Authorization": f"Bearer {login(email)}"}

    return _headers
