from datetime import timedelta

import pytest

from catalog_api.core.exceptions import AuthenticationFailedError, TokenInvalidError
from catalog_api.entities.role import Role
from catalog_api.infrastructure.security.jwt_provider import JwtProvider
from catalog_api.services.auth_service import AuthService
from catalog_api.services.user_service import UserService

pytestmark = pytest.mark.unit


@pytest.fixture
def users(user_repo) -> UserService:
    return UserService(user_repo)


@pytest.fixture
def auth(user_repo) -> AuthService:
    return AuthService(user_repo=user_repo, jwt_provider=JwtProvider(secret="s3cret", ttl=timedelta(minutes=5)))


@pytest.fixture
def registered(users):
    return users.create_user(email="a@x.com", password="pw123", first_name="Ada", last_name="L")


def test_login_issues_user_token(auth, registered):
    result = auth.login(email="a@x.com", password="pw123")

    claims = auth.validate_token(result.token.token)
    assert claims.user_id == registered.id
    assert claims.email == "a@x.com"
    assert claims.role is Role.USER
    assert result.user.last_login is not None


def test_wrong_password_and_unknown_email_look_the_same(auth, registered):
    with pytest.raises(AuthenticationFailedError) as wrong_pw:
        auth.verify_credentials(email="a@x.com", password="wrongpw")
    with pytest.raises(AuthenticationFailedError) as unknown:
        auth.verify_credentials(email="nobody@x.com", password="pw123")

    assert str(wrong_pw.value) == str(unknown.value) == "Invalid email or password"
    assert wrong_pw.value.status_code == unknown.value.status_code == 401


def test_deactivated_user_cannot_log_in(auth, users, registered):
    users.delete_user(registered.id)

    with pytest.raises(AuthenticationFailedError):
        auth.login(email="a@x.com", password="pw123")


def test_token_outlives_deactivation_unless_checked(auth, users, registered):
    token = auth.login(email="a@x.com", password="pw123").token.token
    users.delete_user(registered.id)

    assert auth.validate_token(token).user_id == registered.id
    with pytest.raises(TokenInvalidError):
        auth.validate_token(token, check_active=True)
