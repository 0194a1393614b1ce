from functools import wraps
from typing import Any, Callable, TypeVar

from flask import g, request

from catalog_api.config.settings import settings
from catalog_api.core.access_guard import authorize
from catalog_api.core.exceptions import TokenInvalidError
from catalog_api.entities.role import Role
from catalog_api.entities.token import TokenClaims
from catalog_api.infrastructure.database.session import db_session
from catalog_api.repositories.user_repository import UserRepository
from catalog_api.services.auth_service import AuthService

F = TypeVar("F", bound=Callable[..., Any])


def _get_bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    parts = auth.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    raise TokenInvalidError("Missing bearer token")


def current_claims() -> TokenClaims:
    claims = getattr(g, "auth", None)
    if claims is None:
        raise TokenInvalidError("Missing bearer token")
    return claims


def require_auth(fn: F) -> F:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = _get_bearer_token()

        with db_session() as session:
            auth_service = AuthService(user_repo=UserRepository(session))
            g.auth = auth_service.validate_token(token, check_active=settings.jwt_check_active_user)

        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*allowed_roles: Role):
    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            authorize(current_claims(), allowed_roles)
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
