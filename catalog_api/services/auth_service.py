# catalog_api/services/auth_service.py

import logging
from dataclasses import dataclass

from catalog_api.core.base_repository import utcnow
from catalog_api.core.exceptions import AuthenticationFailedError, TokenInvalidError
from catalog_api.entities.token import IssuedToken, TokenClaims
from catalog_api.infrastructure.database.models.user_model import UserModel
from catalog_api.infrastructure.security.jwt_provider import JwtProvider
from catalog_api.infrastructure.security.password_hasher import PasswordHasher
from catalog_api.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: UserModel
    token: IssuedToken


class AuthService:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        jwt_provider: JwtProvider | None = None,
        hasher: PasswordHasher | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._jwt = jwt_provider or JwtProvider()
        self._hasher = hasher or PasswordHasher()

    def verify_credentials(self, *, email: str, password: str) -> UserModel:
        # unknown email and wrong password must look the same from outside
        user = self._user_repo.find_active_by_email(email.strip())
        if user is None:
            self._hasher.burn(password)
            logger.warning("Login failed for email=%s", email)
            raise AuthenticationFailedError()

        ok = self._hasher.verify_password(
            password,
            password_hash=user.password_hash,
            password_salt=user.password_salt,
            iterations=user.password_iterations,
            algo=user.password_algo,
        )
        if not ok:
            logger.warning("Login failed for email=%s", email)
            raise AuthenticationFailedError()

        return user

    def login(self, *, email: str, password: str) -> LoginResult:
        user = self.verify_credentials(email=email, password=password)

        user.last_login = utcnow()
        self._user_repo.save(user)

        token = self._jwt.issue(user)
        logger.info("User logged in id=%s", user.id)
        return LoginResult(user=user, token=token)

    def validate_token(self, token: str, *, check_active: bool = False) -> TokenClaims:
        claims = self._jwt.validate(token)
        if check_active:
            user = self._user_repo.find_active_by_email(claims.email)
            if user is None or str(user.id) != claims.user_id:
                raise TokenInvalidError()
        return claims
