# catalog_api/infrastructure/security/jwt_provider.py

from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

import jwt

from catalog_api.config.settings import settings
from catalog_api.core.exceptions import TokenInvalidError
from catalog_api.entities.role import Role
from catalog_api.entities.token import IssuedToken, TokenClaims
from catalog_api.infrastructure.database.models.user_model import UserModel

REQUIRED_CLAIMS = ["exp", "iat", "sub", "jti", "email", "role"]


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class JwtProvider:
    """
    Stateless access tokens. A token stays valid until exp even if the account
    is deactivated afterwards; nothing is stored server side.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        *,
        secret: str | None = None,
        issuer: str | None = None,
        audience: str | None = None,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._secret = secret or settings.jwt_secret
        self._issuer = issuer or settings.jwt_issuer
        self._audience = audience or settings.jwt_audience
        self._ttl = ttl or timedelta(minutes=settings.jwt_access_minutes)
        self._clock = clock

    def issue(self, user: UserModel) -> IssuedToken:
        now = self._clock().replace(microsecond=0)
        exp = now + self._ttl

        claims = {
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(user.id),
            "email": user.email,
            "role": Role(user.role).value,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
            "jti": uuid4().hex,
        }
        token = jwt.encode(claims, self._secret, algorithm=self.ALGORITHM)
        return IssuedToken(token=token, issued_at=now, expires_at=exp)

    def validate(self, token: str) -> TokenClaims:
        # one error for every failure mode: malformed, forged, expired
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": REQUIRED_CLAIMS},
            )
            return TokenClaims(
                user_id=str(claims["sub"]),
                email=str(claims["email"]),
                role=Role.parse(claims["role"]),
                issued_at=datetime.fromtimestamp(int(claims["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
            )
        except (jwt.InvalidTokenError, ValueError, TypeError) as e:
            raise TokenInvalidError() from e
