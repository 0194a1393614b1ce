# catalog_api/entities/token.py
from dataclasses import dataclass
from datetime import datetime

from catalog_api.entities.role import Role


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    issued_at: datetime
    expires_at: datetime
    token_type: str = "Bearer"
