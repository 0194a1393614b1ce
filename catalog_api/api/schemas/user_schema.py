# catalog_api/api/schemas/user_schema.py
from datetime import datetime

from pydantic import ConfigDict, Field

from catalog_api.api.schemas._base import CamelModel, EmailAddress
from catalog_api.entities.record import RecordMeta
from catalog_api.entities.role import Role
from catalog_api.entities.token import IssuedToken, TokenClaims
from catalog_api.infrastructure.database.models.user_model import UserModel


class RegisterRequest(CamelModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailAddress = Field(max_length=100)
    password: str = Field(min_length=1, max_length=200)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    # accepted for shape compatibility, never applied
    role: str | None = None


class LoginRequest(CamelModel):
    email: EmailAddress
    password: str = Field(min_length=1, max_length=200)


class UpdateUserRequest(CamelModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone_number: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)


class ChangeRoleRequest(CamelModel):
    role: Role


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    phone_number: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    postal_code: str | None = None
    role: Role
    email_verified: bool
    created_at: datetime
    updated_at: datetime
    is_active: bool

    @classmethod
    def from_model(cls, user: UserModel) -> "UserResponse":
        meta = RecordMeta.of(user)
        return cls(
            id=meta.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone_number=user.phone_number,
            address=user.address,
            city=user.city,
            country=user.country,
            postal_code=user.postal_code,
            role=user.role,
            email_verified=bool(user.email_verified),
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            is_active=meta.is_active,
        )


class AdminUserResponse(UserResponse):
    last_login: datetime | None = None

    @classmethod
    def from_model(cls, user: UserModel) -> "AdminUserResponse":
        base = UserResponse.from_model(user).model_dump()
        return cls(**base, last_login=user.last_login)


class LoginResponse(CamelModel):
    token: str
    type: str = "Bearer"
    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    expires_at: datetime

    @classmethod
    def build(cls, user: UserModel, issued: IssuedToken) -> "LoginResponse":
        return cls(
            token=issued.token,
            type=issued.token_type,
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            expires_at=issued.expires_at,
        )


class TokenClaimsResponse(CamelModel):
    valid: bool = True
    id: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "TokenClaimsResponse":
        return cls(
            id=claims.user_id,
            email=claims.email,
            role=claims.role,
            issued_at=claims.issued_at,
            expires_at=claims.expires_at,
        )
