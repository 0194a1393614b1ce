# catalog_api/services/user_service.py

import logging

from catalog_api.core.exceptions import DuplicateEntityError, NotFoundError
from catalog_api.core.pagination import Page, PageRequest
from catalog_api.entities.role import Role
from catalog_api.infrastructure.database.models.user_model import UserModel
from catalog_api.infrastructure.security.password_hasher import PasswordHasher
from catalog_api.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "phone_number", "address", "city", "country", "postal_code")


def _strip_or_none(v: str | None) -> str | None:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


class UserService:
    def __init__(self, user_repository: UserRepository, hasher: PasswordHasher | None = None) -> None:
        self._user_repository = user_repository
        self._hasher = hasher or PasswordHasher()

    def create_user(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone_number: str | None = None,
        address: str | None = None,
        city: str | None = None,
        country: str | None = None,
        postal_code: str | None = None,
    ) -> UserModel:
        """
        Registers a new account. The role is always USER whatever the caller
        asked for; promotion goes through change_role.
        """
        email = email.strip()
        phone_number = _strip_or_none(phone_number)
        logger.info("Creating user email=%s", email)

        if self._user_repository.exists_by_email(email):
            logger.warning("Registration rejected, email already registered: %s", email)
            raise DuplicateEntityError("Email already registered")
        if phone_number and self._user_repository.exists_by_phone_number(phone_number):
            raise DuplicateEntityError("Phone number already registered")

        hashed = self._hasher.hash_password(password)

        model = UserModel(
            email=email,
            password_algo=hashed.algo,
            password_iterations=hashed.iterations,
            password_hash=hashed.hash,
            password_salt=hashed.salt,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            phone_number=phone_number,
            address=_strip_or_none(address),
            city=_strip_or_none(city),
            country=_strip_or_none(country),
            postal_code=_strip_or_none(postal_code),
            role=Role.USER,
            email_verified=False,
            is_active=True,
        )
        return self._user_repository.save(model)

    def get_user_by_id(self, user_id: str) -> UserModel:
        logger.info("Fetching user id=%s", user_id)
        return self._user_repository.find_active_by_id(user_id)

    def get_user_by_email(self, email: str) -> UserModel:
        user = self._user_repository.find_active_by_email(email.strip())
        if user is None:
            raise NotFoundError(f"User not found with email: {email}")
        return user

    def list_users(self, page_request: PageRequest) -> Page[UserModel]:
        return self._user_repository.list_active(page_request)

    def admin_list_users(self, page_request: PageRequest, *, include_inactive: bool = True) -> Page[UserModel]:
        return self._user_repository.list_all(page_request, include_inactive=include_inactive)

    def admin_get_user(self, user_id: str) -> UserModel:
        return self._user_repository.find_by_id(user_id)

    def update_user(self, user_id: str, **changes: str | None) -> UserModel:
        """Overwrites the profile fields; email, role, password and is_active are left alone."""
        logger.info("Updating user id=%s", user_id)
        user = self._user_repository.find_by_id(user_id)

        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise TypeError(f"update_user got unexpected fields: {', '.join(sorted(unknown))}")

        phone_number = _strip_or_none(changes.get("phone_number"))
        if (
            phone_number
            and phone_number != user.phone_number
            and self._user_repository.exists_by_phone_number(phone_number)
        ):
            raise DuplicateEntityError("Phone number already registered")

        if "first_name" in changes and changes["first_name"] is not None:
            user.first_name = changes["first_name"].strip()
        if "last_name" in changes and changes["last_name"] is not None:
            user.last_name = changes["last_name"].strip()
        for field in ("phone_number", "address", "city", "country", "postal_code"):
            if field in changes:
                setattr(user, field, _strip_or_none(changes[field]))

        return self._user_repository.save(user)

    def change_role(self, user_id: str, role: Role) -> UserModel:
        logger.info("Changing role of user id=%s to %s", user_id, Role(role).value)
        user = self._user_repository.find_by_id(user_id)
        user.role = Role(role)
        return self._user_repository.save(user)

    def delete_user(self, user_id: str) -> None:
        logger.info("Deleting user id=%s", user_id)
        user = self._user_repository.find_by_id(user_id)
        self._user_repository.deactivate(user)
