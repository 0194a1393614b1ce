# catalog_api/api/routes/user_routes.py

from __future__ import annotations

from flask import Blueprint, jsonify, request

from catalog_api.api.middlewares.auth_middleware import current_claims, require_auth, require_roles
from catalog_api.api.schemas._base import PageResponse
from catalog_api.api.schemas.user_schema import (
    AdminUserResponse,
    ChangeRoleRequest,
    UpdateUserRequest,
    UserResponse,
)
from catalog_api.core.access_guard import authorize_owner_or
from catalog_api.core.pagination import PageRequest
from catalog_api.entities.role import Role
from catalog_api.infrastructure.database.session import db_session
from catalog_api.repositories.user_repository import UserRepository
from catalog_api.services.user_service import UserService

bp_users = Blueprint("users", __name__, url_prefix="/users")


def _build_service(session) -> UserService:
    return UserService(UserRepository(session))


def _truthy(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes")


# -------------------------
# Listing
# -------------------------

@bp_users.get("")
@require_auth
@require_roles(Role.ADMIN, Role.MODERATOR)
def list_users():
    page_request = PageRequest.from_args(request.args)

    with db_session() as session:
        page = _build_service(session).list_users(page_request)
        body = PageResponse.of(page, UserResponse.from_model).to_json()

    return jsonify(body), 200


@bp_users.get("/admin")
@require_auth
@require_roles(Role.ADMIN)
def admin_list_users():
    page_request = PageRequest.from_args(request.args)
    include_inactive = _truthy(request.args.get("include_inactive"), True)

    with db_session() as session:
        page = _build_service(session).admin_list_users(page_request, include_inactive=include_inactive)
        body = PageResponse.of(page, AdminUserResponse.from_model).to_json()

    return jsonify(body), 200


# -------------------------
# Single account (owner or ADMIN)
# -------------------------

@bp_users.get("/<user_id>")
@require_auth
def get_user(user_id: str):
    authorize_owner_or(current_claims(), user_id, {Role.ADMIN})

    with db_session() as session:
        user = _build_service(session).get_user_by_id(user_id)
        body = UserResponse.from_model(user).to_json()

    return jsonify(body), 200


@bp_users.put("/<user_id>")
@require_auth
def update_user(user_id: str):
    authorize_owner_or(current_claims(), user_id, {Role.ADMIN})
    payload = UpdateUserRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_user(user_id, **payload.model_dump(exclude_unset=True))
        body = UserResponse.from_model(updated).to_json()

    return jsonify(body), 200


@bp_users.delete("/<user_id>")
@require_auth
def delete_user(user_id: str):
    authorize_owner_or(current_claims(), user_id, {Role.ADMIN})

    with db_session() as session:
        _build_service(session).delete_user(user_id)

    return ("", 204)


@bp_users.patch("/<user_id>/role")
@require_auth
@require_roles(Role.ADMIN)
def change_role(user_id: str):
    payload = ChangeRoleRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).change_role(user_id, payload.role)
        body = AdminUserResponse.from_model(updated).to_json()

    return jsonify(body), 200
