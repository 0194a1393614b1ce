# catalog_api/api/routes/auth_routes.py

from flask import Blueprint, jsonify, request

from catalog_api.api.middlewares.auth_middleware import current_claims, require_auth
from catalog_api.api.schemas.user_schema import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenClaimsResponse,
    UserResponse,
)
from catalog_api.infrastructure.database.session import db_session
from catalog_api.repositories.user_repository import UserRepository
from catalog_api.services.auth_service import AuthService
from catalog_api.services.user_service import UserService

bp_auth = Blueprint("auth", __name__, url_prefix="/auth")


@bp_auth.post("/register")
def register():
    payload = RegisterRequest.model_validate(request.get_json(force=True))
    data = payload.model_dump(exclude={"role"})

    with db_session() as session:
        created = UserService(UserRepository(session)).create_user(**data)
        body = UserResponse.from_model(created).to_json()

    return jsonify(body), 201


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        auth_service = AuthService(user_repo=UserRepository(session))
        result = auth_service.login(email=payload.email, password=payload.password)
        body = LoginResponse.build(result.user, result.token).to_json()

    return jsonify(body), 200


@bp_auth.get("/validate")
@require_auth
def validate():
    return jsonify(TokenClaimsResponse.from_claims(current_claims()).to_json()), 200
