# catalog_api/api/routes/product_routes.py

from __future__ import annotations

from flask import Blueprint, jsonify, request

from catalog_api.api.middlewares.auth_middleware import require_auth, require_roles
from catalog_api.api.schemas._base import PageResponse
from catalog_api.api.schemas.product_schema import (
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from catalog_api.core.access_guard import ANY_ROLE
from catalog_api.core.exceptions import ValidationFailedError
from catalog_api.core.pagination import Page, PageRequest
from catalog_api.entities.role import Role
from catalog_api.infrastructure.database.session import db_session
from catalog_api.repositories.product_repository import ProductRepository
from catalog_api.services.product_service import ProductService

bp_prod = Blueprint("products", __name__, url_prefix="/products")


def _build_service(session) -> ProductService:
    return ProductService(ProductRepository(session))


def _page_body(page: Page) -> dict:
    return PageResponse.of(page, ProductResponse.from_model).to_json()


# -------------------------
# Queries
# -------------------------

@bp_prod.get("")
@require_auth
@require_roles(*ANY_ROLE)
def list_products():
    page_request = PageRequest.from_args(request.args)

    with db_session() as session:
        body = _page_body(_build_service(session).get_all_products(page_request))

    return jsonify(body), 200


@bp_prod.get("/search")
@require_auth
@require_roles(*ANY_ROLE)
def search_products():
    name = (request.args.get("name") or "").strip()
    if not name:
        raise ValidationFailedError({"name": "must not be blank"})
    page_request = PageRequest.from_args(request.args)

    with db_session() as session:
        body = _page_body(_build_service(session).search_products_by_name(name, page_request))

    return jsonify(body), 200


@bp_prod.get("/category/<category>")
@require_auth
@require_roles(*ANY_ROLE)
def products_by_category(category: str):
    page_request = PageRequest.from_args(request.args)

    with db_session() as session:
        body = _page_body(_build_service(session).get_products_by_category(category, page_request))

    return jsonify(body), 200


@bp_prod.get("/in-stock")
@require_auth
@require_roles(*ANY_ROLE)
def in_stock_products():
    page_request = PageRequest.from_args(request.args)

    with db_session() as session:
        body = _page_body(_build_service(session).get_in_stock_products(page_request))

    return jsonify(body), 200


@bp_prod.get("/<product_id>")
@require_auth
@require_roles(*ANY_ROLE)
def get_product(product_id: str):
    with db_session() as session:
        product = _build_service(session).get_product_by_id(product_id)
        body = ProductResponse.from_model(product).to_json()

    return jsonify(body), 200


# -------------------------
# Mutations (ADMIN)
# -------------------------

@bp_prod.post("")
@require_auth
@require_roles(Role.ADMIN)
def create_product():
    payload = ProductCreateRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        created = _build_service(session).create_product(**payload.model_dump())
        body = ProductResponse.from_model(created).to_json()

    return jsonify(body), 201


@bp_prod.put("/<product_id>")
@require_auth
@require_roles(Role.ADMIN)
def update_product(product_id: str):
    payload = ProductUpdateRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_product(product_id, **payload.model_dump())
        body = ProductResponse.from_model(updated).to_json()

    return jsonify(body), 200


@bp_prod.delete("/<product_id>")
@require_auth
@require_roles(Role.ADMIN)
def delete_product(product_id: str):
    with db_session() as session:
        _build_service(session).delete_product(product_id)

    return ("", 204)
