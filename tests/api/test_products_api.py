import pytest

from catalog_api.entities.role import Role

pytestmark = pytest.mark.api

BASE = "/api/products"


def _product_body(sku: str, **extra) -> dict:
    body = {"name": f"Item {sku}", "sku": sku, "price": 10.00, "quantity": 5, "category": "Tools"}
    body.update(extra)
    return body


@pytest.fixture
def admin(auth_headers):
    return auth_headers(Role.ADMIN)


@pytest.fixture
def user(auth_headers):
    return auth_headers(Role.USER)


def _skus(resp) -> set[str]:
    return {p["sku"] for p in resp.get_json()["content"]}


def test_reads_require_token(client):
    assert client.get(BASE).status_code == 401


def test_only_admin_mutates(client, user, admin):
    assert client.post(BASE, json=_product_body("X1"), headers=user).status_code == 403

    created = client.post(BASE, json=_product_body("X1"), headers=admin)
    assert created.status_code == 201
    product_id = created.get_json()["id"]

    assert client.put(f"{BASE}/{product_id}", json=_product_body("X1"), headers=user).status_code == 403
    assert client.delete(f"{BASE}/{product_id}", headers=user).status_code == 403


def test_moderator_cannot_create(client, auth_headers):
    moderator = auth_headers(Role.MODERATOR)

    assert client.post(BASE, json=_product_body("M1"), headers=moderator).status_code == 403


def test_stock_lifecycle(client, admin, user):
    created = client.post(BASE, json=_product_body("X1", quantity=5, price=10.00), headers=admin)
    product_id = created.get_json()["id"]
    assert "X1" in _skus(client.get(f"{BASE}/in-stock", headers=user))

    updated = client.put(
        f"{BASE}/{product_id}",
        json={"name": "Item X1", "price": 10.00, "quantity": 0},
        headers=admin,
    )
    assert updated.status_code == 200
    assert updated.get_json()["quantity"] == 0
    assert "X1" not in _skus(client.get(f"{BASE}/in-stock", headers=user))

    assert client.delete(f"{BASE}/{product_id}", headers=admin).status_code == 204
    missing = client.get(f"{BASE}/{product_id}", headers=user)
    assert missing.status_code == 404
    assert "Product not found" in missing.get_json()["error"]


def test_duplicate_sku_is_bad_request(client, admin):
    client.post(BASE, json=_product_body("X1"), headers=admin)

    resp = client.post(BASE, json=_product_body("X1", name="Clone"), headers=admin)

    assert resp.status_code == 400
    assert "SKU already exists" in resp.get_json()["error"]


def test_negative_price_rejected(client, admin):
    resp = client.post(BASE, json=_product_body("NEG", price=-1), headers=admin)

    assert resp.status_code == 400
    assert "price" in resp.get_json()["errors"]


def test_pagination_over_active_products(client, admin, user):
    for i in range(15):
        client.post(BASE, json=_product_body(f"P{i}"), headers=admin)
    extra = client.post(BASE, json=_product_body("GONE"), headers=admin).get_json()["id"]
    client.delete(f"{BASE}/{extra}", headers=admin)

    first = client.get(f"{BASE}?page=0&size=10", headers=user).get_json()
    second = client.get(f"{BASE}?page=1&size=10", headers=user).get_json()

    assert len(first["content"]) == 10
    assert len(second["content"]) == 5
    assert first["totalElements"] == 15
    assert first["totalPages"] == 2
    skus = {p["sku"] for p in first["content"] + second["content"]}
    assert len(skus) == 15
    assert "GONE" not in skus


def test_bad_page_params(client, user):
    resp = client.get(f"{BASE}?page=-1&size=abc", headers=user)

    assert resp.status_code == 400
    assert "size" in resp.get_json()["errors"]


def test_huge_page_index_is_bad_request(client, user):
    resp = client.get(f"{BASE}?page=9999999999999999999&size=10", headers=user)

    assert resp.status_code == 400
    assert "page" in resp.get_json()["errors"]


def test_search_and_category(client, admin, user):
    client.post(BASE, json=_product_body("A", name="Blue Widget", category="Tools"), headers=admin)
    client.post(BASE, json=_product_body("B", name="Gadget", category="garden"), headers=admin)

    assert _skus(client.get(f"{BASE}/search?name=widget", headers=user)) == {"A"}
    assert _skus(client.get(f"{BASE}/category/GARDEN", headers=user)) == {"B"}
    assert client.get(f"{BASE}/search", headers=user).status_code == 400
