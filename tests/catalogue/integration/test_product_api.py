"""Integration tests for the /products endpoints via TestClient."""

import pytest


def _login(client, email):
    response = client.post("/auth/login", json={"email": email, "password": "secret123"})
    assert response.status_code == 200


@pytest.fixture()
def admin(client, make_user):
    make_user(email="admin@example.com", admin=True)
    _login(client, "admin@example.com")


@pytest.fixture()
def shopper(client, make_user):
    make_user(email="shopper@example.com")
    _login(client, "shopper@example.com")


def _create(client, **overrides):
    defaults = {"name": "Jeans", "description": "Slim fit", "price": 49.99, "category": "jeans"}
    defaults.update(overrides)
    return client.post("/products", json=defaults)


class TestPublicEndpoints:
    def test_featured(self, client, make_product):
        make_product(name="Star", featured=True)
        make_product(name="Plain")
        response = client.get("/products/featured")
        assert response.status_code == 200
        assert [item["name"] for item in response.json()] == ["Star"]

    def test_by_category(self, client, make_product):
        make_product(name="Jeans", category="jeans")
        make_product(name="Shirt", category="shirts")
        response = client.get("/products/category/shirts")
        assert [item["name"] for item in response.json()] == ["Shirt"]

    def test_recommendations(self, client, make_product):
        for index in range(4):
            make_product(name=f"P{index}")
        response = client.get("/products/recommendations")
        assert response.status_code == 200
        assert len(response.json()) == 3


class TestAdminEndpoints:
    def test_list_requires_login(self, client):
        assert client.get("/products").status_code == 401

    def test_list_requires_admin(self, client, shopper):
        response = client.get("/products")
        assert response.status_code == 403
        assert response.json() == {"error": "Admins only", "code": "forbidden"}

    def test_create_and_list(self, client, admin):
        response = _create(client)
        assert response.status_code == 201
        assert response.json()["is_featured"] is False

        listed = client.get("/products").json()
        assert [item["name"] for item in listed] == ["Jeans"]

    def test_create_requires_admin(self, client, shopper):
        assert _create(client).status_code == 403

    def test_toggle_featured(self, client, admin):
        product_id = _create(client).json()["id"]

        response = client.patch(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json()["is_featured"] is True
        assert [item["id"] for item in client.get("/products/featured").json()] == [product_id]

    def test_delete(self, client, admin):
        product_id = _create(client).json()["id"]

        response = client.delete(f"/products/{product_id}")
        assert response.status_code == 200
        assert client.get("/products").json() == []

    def test_delete_unknown_is_404(self, client, admin):
        assert client.delete("/products/no-such-product").status_code == 404
