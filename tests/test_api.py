"""Endpoint tests running the FastAPI app with the in-memory backend."""

import pytest

from storefront.api.deps import redis_dep
from storefront.main import app

from fakes import FakeRedis


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["store"] == "ok"
    assert data["checks"]["redis"] == "skipped"
    assert data["checks"]["store_backend"] == "memory"


def test_list_products(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    data = response.json()
    assert [p["product_id"] for p in data] == [str(i) for i in range(1, 9)]
    assert data[4]["eco_score"] == 9.8


def test_list_products_with_filters(client):
    response = client.get("/api/products", params={"tag": "eco", "min_price": 20, "max_price": 40})

    assert response.status_code == 200
    assert [p["product_id"] for p in response.json()] == ["7", "8"]


def test_list_products_without_filters_reads_whole_catalog(client, monkeypatch):
    from storefront.api.v1.routers import products as products_router

    calls = []

    async def fake_get_all(products):
        calls.append("all")
        return []

    async def fake_search(products, **filters):
        calls.append("search")
        return []

    monkeypatch.setattr(products_router, "get_all_products_svc", fake_get_all)
    monkeypatch.setattr(products_router, "search_products_svc", fake_search)

    client.get("/api/products")
    client.get("/api/products", params={"category": "audio"})

    assert calls == ["all", "search"]


def test_list_products_inverted_range(client):
    response = client.get("/api/products", params={"min_price": 50, "max_price": 5})

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"


def test_get_product_and_not_found(client):
    assert client.get("/api/products/5").json()["name"] == "Bamboo Toothbrush Set"

    response = client.get("/api/products/42")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "NotFound"
    assert body["details"] == {"entity": "product", "id": "42"}


def test_products_by_category(client):
    response = client.get("/api/products/category/clothing")

    assert response.status_code == 200
    assert [p["product_id"] for p in response.json()] == ["8"]
    assert client.get("/api/products/category/Clothing").json() == []


def test_empty_cart_for_unknown_user(client):
    response = client.get("/api/cart/nobody")

    assert response.status_code == 200
    assert response.json() == {"items": [], "subtotal": 0, "discount": 0, "total": 0}


def test_cart_lifecycle(client):
    response = client.post("/api/cart/u1/items", json={"productId": "7"})
    assert response.status_code == 201
    data = response.json()
    assert data["items"][0]["quantity"] == 1
    assert data["items"][0]["product"] == {"id": "7", "name": "Solar Powered Charger", "price": 39.99, "image": "charger.jpg"}

    data = client.post("/api/cart/u1/items", json={"productId": "7", "quantity": 2}).json()
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 3
    item_id = data["items"][0]["itemId"]

    data = client.post("/api/cart/u1/items", json={"productId": "5", "quantity": 2}).json()
    assert data["subtotal"] == pytest.approx(39.99 * 3 + 12.99 * 2)
    assert data["total"] == data["subtotal"]
    assert data["discount"] == 0

    response = client.put(f"/api/cart/u1/items/{item_id}", json={"quantity": 1})
    assert response.status_code == 200
    assert response.json()["subtotal"] == pytest.approx(39.99 + 12.99 * 2)

    response = client.delete(f"/api/cart/u1/items/{item_id}")
    assert response.status_code == 200
    data = response.json()
    assert [i["productId"] for i in data["items"]] == ["5"]

    assert client.get("/api/cart/u1").json() == data


def test_cart_lines_use_camel_case_keys(client):
    response = client.post("/api/cart/u1/items", json={"productId": "7", "quantity": 2})

    assert response.status_code == 201
    data = response.json()
    assert set(data) == {"items", "subtotal", "discount", "total"}
    line = data["items"][0]
    assert set(line) == {"itemId", "productId", "quantity", "priceAtAddition", "product"}
    assert line["productId"] == "7"
    assert line["priceAtAddition"] == pytest.approx(39.99)
    assert set(line["product"]) == {"id", "name", "price", "image"}


def test_add_item_accepts_snake_case_body(client):
    response = client.post("/api/cart/u1/items", json={"product_id": "5"})

    assert response.status_code == 201
    assert response.json()["items"][0]["productId"] == "5"


def test_failed_cart_requests_leave_no_locks_behind(client):
    for i in range(50):
        assert client.delete(f"/api/cart/ghost{i}/items/x").status_code == 404
    client.post("/api/cart/u1/items", json={"productId": "5"})

    assert client.app.state.cart_locks._local == {}


def test_add_item_errors(client):
    response = client.post("/api/cart/u1/items", json={"productId": "404"})
    assert response.status_code == 404

    response = client.post("/api/cart/u1/items", json={"productId": "5", "quantity": 0})
    assert response.status_code == 422
    assert response.json()["details"]["field"] == "quantity"

    response = client.post("/api/cart/u1/items", json={"quantity": 1})
    assert response.status_code == 422


def test_update_and_remove_missing_item(client):
    assert client.put("/api/cart/ghost/items/x", json={"quantity": 2}).status_code == 404
    assert client.delete("/api/cart/ghost/items/x").status_code == 404

    client.post("/api/cart/u1/items", json={"productId": "5"})
    assert client.put("/api/cart/u1/items/x", json={"quantity": 2}).status_code == 404
    assert client.delete("/api/cart/u1/items/x").status_code == 404


def test_get_user(client):
    response = client.get("/api/users/1")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "AI Shopper"
    assert data["preferences"] == {"style": "modern", "price_range": [0, 500], "eco_preference": "high"}
    assert client.get("/api/users/2").status_code == 404


def test_recommendations_for_default_user(client):
    response = client.get("/api/users/1/recommendations")

    assert response.status_code == 200
    assert [p["product_id"] for p in response.json()] == ["5", "7", "6", "8"]


def test_recommendations_unknown_user(client):
    response = client.get("/api/users/99/recommendations")

    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_update_preferences_changes_recommendations(client):
    response = client.put(
        "/api/users/1/preferences",
        json={"style": "classic", "price_range": [200, 1200], "eco_preference": "medium"},
    )
    assert response.status_code == 200
    assert response.json()["preferences"]["style"] == "classic"

    ids = [p["product_id"] for p in client.get("/api/users/1/recommendations").json()]
    assert ids == ["3", "4"]


def test_update_preferences_validation(client):
    bad_range = {"price_range": [500, 0], "eco_preference": "high"}
    assert client.put("/api/users/1/preferences", json=bad_range).status_code == 422

    bad_eco = {"price_range": [0, 10], "eco_preference": "extreme"}
    assert client.put("/api/users/1/preferences", json=bad_eco).status_code == 422

    ok = {"price_range": [0, 10]}
    assert client.put("/api/users/404/preferences", json=ok).status_code == 404


def test_recommendations_use_redis_cache_when_available(client):
    redis = FakeRedis()
    app.dependency_overrides[redis_dep] = lambda: redis

    first = client.get("/api/users/1/recommendations").json()
    second = client.get("/api/users/1/recommendations").json()

    assert first == second
    assert len(redis.data) == 1


def test_classify(client):
    response = client.post("/api/classify", json={"text": "anything", "categories": ["eco", "audio"]})

    assert response.status_code == 200
    results = response.json()["results"]
    assert len(results) == 8
    toothbrush = results[4]
    assert toothbrush["product"] == "Bamboo Toothbrush Set"
    assert toothbrush["scores"]["eco"] == pytest.approx(0.45)
    assert toothbrush["scores"]["audio"] == pytest.approx(0.15)
    assert list(toothbrush["scores"]) == ["eco", "audio"]


def test_classify_requires_categories(client):
    assert client.post("/api/classify", json={"categories": []}).status_code == 422
    assert client.post("/api/classify", json={"text": "x"}).status_code == 422


def test_assistant(client):
    response = client.post("/api/assistant", json={"message": "show me eco stuff"})

    assert response.status_code == 200
    assert response.json()["response"].startswith("I found these sustainable products for you: Bamboo Toothbrush Set")
