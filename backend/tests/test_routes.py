"""
Storefront Backend: Route Tests
================================

What:  End-to-end HTTP tests through the FastAPI app.
How:   httpx AsyncClient over ASGITransport; the gateway dependency points
       at the seeded SQLite database from conftest.

What we test:
    ✅ JSON shapes use camelCase keys and the `products` item array
    ✅ None from the gateway → 404, missing user id → 400
    ✅ POST 201 / PATCH 200 / DELETE 204 with empty bodies
    ✅ DatabaseError → 500 with a generic message
    ✅ Request id header and the running request total
"""

from unittest.mock import AsyncMock, patch

import pytest

from storefront.exceptions import DatabaseError, PartialWriteError

ORDER_BODY = {
    "id": "o1",
    "userId": "u1",
    "totalAmount": 30,
    "products": [
        {"productId": "p1", "quantity": 2},
        {"productId": "p2", "quantity": 1},
    ],
}


class TestRoot:

    @pytest.mark.asyncio
    async def test_hello(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Hello, World!"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["total_requests"] == 1

    @pytest.mark.asyncio
    async def test_health_database_down(self, test_client, seeded_gateway):
        with patch.object(seeded_gateway, "ping", AsyncMock(side_effect=DatabaseError())):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_request_id_round_trip(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_total_counts_every_request(self, test_client):
        await test_client.get("/")
        await test_client.get("/product/nope")

        response = await test_client.get("/health")

        assert response.json()["total_requests"] == 3


class TestCatalogRoutes:

    @pytest.mark.asyncio
    async def test_get_product(self, test_client):
        response = await test_client.get("/product/p3")

        assert response.status_code == 200
        assert response.json() == {
            "id": "p3",
            "name": "Chess",
            "description": "Board game",
            "price": 25.0,
            "categoryId": "c2",
        }

    @pytest.mark.asyncio
    async def test_get_product_not_found(self, test_client):
        response = await test_client.get("/product/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_random_product(self, test_client):
        response = await test_client.get("/randomproduct")

        assert response.status_code == 200
        assert response.json()["id"] in {"p1", "p2", "p3", "p4"}

    @pytest.mark.asyncio
    async def test_products_by_category(self, test_client):
        response = await test_client.get("/products", params={"categoryId": "c2"})

        assert [p["id"] for p in response.json()] == ["p3"]

    @pytest.mark.asyncio
    async def test_products_all(self, test_client):
        response = await test_client.get("/products")

        assert len(response.json()) == 4

    @pytest.mark.asyncio
    async def test_categories(self, test_client):
        response = await test_client.get("/categories")

        assert [c["id"] for c in response.json()] == ["c1", "c2"]


class TestOrderRoutes:

    @pytest.mark.asyncio
    async def test_create_fetch_delete(self, test_client):
        created = await test_client.post("/orders", json=ORDER_BODY)
        assert created.status_code == 201
        assert created.content == b""

        fetched = await test_client.get("/order/o1")
        assert fetched.status_code == 200
        assert fetched.json() == ORDER_BODY

        deleted = await test_client.delete("/order/o1")
        assert deleted.status_code == 204

        missing = await test_client.get("/order/o1")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_null_products_is_an_itemless_order(self, test_client):
        created = await test_client.post(
            "/orders", json={"id": "o4", "userId": "u1", "totalAmount": 0, "products": None}
        )

        assert created.status_code == 201
        response = await test_client.get("/order/o4")
        assert response.json()["products"] == []

    @pytest.mark.asyncio
    async def test_itemless_order_is_200_with_empty_products(self, test_client):
        await test_client.post("/orders", json={"id": "o2", "userId": "u1", "totalAmount": 0})

        response = await test_client.get("/order/o2")

        assert response.status_code == 200
        assert response.json()["products"] == []

    @pytest.mark.asyncio
    async def test_orders_by_user(self, test_client):
        await test_client.post("/orders", json={"id": "o2", "userId": "u1", "totalAmount": 0})
        await test_client.post("/orders", json=ORDER_BODY)
        await test_client.post("/orders", json={"id": "o3", "userId": "u2", "totalAmount": 0})

        response = await test_client.get("/orders", params={"id": "u1"})

        assert response.status_code == 200
        assert [(o["id"], len(o["products"])) for o in response.json()] == [("o1", 2), ("o2", 0)]

    @pytest.mark.asyncio
    async def test_orders_without_user_id(self, test_client):
        response = await test_client.get("/orders")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_all_orders(self, test_client):
        await test_client.post("/orders", json=ORDER_BODY)
        await test_client.post("/orders", json={"id": "o0", "userId": "u2", "totalAmount": 0})

        response = await test_client.get("/allorders")

        assert [o["id"] for o in response.json()] == ["o0", "o1"]

    @pytest.mark.asyncio
    async def test_duplicate_order_is_500(self, test_client):
        await test_client.post("/orders", json=ORDER_BODY)

        response = await test_client.post("/orders", json=ORDER_BODY)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "o1" not in body["message"]

    @pytest.mark.asyncio
    async def test_delete_failure_is_500(self, test_client, seeded_gateway):
        error = PartialWriteError(order_id="o1", completed_steps=1, total_steps=2)
        with patch.object(seeded_gateway, "delete_order", AsyncMock(side_effect=error)):
            response = await test_client.delete("/order/o1")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_get_user(self, test_client):
        response = await test_client.get("/user/u1")

        assert response.status_code == 200
        assert response.json() == {"id": "u1", "email": "ada@example.com", "name": "Ada"}

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, test_client):
        response = await test_client.get("/user/u404")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_users_hides_passwords(self, test_client):
        response = await test_client.get("/users")

        assert all(set(u) == {"id", "email", "name"} for u in response.json())

    @pytest.mark.asyncio
    async def test_patch_email(self, test_client):
        response = await test_client.patch("/user/u2", json={"email": "bob@new.example"})

        assert response.status_code == 200
        user = (await test_client.get("/user/u2")).json()
        assert user["email"] == "bob@new.example"

    @pytest.mark.asyncio
    async def test_patch_nothing(self, test_client, seeded_gateway):
        with patch.object(seeded_gateway, "update_user", wraps=seeded_gateway.update_user) as spy:
            response = await test_client.patch("/user/u1", json={})

        assert response.status_code == 200
        patch_arg = spy.call_args.args[0]
        assert patch_arg.id == "u1"
        assert patch_arg.is_empty

    @pytest.mark.asyncio
    async def test_patch_without_body(self, test_client):
        response = await test_client.patch("/user/u1")

        assert response.status_code == 200
        user = (await test_client.get("/user/u1")).json()
        assert user["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_patch_null_email_is_supplied(self, test_client, seeded_gateway):
        with patch.object(seeded_gateway, "update_user", AsyncMock(return_value=None)) as update:
            response = await test_client.patch("/user/u1", json={"email": None})

        assert response.status_code == 200
        assert update.call_args.args[0].changes == {"email": None}
