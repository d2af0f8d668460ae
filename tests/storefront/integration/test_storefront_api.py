"""Integration tests for the Storefront API endpoints via TestClient."""

import pytest
from fastapi.testclient import TestClient

from storefront.api.app import create_app


@pytest.fixture()
def client(shop):
    return TestClient(create_app(shop))


def _add(client, item_id, times=1):
    for _ in range(times):
        response = client.post(f"/cart/items/{item_id}")
        assert response.status_code == 200
    return response


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "storefront"}


class TestCatalogEndpoint:
    def test_list_catalog(self, client):
        response = client.get("/catalog")
        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == ["A", "B", "C"]
        assert items[0]["price"] == 25
        assert items[0]["stock"] == 2
        assert items[2]["stock"] == 0


class TestCartEndpoints:
    def test_empty_cart(self, client):
        response = client.get("/cart")
        assert response.status_code == 200
        assert response.json()["lines"] == []
        assert response.json()["total"] == 0

    def test_add_item(self, client):
        response = _add(client, "B", times=2)
        body = response.json()
        assert body["changed"] is True
        assert body["cart"]["lines"] == [{"item_id": "B", "unit_price": 30, "quantity": 2}]
        assert body["cart"]["total"] == 60

    def test_add_beyond_stock_reports_no_change(self, client):
        _add(client, "A", times=2)
        response = client.post("/cart/items/A")
        assert response.status_code == 200
        assert response.json()["changed"] is False
        assert response.json()["cart"]["lines"][0]["quantity"] == 2

    def test_add_unknown_item(self, client):
        response = client.post("/cart/items/Z")
        assert response.status_code == 404

    def test_remove_item(self, client):
        _add(client, "B", times=2)
        response = client.delete("/cart/items/B")
        assert response.status_code == 200
        assert response.json()["cart"]["lines"][0]["quantity"] == 1

    def test_remove_absent_item(self, client):
        response = client.delete("/cart/items/B")
        assert response.status_code == 200
        assert response.json()["changed"] is False


class TestCheckoutEndpoints:
    def test_checkout(self, client):
        _add(client, "A")
        response = client.post("/checkout")
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["total"] == 25
        assert body["remaining_seconds"] == 900

        cart = client.get("/cart").json()
        assert cart["pending_order_id"] == body["order_id"]

    def test_pending_order(self, client, clock):
        _add(client, "A")
        order_id = client.post("/checkout").json()["order_id"]
        clock.advance(minutes=5)

        response = client.get("/checkout")
        assert response.status_code == 200
        assert response.json()["order_id"] == order_id
        assert response.json()["remaining_seconds"] == 600

    def test_no_pending_order(self, client):
        response = client.get("/checkout")
        assert response.status_code == 200
        assert response.json() is None

    def test_checkout_empty_cart(self, client):
        response = client.post("/checkout")
        assert response.status_code == 400

    def test_checkout_twice(self, client):
        _add(client, "A")
        client.post("/checkout")
        response = client.post("/checkout")
        assert response.status_code == 400

    def test_cart_is_locked_while_pending(self, client):
        _add(client, "B")
        client.post("/checkout")
        response = client.post("/cart/items/B")
        assert response.status_code == 400

    def test_pay(self, client):
        _add(client, "B", times=3)
        client.post("/checkout")
        response = client.post("/checkout/pay")
        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["remaining_seconds"] is None

        stock = {item["id"]: item["stock"] for item in client.get("/catalog").json()}
        assert stock["B"] == 7
        assert client.get("/cart").json()["lines"] == []

    def test_pay_after_expiry(self, client, clock):
        _add(client, "A")
        client.post("/checkout")
        clock.advance(minutes=15)

        response = client.post("/checkout/pay")
        assert response.status_code == 400

        orders = client.get("/orders").json()
        assert [order["status"] for order in orders] == ["expired"]

    def test_cancel(self, client):
        _add(client, "A")
        client.post("/checkout")
        response = client.post("/checkout/cancel")
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"

    def test_pay_without_pending_order(self, client):
        response = client.post("/checkout/pay")
        assert response.status_code == 400


class TestOrderHistoryEndpoint:
    def test_history_in_resolution_order(self, client, timer):
        _add(client, "A")
        client.post("/checkout")
        client.post("/checkout/cancel")

        _add(client, "B", times=2)
        client.post("/checkout")
        timer.advance(minutes=15)

        _add(client, "A", times=2)
        client.post("/checkout")
        client.post("/checkout/pay")

        orders = client.get("/orders").json()
        assert [order["status"] for order in orders] == ["cancelled", "expired", "completed"]
        assert [order["total"] for order in orders] == [25, 60, 50]
        assert orders[1]["lines"] == [{"item_id": "B", "unit_price": 30, "quantity": 2}]
