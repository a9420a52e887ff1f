"""Integration tests for checkout and /orders endpoints via TestClient."""

import pytest


@pytest.fixture()
def order(client, shopper, product, address_payload):
    _, headers = shopper
    address = client.post("/addresses", json=address_payload, headers=headers).json()
    client.post("/cart/items", json={"product_id": product["id"], "quantity": 2}, headers=headers)

    response = client.post("/cart/checkout", json={"address_id": address["id"]}, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestCheckout:
    def test_checkout_creates_pending_order(self, client, order, product):
        assert order["status"] == "pending"
        assert order["order_number"] == 1001
        assert order["total"] == 99.98
        assert client.get(f"/products/{product['id']}").json()["stock"] == 8

    def test_guest_cannot_check_out(self, client, product):
        headers = {"X-Guest-Id": "guest-123"}
        client.post("/cart/items", json={"product_id": product["id"], "quantity": 1}, headers=headers)
        assert client.post("/cart/checkout", headers=headers).status_code == 400

    def test_empty_cart(self, client, shopper):
        _, headers = shopper
        assert client.post("/cart/checkout", headers=headers).status_code == 400

    def test_missing_address(self, client, shopper, product):
        _, headers = shopper
        client.post("/cart/items", json={"product_id": product["id"], "quantity": 1}, headers=headers)
        assert client.post("/cart/checkout", headers=headers).status_code == 400

    def test_insufficient_stock_leaves_everything(self, client, shopper, admin, product, address_payload):
        _, headers = shopper
        _, admin_headers = admin
        address = client.post("/addresses", json=address_payload, headers=headers).json()
        client.post("/cart/items", json={"product_id": product["id"], "quantity": 5}, headers=headers)
        client.put(f"/products/{product['id']}/stock", json={"stock": 2}, headers=admin_headers)

        response = client.post("/cart/checkout", json={"address_id": address["id"]}, headers=headers)

        assert response.status_code == 400
        assert response.json()["stock"]["product_name"] == "Dog Food Premium"
        assert response.json()["stock"]["available"] == 2
        assert client.get(f"/products/{product['id']}").json()["stock"] == 2
        assert client.get("/cart", headers=headers).json()["item_count"] == 5


class TestOrderReads:
    def test_list_own_orders(self, client, shopper, order):
        _, headers = shopper
        listing = client.get("/orders", headers=headers).json()
        assert [o["id"] for o in listing["data"]] == [order["id"]]

    def test_other_user_cannot_see_order(self, client, sign_up, order):
        _, headers = sign_up("other@example.com")
        assert client.get(f"/orders/{order['id']}", headers=headers).status_code == 404
        assert client.get("/orders", headers=headers).json()["data"] == []

    def test_admin_sees_all(self, client, admin, order):
        _, headers = admin
        assert client.get(f"/orders/{order['id']}", headers=headers).status_code == 200
        assert client.get("/orders?status=pending", headers=headers).json()["meta"]["total"] == 1


class TestOrderStatus:
    def test_admin_transition(self, client, admin, order):
        _, headers = admin
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "processing"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == "processing"

    def test_invalid_transition(self, client, admin, order):
        _, headers = admin
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "delivered"}, headers=headers)
        assert response.status_code == 400

    def test_customer_cannot_change_status(self, client, shopper, order):
        _, headers = shopper
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "processing"}, headers=headers)
        assert response.status_code == 403

    def test_customer_cancel_restocks(self, client, shopper, order, product):
        _, headers = shopper
        response = client.patch(f"/orders/{order['id']}/cancel", headers=headers)
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert client.get(f"/products/{product['id']}").json()["stock"] == 10

    def test_cancel_after_processing_rejected(self, client, shopper, admin, order):
        _, headers = shopper
        _, admin_headers = admin
        client.patch(f"/orders/{order['id']}/status", json={"status": "processing"}, headers=admin_headers)
        assert client.patch(f"/orders/{order['id']}/cancel", headers=headers).status_code == 400
