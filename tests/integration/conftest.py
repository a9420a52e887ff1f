"""Fixtures for HTTP tests against the assembled FastAPI app."""

import pytest
from fastapi.testclient import TestClient

PASSWORD = "correct-horse"


@pytest.fixture()
def client():
    from animalshop.app import build_app

    return TestClient(build_app())


@pytest.fixture()
def sign_up(client):
    """Register and sign in; returns ``(account_id, headers)``."""
    from animalshop.accounts import service as accounts

    def _sign_up(email="shopper@example.com", role="user"):
        response = client.post("/auth/register", json={"email": email, "password": PASSWORD})
        assert response.status_code == 201
        account_id = response.json()["id"]
        if role != "user":
            accounts.change_role(account_id, role)

        login = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert login.status_code == 200
        return account_id, {"Authorization": f"Bearer {login.json()['token']}"}

    return _sign_up


@pytest.fixture()
def shopper(sign_up):
    return sign_up("shopper@example.com")


@pytest.fixture()
def admin(sign_up):
    return sign_up("admin@example.com", role="admin")


@pytest.fixture()
def category(client, admin):
    _, headers = admin
    response = client.post("/categories", json={"name": "Dog Food"}, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def product(client, admin, category):
    _, headers = admin
    response = client.post(
        "/products",
        json={"name": "Dog Food Premium", "price": 49.99, "stock": 10, "category": category["slug"]},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def address_payload():
    return {
        "label": "Home",
        "first_name": "Jane",
        "last_name": "Doe",
        "address1": "12 Kennel Lane",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62701",
        "country": "US",
    }
