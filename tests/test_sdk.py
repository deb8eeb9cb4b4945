# tests/test_sdk.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.pystore import StoreApiError, StoreClient

API_KEY = "test-key"


@pytest.fixture
def sdk(app):
    return StoreClient(base_url="http://testserver", api_key=API_KEY, session=TestClient(app))


def test_reads(sdk):
    assert sdk.hello() == {"message": "Hello World"}
    assert sdk.list_products(limit=1, page=2)["data"][0]["name"] == "Desk Chair"
    assert sdk.list_products(category="furniture")["total"] == 1
    assert sdk.search_products("chair")["total"] == 1
    assert sdk.get_statistics()["totalProducts"] == 2
    assert sdk.get_product(1)["name"] == "Laptop"


def test_crud_round_trip(sdk):
    created = sdk.create_product("Kettle", "Electric", 35.0, "Kitchen", in_stock=False)["product"]
    assert created["id"] == 3
    assert created["inStock"] is False

    updated = sdk.update_product(3, "Kettle", "Electric, 1.7l", 39.0, "Kitchen")["product"]
    assert updated["price"] == 39.0
    assert sdk.get_product(3) == updated

    deleted = sdk.delete_product(3)
    assert deleted["message"] == "Product deleted successfully"
    with pytest.raises(StoreApiError) as exc:
        sdk.get_product(3)
    assert exc.value.status_code == 404
    assert exc.value.message == "Product with ID 3 not found"


def test_errors_are_raised(app):
    anonymous = StoreClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(StoreApiError) as exc:
        anonymous.create_product("Kettle", "", 35.0, "Kitchen")
    assert exc.value.status_code == 401
    assert exc.value.name == "AuthenticationError"


def test_validation_error_surfaces(sdk):
    with pytest.raises(StoreApiError) as exc:
        sdk.create_product("Kettle", "", -1, "Kitchen")
    assert exc.value.status_code == 400
    assert exc.value.message == "Price is required and must be a non-negative number"


def test_create_product_async(app, store):
    client = StoreClient(base_url="http://test", api_key=API_KEY)
    transport = httpx.ASGITransport(app=app)
    body = asyncio.run(client.create_product_async("Fan", "Desk fan", 15.0, "Home", transport=transport))
    assert body["product"]["id"] == 3
    assert len(store) == 3
