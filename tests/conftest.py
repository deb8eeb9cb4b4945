# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import ProductStore
from product_api.main import create_app

API_KEY = "test-key"


@pytest.fixture
def store():
    return ProductStore()

@pytest.fixture
def app(store):
    return create_app(store=store, settings=Settings(api_key=API_KEY))

@pytest.fixture
def client(app):
    return TestClient(app)

@pytest.fixture
def new_product():
    return {
        "name": "Monitor",
        "description": "27 inch display",
        "price": 199.5,
        "category": "Electronics",
        "inStock": False,
    }

@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}
