# tests/test_middleware.py
import logging

import pytest

from product_api.errors import ValidationError
from product_api.middleware import validate_product

VALID = {
    "name": "Lamp",
    "description": "",
    "price": 0,
    "category": "Home",
    "inStock": True,
}


def _error(r):
    return r.json()["error"]


# ---------------------------
# Authentication
# ---------------------------
@pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}, {"x-api-key": ""}])
def test_post_without_valid_key_is_401(client, headers):
    # even an invalid body gets 401 first
    for body in (VALID, {"price": -1}):
        r = client.post("/api/products", json=body, headers=headers)
        assert r.status_code == 401
        assert _error(r) == {
            "name": "AuthenticationError",
            "message": "Invalid or missing API key",
            "statusCode": 401,
        }


def test_put_and_delete_need_key(client, store):
    assert client.put("/api/products/1", json=VALID).status_code == 401
    assert client.delete("/api/products/1").status_code == 401
    assert len(store) == 2


def test_auth_runs_before_not_found(client):
    r = client.delete("/api/products/999")
    assert r.status_code == 401


def test_reads_need_no_key(client):
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/products/1").status_code == 200


# ---------------------------
# Body validation
# ---------------------------
@pytest.mark.parametrize("field, value, message", [
    ("name", None, "Name is required and must be a non-empty string"),
    ("name", "   ", "Name is required and must be a non-empty string"),
    ("name", 12, "Name is required and must be a non-empty string"),
    ("description", None, "Description is required and must be a string"),
    ("description", ["a"], "Description is required and must be a string"),
    ("price", None, "Price is required and must be a non-negative number"),
    ("price", -0.01, "Price is required and must be a non-negative number"),
    ("price", "10", "Price is required and must be a non-negative number"),
    ("price", True, "Price is required and must be a non-negative number"),
    ("category", None, "Category is required and must be a string"),
    ("category", 5, "Category is required and must be a string"),
    ("inStock", None, "inStock is required and must be a boolean"),
    ("inStock", "yes", "inStock is required and must be a boolean"),
    ("inStock", 1, "inStock is required and must be a boolean"),
])
def test_single_rule_violations(client, auth, field, value, message):
    body = dict(VALID)
    if value is None:
        del body[field]
    else:
        body[field] = value
    for r in (client.post("/api/products", json=body, headers=auth),
              client.put("/api/products/1", json=body, headers=auth)):
        assert r.status_code == 400
        assert _error(r) == {"name": "ValidationError", "message": message, "statusCode": 400}


def test_first_broken_rule_wins(client, auth):
    body = {"name": "", "price": -5, "inStock": "no"}
    r = client.post("/api/products", json=body, headers=auth)
    assert _error(r)["message"] == "Name is required and must be a non-empty string"

    body = {"name": "ok", "description": "d", "price": -5, "inStock": "no"}
    r = client.post("/api/products", json=body, headers=auth)
    assert _error(r)["message"] == "Price is required and must be a non-negative number"


def test_validation_runs_before_not_found(client, auth):
    r = client.put("/api/products/999", json={"name": ""}, headers=auth)
    assert r.status_code == 400


def test_rejected_body_leaves_store_untouched(client, auth, store):
    client.post("/api/products", json=dict(VALID, price=-1), headers=auth)
    assert len(store) == 2
    assert store.next_id == 3


def test_empty_and_non_object_bodies(client, auth):
    r = client.post("/api/products", headers=auth)
    assert _error(r)["message"] == "Name is required and must be a non-empty string"
    r = client.post("/api/products", json=[VALID], headers=auth)
    assert _error(r)["message"] == "Name is required and must be a non-empty string"


def test_malformed_json(client, auth):
    r = client.post("/api/products", content=b"{not json",
                    headers=dict(auth, **{"content-type": "application/json"}))
    assert r.status_code == 400
    assert _error(r)["message"] == "Request body must be valid JSON"


def test_validate_product_accepts_integers_and_empty_strings():
    product = validate_product(dict(VALID, price=3, extra="ignored"))
    assert product.price == 3
    assert product.description == ""
    assert product.in_stock is True


def test_validate_product_rejects_non_finite_price():
    with pytest.raises(ValidationError) as exc:
        validate_product(dict(VALID, price=float("inf")))
    assert exc.value.status_code == 400


# ---------------------------
# Request logger
# ---------------------------
def test_every_request_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="product_api.middleware"):
        client.get("/api/products")
        client.get("/nope")
    lines = [r.getMessage() for r in caplog.records if r.name == "product_api.middleware"]
    assert len(lines) == 2
    assert lines[0].endswith("] GET /api/products")
    assert lines[1].endswith("] GET /nope")
    # ISO-8601 timestamp in brackets
    assert lines[0].startswith("[") and "T" in lines[0].split("]")[0]
