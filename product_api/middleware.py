"""
Request interceptors for the product API.

- ``log_requests`` is HTTP middleware and sees every request, matched or not.
- ``require_api_key`` and ``validated_product`` are FastAPI dependencies that
  routes opt into. They run in the order a route lists them and raise a
  taxonomy failure to stop the chain; the route handler never learns which
  of them ran.
"""

import json
import logging
import math
import secrets
from datetime import datetime, timezone
from typing import Any, Callable, Dict, NamedTuple, Optional

from fastapi import Header, Request

from .database import ProductStore
from .errors import AuthenticationError, ValidationError
from .models import ProductIn

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    timestamp = datetime.now(timezone.utc).isoformat()
    logger.info("[%s] %s %s", timestamp, request.method, request.url.path)
    return await call_next(request)


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    expected = request.app.state.settings.api_key
    if x_api_key is None or not secrets.compare_digest(
        x_api_key.encode("utf-8"), expected.encode("utf-8")
    ):
        raise AuthenticationError("Invalid or missing API key")


# ---------------------------
# Product body schema
# ---------------------------
class FieldRule(NamedTuple):
    field: str
    message: str
    check: Callable[[Any], bool]


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _is_non_negative_number(value: Any) -> bool:
    # bool is an int subclass but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        price = float(value)
    except OverflowError:
        return False
    return math.isfinite(price) and price >= 0


def _is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


PRODUCT_SCHEMA = (
    FieldRule("name", "Name is required and must be a non-empty string", _is_non_empty_string),
    FieldRule("description", "Description is required and must be a string", _is_string),
    FieldRule("price", "Price is required and must be a non-negative number", _is_non_negative_number),
    FieldRule("category", "Category is required and must be a string", _is_string),
    FieldRule("inStock", "inStock is required and must be a boolean", _is_boolean),
)

_MISSING = object()


def validate_product(payload: Any) -> ProductIn:
    """Check ``payload`` against PRODUCT_SCHEMA, failing on the first broken rule.

    Anything that isn't a JSON object is checked as an empty object. Unknown
    keys, ``id`` included, are dropped.
    """
    body: Dict[str, Any] = payload if isinstance(payload, dict) else {}
    for rule in PRODUCT_SCHEMA:
        value = body.get(rule.field, _MISSING)
        if value is _MISSING or not rule.check(value):
            raise ValidationError(rule.message)
    return ProductIn.model_validate({rule.field: body[rule.field] for rule in PRODUCT_SCHEMA})


async def validated_product(request: Request) -> ProductIn:
    raw = await request.body()
    if not raw.strip():
        return validate_product({})
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    return validate_product(payload)
