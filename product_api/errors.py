"""Failure taxonomy for the product API.

Each failure carries a human-readable message and a fixed HTTP status code.
Handlers raise these where a contract is violated; the handlers registered in
``product_api.handlers`` turn them into the JSON error envelope.
"""


class ProductApiError(Exception):
    """Base class for failures that map onto a fixed HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def name(self) -> str:
        return type(self).__name__


class NotFoundError(ProductApiError):
    """Raised when a product id or a route does not exist."""

    status_code = 404


class ValidationError(ProductApiError):
    """Raised when a body field or required query parameter is malformed."""

    status_code = 400


class AuthenticationError(ProductApiError):
    """Raised when the API key header is missing or wrong."""

    status_code = 401


def product_not_found(product_id) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found")


def route_not_found(method: str, path: str) -> NotFoundError:
    return NotFoundError(f"Route {method} {path} not found")
