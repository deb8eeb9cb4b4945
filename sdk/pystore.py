# sdk/pystore.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print


class StoreApiError(Exception):
    """Raised for any non-2xx response; mirrors the server's error envelope."""

    def __init__(self, status_code: int, name: str, message: str):
        self.status_code = status_code
        self.name = name
        self.message = message
        super().__init__(f"{status_code} {name}: {message}")


def _product_payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        # anything with requests' call signature works, e.g. fastapi.testclient.TestClient
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _handle(self, r):
        if r.status_code < 400:
            return r.json()
        try:
            err = r.json()["error"]
            status, name, message = err["statusCode"], err["name"], err["message"]
        except (ValueError, KeyError, TypeError):
            # not our envelope, e.g. a proxy error page
            raise StoreApiError(r.status_code, "HTTPError", r.text)
        raise StoreApiError(status, name, message)

    def hello(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        return self._handle(r)

    # Product reads
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        return self._handle(r)

    def search_products(self, name: str):
        r = self.session.get(f"{self.base_url}/api/products/search", params={"name": name}, timeout=self.timeout)
        return self._handle(r)

    def get_statistics(self):
        r = self.session.get(f"{self.base_url}/api/products/statistics", timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._handle(r)

    # Product writes (need the API key)
    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.post(f"{self.base_url}/api/products", json=payload, timeout=self.timeout)
        return self._handle(r)

    def update_product(self, product_id: int, name: str, description: str, price: float,
                       category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=payload, timeout=self.timeout)
        return self._handle(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        return self._handle(r)

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: bool = True, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        payload = _product_payload(name, description, price, category, in_stock)
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            r = await client.post("/api/products", json=payload, headers=headers)
            return self._handle(r)


def _parse_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes", "y"}


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--url", default=os.getenv("STORE_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter products by category")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search for products by name")
    sp.add_argument("--name", required=True, help="Substring of the product name")

    subparsers.add_parser("statistics", help="Per-category statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    for cmd in ("create-product", "update-product"):
        p = subparsers.add_parser(cmd)
        if cmd == "update-product":
            p.add_argument("--product-id", type=int, required=True)
        p.add_argument("--name", required=True)
        p.add_argument("--description", default="")
        p.add_argument("--price", type=float, required=True)
        p.add_argument("--category", required=True)
        p.add_argument("--in-stock", type=_parse_bool, default=True)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.name))
        elif args.command == "statistics":
            print(c.get_statistics())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
        elif args.command == "update-product":
            print(c.update_product(args.product_id, args.name, args.description, args.price,
                                   args.category, args.in_stock))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    except StoreApiError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
