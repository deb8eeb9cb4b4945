import threading
from typing import Iterable, List, Optional

from .errors import product_not_found
from .models import Product, ProductIn

# This file holds the in-memory product store and its lock.

SEED_PRODUCTS: List[Product] = [
    Product(
        id=1,
        name="Laptop",
        description="High-performance laptop for professionals",
        price=1299.99,
        category="Electronics",
        in_stock=True,
    ),
    Product(
        id=2,
        name="Desk Chair",
        description="Ergonomic office chair",
        price=249.99,
        category="Furniture",
        in_stock=True,
    ),
]


class ProductStore:
    """Ordered collection of products plus the next-id counter.

    Every method takes the lock only for the read or mutation itself, so
    callers never hold it across request parsing or I/O.
    """

    def __init__(self, seed: Optional[Iterable[Product]] = None):
        products = list(SEED_PRODUCTS if seed is None else seed)
        self._products: List[Product] = products
        self._next_id = max((p.id for p in products), default=0) + 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    def _index_of(self, product_id: int) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise product_not_found(product_id)

    def list(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id: int) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)]

    def create(self, fields: ProductIn) -> Product:
        with self._lock:
            product = Product.from_input(self._next_id, fields)
            self._next_id += 1
            self._products.append(product)
            return product

    def update(self, product_id: int, fields: ProductIn) -> Product:
        with self._lock:
            idx = self._index_of(product_id)
            product = Product.from_input(product_id, fields)
            self._products[idx] = product
            return product

    def delete(self, product_id: int) -> Product:
        with self._lock:
            return self._products.pop(self._index_of(product_id))
