#!/usr/bin/env python
import asyncio
import os

from sdk.pystore import StoreApiError, StoreClient


async def create_many(c, count):
    return await asyncio.gather(*(
        c.create_product_async(f"Widget {i}", "Batch item", 1.0 + i, "Widgets")
        for i in range(count)
    ))


def main():
    c = StoreClient(
        base_url=os.getenv("STORE_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "secret-api-key-123"),
    )

    # -----------------------------
    # Reads
    # -----------------------------
    print(c.hello())

    print("\nListing products...")
    print(c.list_products())

    print("\nFiltering by category 'electronics'...")
    print(c.list_products(category="electronics"))

    print("\nSearching for 'lap'...")
    print(c.search_products("lap"))

    print("\nStatistics...")
    print(c.get_statistics())

    # -----------------------------
    # Writes
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Keyboard", "Mechanical keyboard", 89.5, "Electronics")
    print(created)
    pid = created["product"]["id"]

    print(f"\nUpdating product {pid}...")
    print(c.update_product(pid, "Keyboard", "Mechanical keyboard, brown switches", 79.0, "Electronics", False))

    print(f"\nDeleting product {pid}...")
    print(c.delete_product(pid))

    # -----------------------------
    # Error cases
    # -----------------------------
    print("\nError cases...")
    anonymous = StoreClient(base_url=c.base_url)
    for label, call in [
        ("missing product", lambda: c.get_product(pid)),
        ("no API key", lambda: anonymous.create_product("X", "", 1, "Misc")),
        ("negative price", lambda: c.create_product("X", "", -1, "Misc")),
        ("search without name", lambda: c.search_products("")),
    ]:
        try:
            call()
        except StoreApiError as e:
            print(f"  {label}: {e}")

    # -----------------------------
    # Concurrent creates
    # -----------------------------
    print("\nCreating 10 products concurrently...")
    results = asyncio.run(create_many(c, 10))
    ids = [r["product"]["id"] for r in results]
    print(f"Assigned ids: {sorted(ids)} (distinct: {len(set(ids)) == len(ids)})")
    for product_id in ids:
        c.delete_product(product_id)


if __name__ == "__main__":
    main()
