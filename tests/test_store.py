# tests/test_store.py
import pytest

from product_api.database import ProductStore
from product_api.errors import NotFoundError
from product_api.models import ProductIn


def _fields(**overrides):
    data = dict(name="Pen", description="Blue ink", price=1.5, category="Office", in_stock=True)
    data.update(overrides)
    return ProductIn(**data)


def test_seed():
    store = ProductStore()
    assert [p.id for p in store.list()] == [1, 2]
    assert store.next_id == 3


def test_empty_store_starts_at_one():
    store = ProductStore(seed=[])
    assert len(store) == 0
    assert store.create(_fields()).id == 1


def test_list_is_a_snapshot():
    store = ProductStore()
    snapshot = store.list()
    store.create(_fields())
    assert len(snapshot) == 2
    assert len(store.list()) == 3


def test_get_missing():
    with pytest.raises(NotFoundError) as exc:
        ProductStore().get(7)
    assert exc.value.message == "Product with ID 7 not found"
    assert exc.value.status_code == 404


def test_update_keeps_id_and_position():
    store = ProductStore()
    updated = store.update(1, _fields(name="Pencil"))
    assert updated.id == 1
    assert [p.name for p in store.list()] == ["Pencil", "Desk Chair"]


def test_delete_returns_record_and_counter_keeps_going():
    store = ProductStore()
    created = store.create(_fields())
    removed = store.delete(created.id)
    assert removed == created
    with pytest.raises(NotFoundError):
        store.delete(created.id)
    assert store.create(_fields()).id == created.id + 1


def test_update_and_delete_missing():
    store = ProductStore()
    with pytest.raises(NotFoundError):
        store.update(5, _fields())
    with pytest.raises(NotFoundError):
        store.delete(5)
    assert len(store) == 2
