"""
Tests for the in-memory cart store.
"""

from datetime import datetime, timedelta

from storefront.models.cart import Cart
from storefront.web.cart_store import CartStore


def test_unknown_id_has_no_cart():
    assert CartStore().get("missing") is None


def test_saved_cart_is_a_snapshot(mock_cart):
    store = CartStore()
    cart_id = store.new_id()
    store.save(cart_id, mock_cart)

    mock_cart.notes = "changed after save"
    loaded = store.get(cart_id)
    assert loaded.notes == ""
    assert loaded.total_price == mock_cart.total_price

    loaded.clear()
    assert store.get(cart_id).total_items == 3


def test_ids_are_unique():
    store = CartStore()
    assert store.new_id() != store.new_id()


def test_idle_cart_expires(mock_cart):
    store = CartStore(idle_timeout=timedelta(minutes=5))
    store.save("abc", mock_cart)

    cart, _ = store._carts["abc"]
    store._carts["abc"] = (cart, datetime.now() - timedelta(minutes=6))

    assert store.get("abc") is None
    assert len(store) == 0


def test_least_recently_used_cart_is_evicted():
    store = CartStore(max_carts=2)
    store.save("first", Cart(notes="1"))
    store.save("second", Cart(notes="2"))

    cart, _ = store._carts["first"]
    store._carts["first"] = (cart, datetime.now() - timedelta(seconds=30))
    store.save("third", Cart(notes="3"))

    assert len(store) == 2
    assert store.get("first") is None
    assert store.get("third").notes == "3"
