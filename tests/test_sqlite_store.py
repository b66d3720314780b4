"""
Tests for the sqlite key-value store
"""
import pytest

from shopcart.constants import DEFAULT_CATALOG, STORAGE_KEY, default_cart_config
from shopcart.db.sqlite import SqliteStore, StoreError
from shopcart.services.cart import CartEngine


@pytest.fixture
def sqlite_store(tmp_path):
    s = SqliteStore(str(tmp_path / "nested" / "cart.db"))
    s.init()
    return s


def test_get_missing_key(sqlite_store):
    assert sqlite_store.get("nope") is None


def test_set_overwrites(sqlite_store):
    sqlite_store.set("k", "one")
    sqlite_store.set("k", "two")
    assert sqlite_store.get("k") == "two"


def test_init_is_repeatable(sqlite_store):
    sqlite_store.set("k", "v")
    sqlite_store.init()
    assert sqlite_store.get("k") == "v"


def test_get_without_schema_raises_store_error(tmp_path):
    s = SqliteStore(str(tmp_path / "bare.db"))
    with pytest.raises(StoreError):
        s.get("k")


def test_engine_state_survives_restart(sqlite_store):
    config = default_cart_config(STORAGE_KEY)
    first = CartEngine(sqlite_store, config)
    first.load_initial_state()
    first.update_quantity(2, "5")
    first.remove_item(1)

    second = CartEngine(sqlite_store, config)
    second.load_initial_state()
    assert [(it.id, it.quantity) for it in second.items] == [(2, 5)]


def test_engine_falls_back_on_corrupt_row(sqlite_store):
    sqlite_store.set(STORAGE_KEY, "][")
    eng = CartEngine(sqlite_store, default_cart_config(STORAGE_KEY))
    eng.load_initial_state()
    assert eng.items == DEFAULT_CATALOG


def test_process_engine_is_shared_and_resettable(tmp_path, monkeypatch):
    from dataclasses import replace

    from shopcart.services import cart

    monkeypatch.setattr(cart, "settings", replace(cart.settings, db_path=str(tmp_path / "proc.db")))
    cart.reset_engine()
    try:
        eng = cart.get_engine()
        assert cart.get_engine() is eng
        assert eng.items == DEFAULT_CATALOG
        eng.update_quantity(1, 9)

        cart.reset_engine()
        fresh = cart.get_engine()
        assert fresh is not eng
        assert fresh.items[0].quantity == 9
    finally:
        cart.reset_engine()
