"""Pytest configuration and fixtures"""
import os
import tempfile

import pytest

# Set test environment variables before shopcart.config is imported
os.environ.setdefault("BOT_TOKEN", "test_token")
os.environ.setdefault("ADMIN_ID", "42")
os.environ.setdefault("CART_DB_PATH", os.path.join(tempfile.gettempdir(), "shopcart-tests", "cart.db"))

from decimal import Decimal

from shopcart.constants import STORAGE_KEY, default_cart_config
from shopcart.db.sqlite import MemoryStore
from shopcart.services.cart import CartEngine
from shopcart.services.models import LineItem


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def config():
    return default_cart_config(STORAGE_KEY)


@pytest.fixture
def engine(store, config):
    """Engine loaded from an empty store, i.e. holding the default catalog"""
    eng = CartEngine(store, config)
    eng.load_initial_state()
    return eng


@pytest.fixture
def item_a():
    return LineItem(id=1, name="Product A", unit_price=Decimal("50"), quantity=1)


@pytest.fixture
def item_b():
    return LineItem(id=2, name="Product B", unit_price=Decimal("30"), quantity=1)
