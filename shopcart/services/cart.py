from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from shopcart.config import settings
from shopcart.constants import DISCOUNT_ERROR_MESSAGE, default_cart_config
from shopcart.db.sqlite import SqliteStore, StoreError
from shopcart.services.models import CartConfig, CartState, CartTotals, LineItem
from shopcart.services.pricing import compute_totals
from shopcart.services.snapshot import SnapshotError, decode_items, encode_items
from shopcart.utils.validators import ParsedInvalid, parse_discount, parse_quantity

logger = logging.getLogger(__name__)

Listener = Callable[[CartState, CartTotals], None]


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class CartEngine:
    """
    Owns the cart state for one session.

    Every change to the items is written to the store right away (last write
    wins) and the registered listeners get the new state and totals.
    The discount lives only in memory.
    """

    def __init__(self, store: KeyValueStore, config: Optional[CartConfig] = None):
        self.store = store
        self.config = config or default_cart_config()
        self._state = CartState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return self._state.items

    @property
    def is_empty(self) -> bool:
        return not self._state.items

    def totals(self) -> CartTotals:
        return compute_totals(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---------------- load ----------------

    def _read_snapshot(self) -> Optional[str]:
        try:
            return self.store.get(self.config.storage_key)
        except StoreError as e:
            logger.warning("Cart snapshot read failed, using default catalog: %s", e)
            return None

    def load_initial_state(self) -> CartState:
        raw = self._read_snapshot()
        items: Sequence[LineItem]

        if not raw:
            logger.info("No stored cart under %r, using default catalog", self.config.storage_key)
            items = self.config.default_catalog
        else:
            try:
                items = decode_items(raw)
            except SnapshotError as e:
                logger.warning("Error parsing stored cart, using default catalog: %s", e)
                items = self.config.default_catalog

        self._state = CartState(items=tuple(items))
        self._persist()
        self._notify()
        return self._state

    # ---------------- mutations ----------------

    def update_quantity(self, item_id: int, new_quantity: Any) -> bool:
        parsed = parse_quantity(new_quantity)
        if isinstance(parsed, ParsedInvalid):
            return False
        if self._state.find(item_id) is None:
            return False

        items = tuple(
            it.with_quantity(parsed.value) if it.id == item_id else it
            for it in self._state.items
        )
        return self._set_items(items)

    def remove_item(self, item_id: int) -> bool:
        items = tuple(it for it in self._state.items if it.id != item_id)
        if len(items) == len(self._state.items):
            return False
        return self._set_items(items)

    def set_discount_input(self, raw_value: Optional[str]) -> CartState:
        text = "" if raw_value is None else str(raw_value)
        error = DISCOUNT_ERROR_MESSAGE if isinstance(parse_discount(text), ParsedInvalid) else None
        self._state = replace(self._state, discount_input=text, discount_error=error)
        self._notify()
        return self._state

    # ---------------- internals ----------------

    def _set_items(self, items: Tuple[LineItem, ...]) -> bool:
        if items == self._state.items:
            return False
        self._state = replace(self._state, items=items)
        self._persist()
        self._notify()
        return True

    def _persist(self) -> None:
        try:
            self.store.set(self.config.storage_key, encode_items(self._state.items))
        except StoreError as e:
            # in-memory state stays as is
            logger.error("Cart snapshot write failed: %s", e)

    def _notify(self) -> None:
        totals = self.totals()
        for listener in list(self._listeners):
            listener(self._state, totals)


_ENGINE: Optional[CartEngine] = None


def get_engine() -> CartEngine:
    """Process-wide engine over the configured sqlite store, loaded on first use."""
    global _ENGINE
    if _ENGINE is None:
        store = SqliteStore(settings.db_path)
        try:
            store.init()
        except StoreError as e:
            logger.error("Cart store init failed: %s", e)
        engine = CartEngine(store, default_cart_config(settings.storage_key))
        engine.load_initial_state()
        _ENGINE = engine
    return _ENGINE


def reset_engine() -> None:
    global _ENGINE
    _ENGINE = None
