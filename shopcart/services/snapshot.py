"""
JSON snapshot of cart items.

Shape: ``[{"id": 1, "name": "...", "price": 50, "quantity": 1}, ...]``.
Numbers are written as exact decimal text and read back as Decimal, so
prices and fractional quantities survive a round trip unchanged.
"""
from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Union

from shopcart.services.models import LineItem
from shopcart.utils.validators import ParsedOk, parse_quantity, to_decimal

log = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Snapshot text is unusable as cart items."""


def _number_text(value: Union[int, Decimal]) -> str:
    if isinstance(value, int):
        return str(value)
    if value == value.to_integral_value():
        return str(int(value))
    # str(Decimal) is always a valid JSON number for finite values
    return str(value)


def _encode_item(item: LineItem) -> str:
    d = item.to_dict()
    return (
        "{"
        f'"id": {json.dumps(d["id"])}, '
        f'"name": {json.dumps(d["name"], ensure_ascii=False)}, '
        f'"price": {_number_text(d["price"])}, '
        f'"quantity": {_number_text(d["quantity"])}'
        "}"
    )


def encode_items(items: Sequence[LineItem]) -> str:
    return "[" + ", ".join(_encode_item(it) for it in items) + "]"


def _coerce_entry(entry: Any) -> Optional[LineItem]:
    """Best-effort conversion of one stored entry; None when it has no usable line item."""
    if not isinstance(entry, dict):
        return None

    item_id = to_decimal(entry.get("id"))
    if item_id is None or item_id != item_id.to_integral_value():
        return None

    price = to_decimal(entry.get("price"))
    if price is None or price < 0:
        return None

    qty = parse_quantity(entry.get("quantity"))
    if not isinstance(qty, ParsedOk):
        return None

    name = entry.get("name")
    return LineItem(
        id=int(item_id),
        name="" if name is None else str(name),
        unit_price=price,
        quantity=qty.value,
    )


def decode_items(raw: str) -> List[LineItem]:
    """
    Decode snapshot text into line items.

    Numeric strings are coerced and entries that cannot be read as a line
    item are skipped with a warning; the rest are adopted in stored order.

    Raises:
        SnapshotError: malformed JSON, not a list, empty list, or no
            entry usable as a line item
    """
    try:
        data = json.loads(raw, parse_float=Decimal)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotError(f"snapshot is not a list: {type(data).__name__}")
    if not data:
        raise SnapshotError("snapshot is empty")

    items = []
    for pos, entry in enumerate(data):
        item = _coerce_entry(entry)
        if item is None:
            log.warning("Skipping unusable snapshot entry #%s: %r", pos, entry)
            continue
        items.append(item)

    if not items:
        raise SnapshotError("snapshot has no usable line items")
    return items
