"""Cart data model: line items, cart state and engine configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class DiscountStatus(str, Enum):
    EMPTY = "empty"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class LineItem:
    """Single product line in the cart."""
    id: int
    name: str
    unit_price: Decimal
    quantity: Union[int, Decimal]

    def with_quantity(self, quantity: Union[int, Decimal]) -> "LineItem":
        return LineItem(id=self.id, name=self.name, unit_price=self.unit_price, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        """Serialized shape stored under the snapshot key."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.unit_price,
            "quantity": self.quantity,
        }



@dataclass(frozen=True)
class CartConfig:
    storage_key: str
    default_catalog: Tuple[LineItem, ...]


@dataclass(frozen=True)
class CartState:
    items: Tuple[LineItem, ...] = ()
    discount_input: str = ""
    discount_error: Optional[str] = None

    @property
    def discount_status(self) -> DiscountStatus:
        if not self.discount_input:
            return DiscountStatus.EMPTY
        if self.discount_error:
            return DiscountStatus.INVALID
        return DiscountStatus.VALID

    def find(self, item_id: int) -> Optional[LineItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal = field(default_factory=lambda: Decimal("0"))
    discount_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    final_total: Decimal = field(default_factory=lambda: Decimal("0"))
