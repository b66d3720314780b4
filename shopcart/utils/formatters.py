from __future__ import annotations

from decimal import Decimal
from html import escape
from typing import List

from shopcart.config import settings
from shopcart.constants import EMPTY_CART_TEXT
from shopcart.services.models import CartState, CartTotals
from shopcart.services.pricing import line_total, round_money


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def money(v) -> str:
    amount = round_money(Decimal(str(v)) if isinstance(v, float) else Decimal(v))
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{settings.decimals}f}"
    whole, _, frac = text.partition(".")
    out = f"{sign}{settings.currency_symbol}{_group_indian(whole)}"
    return f"{out}.{frac}" if frac else out


def cart_lines(state: CartState, totals: CartTotals) -> List[str]:
    """Plain-text cart listing for chat surfaces."""
    lines = ["<b>Shopping Cart</b>"]
    if not state.items:
        lines.append(EMPTY_CART_TEXT)
    for it in state.items:
        lines.append(
            f"• #{it.id} {escape(it.name)} — {money(it.unit_price)} × {it.quantity} = {money(line_total(it))}"
        )
    lines.append("")
    if state.discount_input:
        lines.append(f"Discount (%): {escape(state.discount_input)}")
    if state.discount_error:
        lines.append(f"⚠️ {state.discount_error}")
    lines.append(f"Subtotal: {money(totals.subtotal)}")
    lines.append(f"Discount Amount: {money(totals.discount_amount)}")
    lines.append(f"<b>Final Total: {money(totals.final_total)}</b>")
    return lines
