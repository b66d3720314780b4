from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from shopcart.config import settings
from shopcart.services.models import CartState, CartTotals, DiscountStatus, LineItem
from shopcart.utils.validators import ParsedOk, parse_discount

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# enough digits for price * quantity at the largest accepted inputs
MONEY_PREC = 100


def round_money(value: Decimal) -> Decimal:
    d = Decimal(value)
    with localcontext() as ctx:
        # quantize fails once the result has more digits than the context allows
        ctx.prec = max(ctx.prec, d.adjusted() + settings.decimals + 2)
        return d.quantize(Decimal(1).scaleb(-settings.decimals), rounding=ROUND_HALF_UP)


def line_total(item: LineItem) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = MONEY_PREC
        return item.unit_price * item.quantity


def subtotal(items: Iterable[LineItem]) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = MONEY_PREC
        return sum((line_total(it) for it in items), ZERO)


def discount_amount(state: CartState) -> Decimal:
    # an invalid discount counts as no discount
    if state.discount_status is not DiscountStatus.VALID:
        return ZERO
    parsed = parse_discount(state.discount_input)
    if not isinstance(parsed, ParsedOk) or parsed.value is None:
        return ZERO
    with localcontext() as ctx:
        ctx.prec = MONEY_PREC
        return subtotal(state.items) * parsed.value / HUNDRED


def final_total(state: CartState) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = MONEY_PREC
        return subtotal(state.items) - discount_amount(state)


def compute_totals(state: CartState) -> CartTotals:
    sub = subtotal(state.items)
    disc = discount_amount(state)
    with localcontext() as ctx:
        ctx.prec = MONEY_PREC
        return CartTotals(subtotal=sub, discount_amount=disc, final_total=sub - disc)
