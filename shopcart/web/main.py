from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from decimal import Decimal
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from shopcart.config import settings
from shopcart.services.cart import CartEngine, get_engine
from shopcart.services.pricing import line_total, round_money
from shopcart.utils.formatters import money


BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"


@asynccontextmanager
async def lifespan(_: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    get_engine()
    yield


app = FastAPI(title="Shopping Cart", lifespan=lifespan)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["money"] = money

if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def _render(request: Request, name: str, ctx: dict[str, Any]) -> HTMLResponse:
    base = {
        "currency": settings.currency,
    }
    base.update(ctx)
    return templates.TemplateResponse(request, name, base)


def _back() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


# ---------------- cart page ----------------

@app.get("/", response_class=HTMLResponse)
def index(request: Request, engine: CartEngine = Depends(get_engine)):
    state = engine.state
    rows = [{"item": it, "line_total": line_total(it)} for it in state.items]
    return _render(
        request,
        "cart.html",
        {
            "rows": rows,
            "state": state,
            "totals": engine.totals(),
        },
    )


# ---------------- edits ----------------

@app.post("/items/{item_id}/quantity")
def item_quantity(
    item_id: int,
    quantity: str = Form(""),
    engine: CartEngine = Depends(get_engine),
):
    engine.update_quantity(item_id, quantity)
    return _back()


@app.post("/items/{item_id}/remove")
def item_remove(item_id: int, engine: CartEngine = Depends(get_engine)):
    engine.remove_item(item_id)
    return _back()


@app.post("/discount")
def discount(discount: str = Form(""), engine: CartEngine = Depends(get_engine)):
    engine.set_discount_input(discount)
    return _back()


# ---------------- json ----------------

@app.get("/api/cart")
def api_cart(engine: CartEngine = Depends(get_engine)) -> dict[str, Any]:
    state = engine.state
    totals = engine.totals()
    return {
        "items": [
            {
                "id": it.id,
                "name": it.name,
                "price": str(round_money(it.unit_price)),
                "quantity": str(it.quantity) if isinstance(it.quantity, Decimal) else it.quantity,
                "line_total": str(round_money(line_total(it))),
            }
            for it in state.items
        ],
        "discount_input": state.discount_input,
        "discount_error": state.discount_error,
        "discount_status": state.discount_status.value,
        "totals": {
            "subtotal": str(round_money(totals.subtotal)),
            "discount_amount": str(round_money(totals.discount_amount)),
            "final_total": str(round_money(totals.final_total)),
        },
    }
