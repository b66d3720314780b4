from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../shopcart repo
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    admin_id: int
    db_path: str
    storage_key: str
    currency: str
    currency_symbol: str
    decimals: int
    log_level: str


settings = Settings(
    bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    admin_id=_get_int("ADMIN_ID", "ADMIN_TG_ID", default=0) or 0,
    db_path=_get_path("CART_DB_PATH", "DB_PATH", default=str(ROOT_DIR / "data" / "cart.db")),
    storage_key=_get_env("CART_STORAGE_KEY", default="cartProducts") or "cartProducts",
    currency=_get_env("CURRENCY", default="INR") or "INR",
    currency_symbol=_get_env("CURRENCY_SYMBOL", default="₹") or "₹",
    decimals=_get_int("DECIMALS", default=2) or 2,
    log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
)


def require_bot_settings() -> None:
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is empty. Set BOT_TOKEN in .env")
    if not settings.admin_id:
        raise RuntimeError("ADMIN_ID is empty. Set ADMIN_ID (or ADMIN_TG_ID) in .env")
