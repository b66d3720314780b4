from aiogram import Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove

from shopcart.bot.keyboards import main_kb
from shopcart.bot.states import DiscountEdit
from shopcart.config import settings
from shopcart.services.cart import CartEngine, get_engine
from shopcart.utils.formatters import cart_lines

router = Router()

CLEAR_DISCOUNT = "-"


def _is_admin(message: Message) -> bool:
    try:
        return int(message.from_user.id) == int(settings.admin_id)
    except (AttributeError, TypeError, ValueError):
        return False


def _parse_id(text: str) -> int | None:
    try:
        return int(text.strip().lstrip("#"))
    except ValueError:
        return None


def _cart_text(engine: CartEngine) -> str:
    return "\n".join(cart_lines(engine.state, engine.totals()))


def _discount_value(text: str) -> str:
    t = text.strip()
    return "" if t == CLEAR_DISCOUNT else t


@router.message(Command("start"))
async def cmd_start(message: Message):
    if not _is_admin(message):
        return
    get_engine()
    await message.answer("✅ Cart bot is running", reply_markup=main_kb())


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if not _is_admin(message):
        return
    await state.clear()
    await message.answer("❎ Cancelled.", reply_markup=ReplyKeyboardRemove())


@router.message(Command("help"))
async def cmd_help(message: Message):
    if not _is_admin(message):
        return

    text = (
        "<b>Cart bot — commands</b>\n\n"
        "/cart — show the cart and totals\n"
        "/qty ID N — set quantity of item ID to N (N >= 1)\n"
        "/remove ID — remove item ID\n"
        "/discount VALUE — discount in percent, 0 to 100\n"
        "/discount - — clear the discount\n"
        "/discount — ask for the value\n"
        "/cancel — cancel input\n"
        "/ping — check\n"
    )
    await message.answer(text)


@router.message(Command("ping"))
async def cmd_ping(message: Message):
    if not _is_admin(message):
        return
    await message.answer("pong ✅")


@router.message(Command("cart"))
async def cmd_cart(message: Message):
    if not _is_admin(message):
        return
    await message.answer(_cart_text(get_engine()))


@router.message(Command("qty"))
async def cmd_qty(message: Message):
    if not _is_admin(message):
        return

    parts = (message.text or "").split()
    if len(parts) != 3:
        await message.answer("Format: /qty ID N")
        return

    _, id_s, qty_s = parts
    item_id = _parse_id(id_s)
    if item_id is None:
        await message.answer("ID must be a number, e.g. /qty 1 3")
        return

    engine = get_engine()
    # invalid quantities and unknown ids leave the cart as it was
    engine.update_quantity(item_id, qty_s)
    await message.answer(_cart_text(engine))


@router.message(Command("remove"))
async def cmd_remove(message: Message):
    if not _is_admin(message):
        return

    parts = (message.text or "").split()
    if len(parts) != 2:
        await message.answer("Format: /remove ID")
        return

    item_id = _parse_id(parts[1])
    if item_id is None:
        await message.answer("ID must be a number, e.g. /remove 2")
        return

    engine = get_engine()
    engine.remove_item(item_id)
    await message.answer(_cart_text(engine))


@router.message(Command("discount"))
async def cmd_discount(message: Message, state: FSMContext):
    if not _is_admin(message):
        return

    parts = (message.text or "").split(maxsplit=1)
    if len(parts) >= 2 and parts[1].strip():
        engine = get_engine()
        engine.set_discount_input(_discount_value(parts[1]))
        await message.answer(_cart_text(engine))
        return

    await state.set_state(DiscountEdit.waiting_value)
    await message.answer(
        "Enter the discount in percent (0 - 100), or '-' to clear.\nCancel: /cancel",
        reply_markup=ReplyKeyboardRemove(),
    )


@router.message(DiscountEdit.waiting_value)
async def discount_wait_value(message: Message, state: FSMContext):
    if not _is_admin(message):
        return

    raw = (message.text or "").strip()
    if not raw or raw.startswith("/"):
        await message.answer("Enter the discount as text. Cancel: /cancel")
        return

    engine = get_engine()
    try:
        engine.set_discount_input(_discount_value(raw))
    finally:
        await state.clear()
    await message.answer(_cart_text(engine))
