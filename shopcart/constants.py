from decimal import Decimal

from shopcart.services.models import CartConfig, LineItem

STORAGE_KEY = "cartProducts"

# seed items, used only when there is no usable snapshot
DEFAULT_CATALOG = (
    LineItem(id=1, name="Product A", unit_price=Decimal("50"), quantity=1),
    LineItem(id=2, name="Product B", unit_price=Decimal("30"), quantity=1),
)

DISCOUNT_ERROR_MESSAGE = "Discount must be a valid number between 0 and 100."

DISCOUNT_MIN = Decimal("0")
DISCOUNT_MAX = Decimal("100")

# largest accepted decimal exponent for user and snapshot numbers (values < 10**31)
MAX_NUMBER_EXPONENT = 30

EMPTY_CART_TEXT = "Your cart is empty."


def default_cart_config(storage_key: str = STORAGE_KEY) -> CartConfig:
    return CartConfig(storage_key=storage_key, default_catalog=DEFAULT_CATALOG)
