from __future__ import annotations

import os

from .models import PriceType


NORMAL_KEY = "normal"
CLEARANCE_KEY = "clearance"
PRICE_IN_CART_KEY = "price_in_cart"

# Report order. Type lines in the input do not change this list.
DEFAULT_PRICE_TYPES: tuple[PriceType, ...] = (
    PriceType(key=NORMAL_KEY, display_name="Normal Price"),
    PriceType(key=CLEARANCE_KEY, display_name="Clearance Price"),
    PriceType(key=PRICE_IN_CART_KEY, display_name="Price In Cart"),
)

MIN_STOCK_QUANTITY = 3


def min_stock_from_env() -> int:
    raw = os.getenv("MIN_STOCK_QUANTITY", "").strip()
    if not raw:
        return MIN_STOCK_QUANTITY
    return int(raw)
