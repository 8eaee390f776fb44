from __future__ import annotations

from typing import Iterable

from .models import PriceType, PriceTypeStats, Product
from .price_types import CLEARANCE_KEY, MIN_STOCK_QUANTITY, NORMAL_KEY, PRICE_IN_CART_KEY


def is_available(product: Product, *, min_stock: int = MIN_STOCK_QUANTITY) -> bool:
    qty = product.quantity_in_stock
    return qty is not None and qty >= min_stock


def filter_available(products: Iterable[Product], *, min_stock: int = MIN_STOCK_QUANTITY) -> list[Product]:
    return [p for p in products if is_available(p, min_stock=min_stock)]


def price_status_key(product: Product) -> str:
    # nan on either side compares False, so it lands in normal.
    return CLEARANCE_KEY if product.clearance_price < product.normal_price else NORMAL_KEY


def classify_products(
    products: Iterable[Product],
    price_types: Iterable[PriceType],
    *,
    min_stock: int = MIN_STOCK_QUANTITY,
) -> dict[str, PriceTypeStats]:
    """Bucket in-stock products by price status.

    Each available product is counted once under ``normal`` or ``clearance``
    (its clearance price is recorded there) and additionally under
    ``price_in_cart`` when flagged. The in-cart bucket never collects prices.
    """
    stats: dict[str, PriceTypeStats] = {pt.key: PriceTypeStats() for pt in price_types}
    stats[PRICE_IN_CART_KEY] = PriceTypeStats()

    for product in filter_available(products, min_stock=min_stock):
        if product.price_in_cart:
            stats[PRICE_IN_CART_KEY].count += 1

        bucket = stats.setdefault(price_status_key(product), PriceTypeStats())
        bucket.count += 1
        bucket.prices.append(product.clearance_price)

    return stats
