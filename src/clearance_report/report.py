from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Sequence

from .models import PriceType, PriceTypeStats


def _fixed2(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    # Exact binary value, ties away from zero; -0 has no sign.
    cents = Decimal(abs(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return ("-" if value < 0 else "") + format(cents, "f")


def _min_max(prices: Sequence[float]) -> tuple[float, float]:
    if any(math.isnan(p) for p in prices):
        return math.nan, math.nan
    return min(prices), max(prices)


def format_price_range(prices: Sequence[float]) -> str:
    """Return ``" @ $lo"``, ``" @ $lo-$hi"`` or ``""`` for an empty list."""
    if not prices:
        return ""
    lo, hi = _min_max(prices)
    if lo == hi:
        return f" @ ${_fixed2(lo)}"
    return f" @ ${_fixed2(lo)}-${_fixed2(hi)}"


def pluralize_products(count: int) -> str:
    return "product" if count == 1 else "products"


def generate_report(price_types: Iterable[PriceType], stats: Mapping[str, PriceTypeStats]) -> list[str]:
    lines: list[str] = []
    for price_type in price_types:
        data = stats.get(price_type.key) or PriceTypeStats()
        line = f"{price_type.display_name}: {data.count} {pluralize_products(data.count)}"
        lines.append(line + format_price_range(data.prices))
    return lines
