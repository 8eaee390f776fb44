from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True)
class PriceType:
    key: str
    display_name: str


@dataclass(frozen=True)
class Product:
    normal_price: float
    clearance_price: float
    # None when the stock token carries no leading integer.
    quantity_in_stock: int | None
    price_in_cart: bool


@dataclass
class PriceTypeStats:
    count: int = 0
    prices: list[float] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedLine:
    kind: Literal["price_type", "product"]
    data: Union[PriceType, Product]


@dataclass(frozen=True)
class ReportRun:
    started_at: str
    finished_at: str
    source: str | None
    lines_total: int
    price_types_declared: int
    products_total: int
    products_available: int
