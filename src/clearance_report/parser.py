from __future__ import annotations

import math
import re
import sys

from .models import ParsedLine, PriceType, Product


_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def _warn(msg: str) -> None:
    print(f"[parser] {msg}", file=sys.stderr, flush=True)


def parse_price(token: str) -> float:
    """Leading-number parse: ``"9.99 USD"`` -> 9.99, no number -> nan."""
    m = _FLOAT_PREFIX_RE.match(token or "")
    if not m:
        return math.nan
    return float(m.group(1))


def parse_quantity(token: str) -> int | None:
    m = _INT_PREFIX_RE.match(token or "")
    if not m:
        return None
    return int(m.group(1))


def parse_flag(token: str) -> bool:
    """Case-insensitive match on ``"true"``. Surrounding whitespace makes it false."""
    return (token or "").lower() == "true"


def _is_malformed(product: Product) -> bool:
    return math.isnan(product.normal_price) or math.isnan(product.clearance_price) or product.quantity_in_stock is None


def parse_line(line: str, *, strict: bool = False) -> ParsedLine | None:
    tokens = line.split(",")
    head = tokens[0]
    if head == "Type" and len(tokens) >= 3:
        return ParsedLine(kind="price_type", data=PriceType(key=tokens[1], display_name=tokens[2]))
    if head == "Product" and len(tokens) >= 5:
        product = Product(
            normal_price=parse_price(tokens[1]),
            clearance_price=parse_price(tokens[2]),
            quantity_in_stock=parse_quantity(tokens[3]),
            price_in_cart=parse_flag(tokens[4]),
        )
        if strict and _is_malformed(product):
            _warn(f"dropping malformed product line: {line!r}")
            return None
        return ParsedLine(kind="product", data=product)
    return None


def split_lines(text: str) -> list[str]:
    return (text or "").strip().splitlines()


def parse_lines(text: str, *, strict: bool = False) -> tuple[list[PriceType], list[Product]]:
    price_types: list[PriceType] = []
    products: list[Product] = []
    for line in split_lines(text):
        parsed = parse_line(line, strict=strict)
        if parsed is None:
            continue
        if parsed.kind == "product":
            products.append(parsed.data)  # type: ignore[arg-type]
        else:
            price_types.append(parsed.data)  # type: ignore[arg-type]
    return price_types, products
