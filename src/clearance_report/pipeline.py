from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Sequence

from .classifier import classify_products, filter_available
from .http_client import HttpClient
from .models import PriceType, PriceTypeStats, ReportRun
from .parser import parse_lines, split_lines
from .price_types import DEFAULT_PRICE_TYPES, MIN_STOCK_QUANTITY
from .reader import read_input
from .report import generate_report
from .timeutil import utc_now_iso


@dataclass(frozen=True)
class ReportResult:
    lines: list[str]
    stats: dict[str, PriceTypeStats]
    run: ReportRun


def _log_enabled() -> bool:
    return os.getenv("REPORT_LOG", "1").strip() != "0"


def _log(msg: str) -> None:
    if _log_enabled():
        print(f"[report] {msg}", file=sys.stderr, flush=True)


def build_report(
    text: str,
    *,
    price_types: Sequence[PriceType] = DEFAULT_PRICE_TYPES,
    min_stock: int = MIN_STOCK_QUANTITY,
    strict: bool = False,
    source: str | None = None,
    started_at: str | None = None,
) -> ReportResult:
    started_at = started_at or utc_now_iso()
    declared, products = parse_lines(text, strict=strict)
    stats = classify_products(products, price_types, min_stock=min_stock)
    lines = generate_report(price_types, stats)
    run = ReportRun(
        started_at=started_at,
        finished_at=utc_now_iso(),
        source=source,
        lines_total=len(split_lines(text)),
        price_types_declared=len(declared),
        products_total=len(products),
        products_available=len(filter_available(products, min_stock=min_stock)),
    )
    return ReportResult(lines=lines, stats=stats, run=run)


def run_report(
    *,
    source: str | None,
    min_stock: int = MIN_STOCK_QUANTITY,
    strict: bool = False,
    timeout_seconds: float = 25.0,
    client: HttpClient | None = None,
) -> ReportResult:
    started_at = utc_now_iso()
    _log(f"start source={source or '-'} min_stock={min_stock} strict={strict}")

    text = read_input(source, client=client, timeout_seconds=timeout_seconds)
    result = build_report(text, min_stock=min_stock, strict=strict, source=source, started_at=started_at)

    run = result.run
    _log(
        f"done lines={run.lines_total} products={run.products_total} "
        f"available={run.products_available} type_lines={run.price_types_declared}"
    )
    return result
