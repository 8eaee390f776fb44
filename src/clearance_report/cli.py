from __future__ import annotations

import argparse
import os
import sys
from dataclasses import asdict
from pathlib import Path

from .dashboard import render_report_html
from .pipeline import run_report
from .price_types import DEFAULT_PRICE_TYPES, min_stock_from_env
from .summary import build_summary, save_summary


NO_INPUT_NOTICE = "No input file provided. Returning default report."


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="clearance-report")
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Path or http(s) URL of the Type/Product listing. Empty report when omitted.",
    )
    parser.add_argument(
        "--min-stock",
        type=int,
        default=None,
        help="Minimum quantity in stock for a product to be reported (default: 3, env MIN_STOCK_QUANTITY).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Drop Product lines with unparseable prices or stock instead of passing them through.",
    )
    parser.add_argument("--output", default="", help="Also write an HTML report to this path.")
    parser.add_argument("--summary-json", default="", help="Also write a JSON run summary to this path.")
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        default=None,
        help="HTTP timeout for URL sources (default: 25, env TIMEOUT_SECONDS).",
    )
    args = parser.parse_args(argv)

    try:
        min_stock = args.min_stock if args.min_stock is not None else min_stock_from_env()
        timeout_seconds = args.timeout_seconds
        if timeout_seconds is None:
            timeout_seconds = float(os.getenv("TIMEOUT_SECONDS", "25"))
        if not args.source:
            print(NO_INPUT_NOTICE, file=sys.stderr, flush=True)

        result = run_report(
            source=args.source,
            min_stock=min_stock,
            strict=args.strict,
            timeout_seconds=timeout_seconds,
        )
        for line in result.lines:
            print(line)

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            html = render_report_html(DEFAULT_PRICE_TYPES, result.stats, run_summary=asdict(result.run))
            output_path.write_text(html, encoding="utf-8")

        if args.summary_json:
            summary = build_summary(DEFAULT_PRICE_TYPES, result.stats, run=result.run)
            save_summary(Path(args.summary_json), summary)
    except Exception as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr, flush=True)
        return 1
    return 0
