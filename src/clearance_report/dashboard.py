from __future__ import annotations

import html
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from .models import PriceType, PriceTypeStats
from .report import format_price_range, pluralize_products


def _parse_iso(ts: str | None) -> datetime | None:
    if not ts:
        return None
    try:
        dt = datetime.fromisoformat(ts)
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _h(s: Any) -> str:
    return html.escape("" if s is None else str(s), quote=True)


def _format_ts_short(ts: str | None) -> str:
    dt = _parse_iso(ts)
    if not dt:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M")


def render_report_html(
    price_types: Iterable[PriceType],
    stats: Mapping[str, PriceTypeStats],
    *,
    run_summary: dict[str, Any] | None = None,
) -> str:
    run_summary = run_summary or {}
    finished = _format_ts_short(run_summary.get("finished_at"))
    source = run_summary.get("source") or "(no input)"
    available = run_summary.get("products_available", 0)
    total = run_summary.get("products_total", 0)

    rows: list[str] = []
    for pt in price_types:
        data = stats.get(pt.key) or PriceTypeStats()
        price_range = format_price_range(data.prices).removeprefix(" @ ")
        rows.append(
            "      <tr>"
            f'<td data-k="Category">{_h(pt.display_name)}</td>'
            f'<td data-k="Products" class="num">{data.count} {pluralize_products(data.count)}</td>'
            f'<td data-k="Price">{_h(price_range) or "&mdash;"}</td>'
            "</tr>"
        )
    rows_html = "\n".join(rows)

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Clearance Report</title>
  <style>
    :root {{
      --bg: #09090b;
      --surface: #18181b;
      --panel: #27272a;
      --line: #3f3f46;
      --txt: #f4f4f5;
      --muted: #a1a1aa;
    }}
    * {{ box-sizing: border-box; }}
    body {{ margin: 0; font: 14px/1.5 "Inter", "Segoe UI", Roboto, sans-serif; background: var(--bg); color: var(--txt); }}
    .wrap {{ max-width: 900px; margin: 0 auto; padding: 24px; }}
    .header {{ background: var(--surface); border: 1px solid var(--line); border-radius: 12px; padding: 24px; }}
    h1 {{ margin: 0; font-size: 28px; font-weight: 700; }}
    .sub {{ color: var(--muted); margin-top: 8px; font-size: 14px; }}
    .table-wrap {{ margin-top: 24px; border: 1px solid var(--line); border-radius: 12px; overflow: hidden; background: var(--surface); }}
    table {{ width: 100%; border-collapse: collapse; text-align: left; }}
    th, td {{ padding: 12px 16px; border-bottom: 1px solid var(--line); }}
    th {{ text-transform: uppercase; color: var(--muted); font-size: 12px; font-weight: 600; background: var(--panel); letter-spacing: 0.05em; }}
    tr:last-child td {{ border-bottom: none; }}
    .num {{ font-variant-numeric: tabular-nums; }}
  </style>
</head>
<body>
  <div class="wrap">
    <header class="header">
      <h1>Clearance Report</h1>
      <div class="sub">Source: {_h(source)} &middot; In stock: {_h(available)} of {_h(total)} products &middot; Generated: {_h(finished)}</div>
    </header>
    <div class="table-wrap">
      <table>
        <thead><tr><th>Category</th><th>Products</th><th>Price</th></tr></thead>
        <tbody>
{rows_html}
        </tbody>
      </table>
    </div>
  </div>
</body>
</html>
"""
