from __future__ import annotations

import json
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable, Mapping

from .models import PriceType, PriceTypeStats, ReportRun
from .report import generate_report
from .timeutil import utc_now_iso


SCHEMA_VERSION = 1


def _json_price(value: float) -> float | None:
    # JSON has no nan/inf.
    return value if math.isfinite(value) else None


def build_summary(
    price_types: Iterable[PriceType],
    stats: Mapping[str, PriceTypeStats],
    *,
    run: ReportRun,
) -> dict[str, Any]:
    price_types = list(price_types)
    buckets: dict[str, Any] = {}
    for key, data in stats.items():
        finite = [p for p in data.prices if math.isfinite(p)]
        buckets[key] = {
            "count": data.count,
            "prices": [_json_price(p) for p in data.prices],
            "min_price": min(finite) if finite else None,
            "max_price": max(finite) if finite else None,
        }
    return {
        "schema_version": SCHEMA_VERSION,
        "run": asdict(run),
        "price_types": [{"key": pt.key, "display_name": pt.display_name} for pt in price_types],
        "buckets": buckets,
        "report": generate_report(price_types, stats),
    }


def save_summary(path: Path, summary: dict[str, Any]) -> None:
    out = {**summary, "schema_version": SCHEMA_VERSION, "written_at": utc_now_iso()}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.unlink(missing_ok=True)
    path.write_text(json.dumps(out, ensure_ascii=False, indent=2, sort_keys=True) + "\n", encoding="utf-8")

