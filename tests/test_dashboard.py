from __future__ import annotations

import unittest

from clearance_report.dashboard import render_report_html
from clearance_report.models import PriceType, PriceTypeStats
from clearance_report.price_types import DEFAULT_PRICE_TYPES


class TestDashboard(unittest.TestCase):
    def test_renders_rows_in_order(self) -> None:
        stats = {
            "normal": PriceTypeStats(count=2, prices=[20.0, 5.0]),
            "clearance": PriceTypeStats(count=1, prices=[8.0]),
            "price_in_cart": PriceTypeStats(count=1, prices=[]),
        }
        html = render_report_html(
            DEFAULT_PRICE_TYPES,
            stats,
            run_summary={"finished_at": "2026-02-18T00:00:00+00:00", "source": "input.txt", "products_available": 3, "products_total": 4},
        )
        self.assertIn("Clearance Report", html)
        self.assertIn("Generated: 2026-02-18 00:00", html)
        self.assertIn("In stock: 3 of 4 products", html)
        self.assertIn("$5.00-$20.00", html)
        self.assertIn("1 product</td>", html)
        self.assertLess(html.index("Normal Price"), html.index("Clearance Price"))
        self.assertLess(html.index("Clearance Price"), html.index("Price In Cart"))

    def test_escapes_display_names_and_source(self) -> None:
        price_types = [PriceType(key="normal", display_name='<script>alert("x")</script>')]
        html = render_report_html(price_types, {}, run_summary={"source": "a&b.txt"})
        self.assertNotIn("<script>alert", html)
        self.assertIn("&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;", html)
        self.assertIn("Source: a&amp;b.txt", html)
        self.assertIn("0 products", html)

    def test_tolerates_missing_run_summary(self) -> None:
        html = render_report_html(DEFAULT_PRICE_TYPES, {})
        self.assertIn("Source: (no input)", html)
        self.assertIn("&mdash;", html)


if __name__ == "__main__":
    unittest.main()
