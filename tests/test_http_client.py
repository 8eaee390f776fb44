from __future__ import annotations

import unittest
from unittest.mock import Mock, patch

import requests

from clearance_report.http_client import HttpClient, RetryPolicy


def _resp(status: int, text: str = "", url: str = "https://example.test/list.txt", headers: dict | None = None) -> Mock:
    r = Mock()
    r.status_code = status
    r.url = url
    r.text = text
    r.headers = headers or {}
    return r


class TestHttpClientRetries(unittest.TestCase):
    def test_retries_on_transient_5xx(self) -> None:
        client = HttpClient(timeout_seconds=1.0, max_retries=3)
        client._session().get = Mock(side_effect=[_resp(502, "bad gateway"), _resp(200, "Product,1,1,5,false")])

        with patch("clearance_report.http_client.time.sleep", autospec=True) as _sleep:
            res = client.fetch_text("https://example.test/list.txt")

        self.assertTrue(res.ok)
        self.assertEqual(client._session().get.call_count, 2)
        self.assertEqual(res.text, "Product,1,1,5,false")
        self.assertEqual(res.status_code, 200)
        self.assertIsNone(res.error)

    def test_does_not_retry_on_404(self) -> None:
        client = HttpClient(timeout_seconds=1.0, max_retries=3)
        client._session().get = Mock(return_value=_resp(404, "not found"))

        with patch("clearance_report.http_client.time.sleep", autospec=True) as _sleep:
            res = client.fetch_text("https://example.test/missing")

        self.assertFalse(res.ok)
        self.assertEqual(client._session().get.call_count, 1)
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.error, "HTTP 404")
        self.assertIsNone(res.text)

    def test_honours_retry_after_header(self) -> None:
        client = HttpClient(timeout_seconds=1.0, max_retries=2)
        client._session().get = Mock(side_effect=[_resp(429, headers={"Retry-After": "1.5"}), _resp(200, "ok")])

        with patch("clearance_report.http_client.time.sleep", autospec=True) as sleep:
            res = client.fetch_text("https://example.test/list.txt")

        self.assertTrue(res.ok)
        sleep.assert_called_once_with(1.5)

    def test_connection_errors_exhaust_retries(self) -> None:
        client = HttpClient(timeout_seconds=1.0, max_retries=2)
        client._session().get = Mock(side_effect=requests.ConnectionError("refused"))

        with patch("clearance_report.http_client.time.sleep", autospec=True) as _sleep:
            res = client.fetch_text("https://example.test/list.txt")

        self.assertFalse(res.ok)
        self.assertEqual(client._session().get.call_count, 2)
        self.assertIsNone(res.status_code)
        self.assertTrue((res.error or "").startswith("ConnectionError"))

    def test_max_retries_from_env(self) -> None:
        with patch.dict("os.environ", {"HTTP_MAX_RETRIES": "4"}):
            client = HttpClient(timeout_seconds=1.0)
        client._session().get = Mock(return_value=_resp(503))

        with patch("clearance_report.http_client.time.sleep", autospec=True) as _sleep:
            res = client.fetch_text("https://example.test/list.txt")

        self.assertFalse(res.ok)
        self.assertEqual(client._session().get.call_count, 4)
        self.assertEqual(res.error, "HTTP 503")

    def test_close_drops_session(self) -> None:
        with HttpClient(timeout_seconds=1.0) as client:
            first = client._session()
        self.assertIsNot(client._session(), first)



class TestRetryPolicy(unittest.TestCase):
    def test_transient_statuses(self) -> None:
        for status in (408, 425, 429, 500, 502, 599):
            self.assertTrue(RetryPolicy.is_transient(status), status)
        for status in (200, 301, 400, 403, 404, 600):
            self.assertFalse(RetryPolicy.is_transient(status), status)

    def test_retry_after_is_clamped(self) -> None:
        policy = RetryPolicy()
        self.assertEqual(policy.wait_seconds(1, "1.5"), 1.5)
        self.assertEqual(policy.wait_seconds(1, "120"), 5.0)
        self.assertEqual(policy.wait_seconds(1, "-3"), 0.0)

    def test_backoff_grows_with_attempt_and_is_capped(self) -> None:
        policy = RetryPolicy()
        with patch("clearance_report.http_client.random.random", return_value=0.0):
            self.assertAlmostEqual(policy.wait_seconds(1), 0.35)
            self.assertAlmostEqual(policy.wait_seconds(2, "Wed, 21 Oct 2026 07:28:00 GMT"), 0.7)
            self.assertEqual(policy.wait_seconds(50), 2.5)


if __name__ == "__main__":
    unittest.main()
