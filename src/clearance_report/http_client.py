from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass

import requests
from requests import Response
from requests.adapters import HTTPAdapter


DEFAULT_USER_AGENT = "clearance-report/0.1 (+https://pypi.org/project/requests/)"


@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int | None
    ok: bool
    text: str | None
    error: str | None
    elapsed_ms: int


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 2
    step_seconds: float = 0.35
    max_step_seconds: float = 2.5
    max_retry_after_seconds: float = 5.0

    @staticmethod
    def is_transient(status_code: int) -> bool:
        return status_code in (408, 425, 429) or 500 <= status_code <= 599

    def wait_seconds(self, attempt: int, retry_after: str | None = None) -> float:
        """Seconds to sleep before the attempt after ``attempt`` (1-based).

        A numeric ``Retry-After`` wins, clamped to ``max_retry_after_seconds``.
        """
        if retry_after:
            try:
                return min(self.max_retry_after_seconds, max(0.0, float(retry_after)))
            except ValueError:
                pass
        return min(self.max_step_seconds, self.step_seconds * attempt) + random.random() * 0.15


class HttpClient:
    def __init__(
        self,
        *,
        timeout_seconds: float,
        proxy_url: str | None = None,
        user_agent: str | None = None,
        max_retries: int | None = None,
    ) -> None:
        if max_retries is None:
            max_retries = int(os.getenv("HTTP_MAX_RETRIES", "2"))
        self.retry = RetryPolicy(attempts=max(1, max_retries))
        self._timeout = (timeout_seconds, timeout_seconds)
        self._proxies = {"http": proxy_url, "https": proxy_url} if proxy_url else None
        self._headers = {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/plain,text/csv;q=0.9,*/*;q=0.8",
            "Cache-Control": "no-cache",
        }
        self._sess: requests.Session | None = None

    def _session(self) -> requests.Session:
        if self._sess is None:
            s = requests.Session()
            adapter = HTTPAdapter(pool_connections=4, pool_maxsize=4)
            s.mount("http://", adapter)
            s.mount("https://", adapter)
            self._sess = s
        return self._sess

    def close(self) -> None:
        if self._sess is not None:
            self._sess.close()
            self._sess = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, url: str) -> Response:
        return self._session().get(
            url,
            headers=self._headers,
            proxies=self._proxies,
            timeout=self._timeout,
            allow_redirects=True,
        )

    def fetch_text(self, url: str) -> FetchResult:
        started = time.perf_counter()

        def _result(**kwargs) -> FetchResult:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            return FetchResult(elapsed_ms=elapsed_ms, **kwargs)

        error: str | None = None
        for attempt in range(1, self.retry.attempts + 1):
            last = attempt == self.retry.attempts
            try:
                resp = self._get(url)
            except requests.RequestException as e:
                error = f"{type(e).__name__}: {e}"
                if not last:
                    time.sleep(self.retry.wait_seconds(attempt))
                continue

            if self.retry.is_transient(resp.status_code) and not last:
                time.sleep(self.retry.wait_seconds(attempt, (resp.headers or {}).get("Retry-After")))
                continue

            ok = 200 <= resp.status_code < 400
            return _result(
                url=str(resp.url),
                status_code=resp.status_code,
                ok=ok,
                text=resp.text if ok else None,
                error=None if ok else f"HTTP {resp.status_code}",
            )

        return _result(url=url, status_code=None, ok=False, text=None, error=error)
