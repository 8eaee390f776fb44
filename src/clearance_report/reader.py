from __future__ import annotations

import os
import sys
from pathlib import Path

from .http_client import HttpClient


def _warn(msg: str) -> None:
    print(f"[reader] {msg}", file=sys.stderr, flush=True)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def _read_url(url: str, *, client: HttpClient | None, timeout_seconds: float) -> str:
    own_client = client is None
    if client is None:
        proxy_url = os.getenv("PROXY_URL", "").strip() or None
        client = HttpClient(timeout_seconds=timeout_seconds, proxy_url=proxy_url)
    try:
        fetch = client.fetch_text(url)
    finally:
        if own_client:
            client.close()
    if not fetch.ok or fetch.text is None:
        _warn(f"fetch failed url={url} :: {fetch.error or 'no body'}")
        return ""
    return fetch.text


def read_input(source: str | None, *, client: HttpClient | None = None, timeout_seconds: float = 25.0) -> str:
    """Return the full text behind ``source``, or ``""`` when it is absent or unreadable.

    ``source`` is either a filesystem path or an http(s) URL. Read failures are
    reported on stderr and never raised.
    """
    if not source:
        return ""
    if _is_url(source):
        return _read_url(source, client=client, timeout_seconds=timeout_seconds)
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _warn(f"error reading file path={source} :: {type(e).__name__}: {e}")
        return ""
