from __future__ import annotations

import contextlib
import json
import socket
import threading
from dataclasses import dataclass
from http.client import HTTPConnection, HTTPSConnection
from typing import Any, BinaryIO
from urllib.parse import urlparse

from .types import BadwordsError

NON_JSON_RESPONSE = "non_json_response"


class RequestCancelled(BadwordsError):
    pass


@dataclass(frozen=True, slots=True)
class JsonResponse:
    status: int
    # Any JSON value; None for an empty or unparseable body.
    payload: Any = None
    parse_error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json_object(self) -> dict[str, Any] | None:
        return self.payload if isinstance(self.payload, dict) else None


class CancelToken:
    """Marks a request as abandoned and closes its live connection."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._conn: HTTPConnection | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()
        with self._lock:
            conn = self._conn
        if conn is None:
            return
        # close() alone does not wake a thread blocked in recv(); shutdown() does.
        sock = getattr(conn, "sock", None)
        if sock is not None:
            with contextlib.suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)
        with contextlib.suppress(Exception):
            conn.close()

    def bind(self, conn: HTTPConnection) -> None:
        with self._lock:
            self._conn = conn
        if self._event.is_set():
            raise RequestCancelled("request cancelled")

    def release(self) -> None:
        with self._lock:
            self._conn = None


def build_base_url(address: str) -> str:
    trimmed = address.strip().rstrip("/")
    if not trimmed:
        return ""
    parsed = urlparse(trimmed)
    if parsed.scheme:
        return trimmed
    return f"http://{trimmed}"


def _open_connection(url: str, timeout_s: float) -> tuple[HTTPConnection, str]:
    parsed = urlparse(url)
    if not parsed.hostname:
        raise ValueError("missing hostname")
    if parsed.scheme == "https":
        conn: HTTPConnection = HTTPSConnection(
            parsed.hostname, parsed.port or 443, timeout=timeout_s
        )
    else:
        conn = HTTPConnection(parsed.hostname, parsed.port or 80, timeout=timeout_s)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return conn, path


def request_json(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
    timeout_s: float = 10.0,
    cancel: CancelToken | None = None,
) -> JsonResponse:
    conn, path = _open_connection(url, timeout_s)
    payload: Any = None
    parse_error: str | None = None
    body_bytes = None
    if body is not None:
        body_bytes = json.dumps(body, ensure_ascii=False).encode("utf-8")
    request_headers = {"Accept": "application/json"}
    if body_bytes is not None:
        request_headers["Content-Type"] = "application/json"
        request_headers["Content-Length"] = str(len(body_bytes))
    if headers:
        request_headers.update(headers)
    status: int | None = None
    try:
        if cancel is not None:
            cancel.bind(conn)
        try:
            conn.request(method, path, body=body_bytes, headers=request_headers)
            resp = conn.getresponse()
            status = int(resp.status)
            raw = resp.read()
        except Exception as exc:
            # Closing the connection from another thread surfaces as an arbitrary socket error.
            if cancel is not None and cancel.cancelled:
                raise RequestCancelled("request cancelled") from exc
            raise
        if cancel is not None and cancel.cancelled:
            raise RequestCancelled("request cancelled")
        if raw:
            try:
                payload = json.loads(raw.decode("utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                snippet = raw[:240].decode("utf-8", errors="replace").strip()
                parse_error = f"{NON_JSON_RESPONSE}: {snippet}" if snippet else NON_JSON_RESPONSE
    finally:
        if cancel is not None:
            cancel.release()
        conn.close()
    assert status is not None
    return JsonResponse(status=status, payload=payload, parse_error=parse_error)


def download_to(url: str, dest: BinaryIO, *, timeout_s: float = 10.0, chunk_size: int = 65536) -> int:
    """Stream a GET response body into ``dest``; only 2xx bodies are written."""
    conn, path = _open_connection(url, timeout_s)
    try:
        conn.request("GET", path, headers={"Accept": "text/csv, */*"})
        resp = conn.getresponse()
        status = int(resp.status)
        if not 200 <= status < 300:
            resp.read()
            return status
        while True:
            chunk = resp.read(chunk_size)
            if not chunk:
                break
            dest.write(chunk)
        return status
    finally:
        conn.close()
