from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any

import pytest

from badwords.config import CONFIG_ENV_OVERRIDES
from badwords.prefs import reset_preference_store


@pytest.fixture(autouse=True)
def _isolate_client_files(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for env_var in CONFIG_ENV_OVERRIDES.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("BADWORDS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("BADWORDS_CONFIG", str(tmp_path / "config.json"))
    monkeypatch.setenv("BADWORDS_PREFS", str(tmp_path / "prefs.json"))
    reset_preference_store()
    yield
    reset_preference_store()


def page_payload(total_items: int, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "success": True,
        "message": "ok",
        "links": {"next": None, "previous": None},
        "total_items": total_items,
        "total_pages": 1 if total_items else 0,
        "page_size": 10,
        "current_page": 1,
        "data": [],
    }
    payload.update(extra)
    return payload


class FakeApi:
    """Threaded stand-in for the remote word list API."""

    def __init__(self) -> None:
        self.get_response: tuple[int, Any] = (200, page_payload(0))
        self.post_response: tuple[int, Any] = (201, {"success": True, "message": "created"})
        self.csv_response: tuple[int, Any] = (200, b"word,severity\nfoo,10\n")
        self.requests: list[tuple[str, str, Any]] = []
        self.hold_get = threading.Event()
        self.get_received = threading.Event()
        self.hold_get.set()
        self.server: ThreadingHTTPServer | None = None

    @property
    def base_url(self) -> str:
        assert self.server is not None
        return f"http://127.0.0.1:{self.server.server_address[1]}"

    def calls(self, method: str) -> list[tuple[str, str, Any]]:
        return [r for r in self.requests if r[0] == method]

    def build_handler(self) -> type[BaseHTTPRequestHandler]:
        api = self

        class Handler(BaseHTTPRequestHandler):
            def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
                return

            def _send(self, status: int, body: Any) -> None:
                if isinstance(body, bytes):
                    raw = body
                    content_type = "text/plain"
                else:
                    raw = json.dumps(body).encode("utf-8")
                    content_type = "application/json"
                try:
                    self.send_response(status)
                    self.send_header("Content-Type", content_type)
                    self.send_header("Content-Length", str(len(raw)))
                    self.end_headers()
                    self.wfile.write(raw)
                except OSError:
                    return

            def do_GET(self) -> None:  # noqa: N802
                api.requests.append(("GET", self.path, None))
                if self.path.startswith("/media/"):
                    self._send(*api.csv_response)
                    return
                api.get_received.set()
                api.hold_get.wait(5)
                self._send(*api.get_response)

            def do_POST(self) -> None:  # noqa: N802
                length = int(self.headers.get("Content-Length") or 0)
                raw = self.rfile.read(length) if length else b""
                body = json.loads(raw.decode("utf-8")) if raw else None
                api.requests.append(("POST", self.path, body))
                self._send(*api.post_response)

        return Handler


@pytest.fixture
def fake_api() -> Iterator[FakeApi]:
    api = FakeApi()
    server = ThreadingHTTPServer(("127.0.0.1", 0), api.build_handler())
    server.daemon_threads = True
    api.server = server
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield api
    finally:
        api.hold_get.set()
        server.shutdown()
        server.server_close()


class FakeTimer:
    def __init__(self, delay_s: float, callback) -> None:
        self.delay_s = delay_s
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class TimerRecorder:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, delay_s: float, callback) -> FakeTimer:
        timer = FakeTimer(delay_s, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]


@pytest.fixture
def timers() -> TimerRecorder:
    return TimerRecorder()
