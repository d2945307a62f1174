from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

CONFIRM_MS = 2500
FEEDBACK_MS = 3500


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Status:
    message: str
    kind: StatusKind


TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]
StatusListener = Callable[[Status | None], None]


def _thread_timer(delay_s: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay_s, callback)
    timer.daemon = True
    return timer


class StatusNotifier:
    """Single status slot whose message clears itself after a delay.

    Only one expiry timer is ever pending; showing a new status cancels it.
    """

    def __init__(
        self,
        *,
        confirm_ms: int = CONFIRM_MS,
        feedback_ms: int = FEEDBACK_MS,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.confirm_ms = confirm_ms
        self.feedback_ms = feedback_ms
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        self._status: Status | None = None
        self._timer: threading.Timer | None = None
        self._listeners: list[StatusListener] = []

    @property
    def current(self) -> Status | None:
        with self._lock:
            return self._status

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def on_change(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def show(self, message: str, kind: StatusKind | str, duration_ms: int) -> Status:
        status = Status(message=message, kind=StatusKind(kind))
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._status = status
            if duration_ms > 0:
                timer: threading.Timer | None = None

                def _fire() -> None:
                    self._expire(timer)

                timer = self._timer_factory(duration_ms / 1000.0, _fire)
                self._timer = timer
                timer.start()
        self._notify(status)
        return status

    def confirm(self, message: str, kind: StatusKind | str = StatusKind.INFO) -> Status:
        return self.show(message, kind, self.confirm_ms)

    def feedback(self, message: str, kind: StatusKind | str = StatusKind.INFO) -> Status:
        return self.show(message, kind, self.feedback_ms)

    def clear(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            changed = self._status is not None
            self._status = None
        if changed:
            self._notify(None)

    def _expire(self, timer: threading.Timer | None) -> None:
        with self._lock:
            # A superseded timer may still fire after cancel(); it must not clear newer status.
            if timer is None or self._timer is not timer:
                return
            self._timer = None
            self._status = None
        self._notify(None)

    def _notify(self, status: Status | None) -> None:
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception as exc:
                logger.warning("status listener failed", exc_info=exc)
