from __future__ import annotations

import logging
import threading

from .api.client import AggregateClient
from .api.http_client import CancelToken
from .config import BadwordsConfig, load_config
from .consent import ConsentGate
from .page import PageState, clamp_severity
from .prefs import PreferenceStore, get_preference_store
from .status import StatusNotifier, TimerFactory
from .submission import SubmissionOutcome, SubmissionPipeline, apply_count_result
from .theme import Theme, ThemeController

logger = logging.getLogger(__name__)

UNMOUNT_JOIN_TIMEOUT_S = 1.0


class PageController:
    """Wires preferences, the remote client and status into one page lifecycle.

    ``mount`` starts a cancellable count fetch in the background and ``unmount``
    cancels it; everything else runs on the caller's thread.
    """

    def __init__(
        self,
        config: BadwordsConfig | None = None,
        *,
        prefs: PreferenceStore | None = None,
        client: AggregateClient | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.config = config or load_config()
        self.prefs = prefs or get_preference_store(self.config.prefs_path)
        self.client = client or AggregateClient(
            self.config.api_base, timeout_s=self.config.timeout_s
        )
        self.page = PageState(severity=clamp_severity(self.config.default_severity))
        self.notifier = StatusNotifier(
            confirm_ms=self.config.confirm_status_ms,
            feedback_ms=self.config.feedback_status_ms,
            timer_factory=timer_factory,
        )
        self.theme = ThemeController(self.prefs, self.page.root)
        self.gate = ConsentGate(self.prefs, self.notifier, self.page)
        self.pipeline = SubmissionPipeline(self.client, self.gate, self.notifier, self.page)
        self._cancel: CancelToken | None = None
        self._fetch_thread: threading.Thread | None = None
        self.mounted = False

    def mount(self, *, fetch: bool = True) -> None:
        # A re-mount supersedes whatever the previous mount was still fetching.
        self._cancel_initial_fetch()
        self.prefs.reload()
        self.theme.load()
        self.theme.apply()
        self.gate.sync_surface()
        self.mounted = True
        if fetch:
            self._start_initial_fetch()

    def _start_initial_fetch(self) -> None:
        token = CancelToken()
        self._cancel = token
        thread = threading.Thread(target=self._initial_fetch, args=(token,), daemon=True)
        self._fetch_thread = thread
        thread.start()

    def _cancel_initial_fetch(self) -> None:
        if self._cancel is not None:
            self._cancel.cancel()
        thread = self._fetch_thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(UNMOUNT_JOIN_TIMEOUT_S)
            if thread.is_alive():
                logger.debug("initial count fetch still winding down after cancel")
        self._cancel = None
        self._fetch_thread = None

    def _initial_fetch(self, token: CancelToken) -> None:
        result = self.client.fetch_count(cancel=token)
        if token.cancelled:
            return
        apply_count_result(result, self.page, self.notifier)

    def wait_for_initial_fetch(self, timeout_s: float | None = None) -> bool:
        thread = self._fetch_thread
        if thread is None:
            return True
        thread.join(timeout_s)
        return not thread.is_alive()

    def unmount(self) -> None:
        self._cancel_initial_fetch()
        self.notifier.clear()
        self.mounted = False

    def refresh_count(self) -> bool:
        return apply_count_result(self.client.fetch_count(), self.page, self.notifier)

    def accept_disclaimer(self) -> None:
        self.gate.accept()

    def toggle_theme(self) -> Theme | None:
        # The disclaimer dialog is modal; nothing behind it reacts until it is accepted.
        if self.page.disclaimer_open:
            return None
        return self.theme.toggle()

    def set_word(self, value: str) -> None:
        if self.page.disclaimer_open:
            return
        self.page.word_input = value

    def set_severity(self, value: int) -> None:
        if self.page.disclaimer_open:
            return
        self.page.severity = clamp_severity(value)

    def submit(self) -> SubmissionOutcome:
        # Not short-circuited by the modal: the pipeline re-checks consent and says why it refused.
        return self.pipeline.submit()

    def press_enter(self) -> SubmissionOutcome:
        return self.submit()
