from __future__ import annotations

import logging
import threading
from enum import Enum

from .api.client import AggregateClient
from .api.types import CountResult, Failure, SubmissionRequest, SubmitSuccess
from .consent import ConsentGate
from .page import PageState, clamp_severity
from .status import StatusKind, StatusNotifier

logger = logging.getLogger(__name__)

SUBMIT_SUCCESS_MESSAGE = "So'z muvaffaqiyatli qo'shildi"


class SubmissionOutcome(str, Enum):
    BLOCKED = "blocked"
    EMPTY = "empty"
    BUSY = "busy"
    SUBMITTED = "submitted"
    FAILED = "failed"


def apply_count_result(
    result: CountResult | Failure, page: PageState, notifier: StatusNotifier
) -> bool:
    """Copy a fetched total onto the page or report the failure. Aborts stay silent."""
    if isinstance(result, CountResult):
        page.total_words = result.total
        return True
    if not result.aborted:
        notifier.feedback(result.detail, StatusKind.ERROR)
    return False


class SubmissionPipeline:
    def __init__(
        self,
        client: AggregateClient,
        gate: ConsentGate,
        notifier: StatusNotifier,
        page: PageState,
    ) -> None:
        self.client = client
        self.gate = gate
        self.notifier = notifier
        self.page = page
        self._lock = threading.Lock()

    @property
    def submitting(self) -> bool:
        return self.page.submitting

    def _enter(self) -> bool:
        with self._lock:
            if self.page.submitting:
                return False
            self.page.submitting = True
            return True

    def _leave(self) -> None:
        with self._lock:
            self.page.submitting = False

    def submit(self) -> SubmissionOutcome:
        if not self.gate.require_open_or_notify():
            return SubmissionOutcome.BLOCKED
        word = self.page.word_input.strip()
        if not word:
            return SubmissionOutcome.EMPTY
        if not self._enter():
            logger.debug("submission refused: another submission is in flight")
            return SubmissionOutcome.BUSY
        try:
            request = SubmissionRequest(word=word, severity=clamp_severity(self.page.severity))
            result = self.client.submit(request)
            if isinstance(result, SubmitSuccess):
                self.page.word_input = ""
                apply_count_result(self.client.fetch_count(), self.page, self.notifier)
                # The write went through, so its confirmation wins over a failed refresh.
                self.notifier.feedback(SUBMIT_SUCCESS_MESSAGE, StatusKind.SUCCESS)
                return SubmissionOutcome.SUBMITTED
            if not result.aborted:
                self.notifier.feedback(result.detail, StatusKind.ERROR)
            return SubmissionOutcome.FAILED
        finally:
            self._leave()
