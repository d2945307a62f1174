from __future__ import annotations

from .page import PageState
from .prefs import CONSENT_KEY, PreferenceStore
from .status import StatusKind, StatusNotifier

ACCEPTED_VALUE = "true"
CONSENT_REQUIRED_MESSAGE = "Please accept the disclaimer before adding words."
CONSENT_ACCEPTED_MESSAGE = "Thanks - disclaimer accepted"


class ConsentGate:
    def __init__(self, prefs: PreferenceStore, notifier: StatusNotifier, page: PageState) -> None:
        self.prefs = prefs
        self.notifier = notifier
        self.page = page

    def is_open(self) -> bool:
        return self.prefs.get(CONSENT_KEY) == ACCEPTED_VALUE

    def sync_surface(self) -> None:
        self.page.disclaimer_open = not self.is_open()

    def require_open_or_notify(self) -> bool:
        if self.is_open():
            return True
        self.notifier.feedback(CONSENT_REQUIRED_MESSAGE, StatusKind.ERROR)
        return False

    def accept(self) -> None:
        self.prefs.set(CONSENT_KEY, ACCEPTED_VALUE)
        self.page.disclaimer_open = False
        self.notifier.confirm(CONSENT_ACCEPTED_MESSAGE, StatusKind.INFO)
