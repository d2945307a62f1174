from __future__ import annotations

from dataclasses import dataclass, field

from .api.types import SEVERITY_MAX, SEVERITY_MIN

DARK_MARKER = "dark"


def clamp_severity(value: int) -> int:
    return max(SEVERITY_MIN, min(SEVERITY_MAX, int(value)))


@dataclass
class DocumentRoot:
    classes: set[str] = field(default_factory=set)

    def toggle_class(self, name: str, on: bool) -> None:
        if on:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    @property
    def dark(self) -> bool:
        return DARK_MARKER in self.classes


@dataclass
class PageState:
    total_words: int = 0
    word_input: str = ""
    severity: int = 50
    disclaimer_open: bool = False
    submitting: bool = False
    root: DocumentRoot = field(default_factory=DocumentRoot)

    @property
    def submit_enabled(self) -> bool:
        return bool(self.word_input.strip()) and not self.submitting
