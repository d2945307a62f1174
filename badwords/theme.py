from __future__ import annotations

from enum import Enum

from .page import DARK_MARKER, DocumentRoot
from .prefs import THEME_KEY, PreferenceStore


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"


def parse_theme(value: str | None) -> Theme:
    if value == Theme.LIGHT.value:
        return Theme.LIGHT
    return Theme.DARK


class ThemeController:
    def __init__(self, prefs: PreferenceStore, root: DocumentRoot) -> None:
        self.prefs = prefs
        self.root = root
        self.theme = Theme.DARK

    @property
    def is_dark(self) -> bool:
        return self.theme is Theme.DARK

    def load(self) -> Theme:
        self.theme = parse_theme(self.prefs.get(THEME_KEY))
        return self.theme

    def apply(self) -> None:
        self.root.toggle_class(DARK_MARKER, self.is_dark)

    def toggle(self) -> Theme:
        self.theme = Theme.LIGHT if self.is_dark else Theme.DARK
        self.prefs.set(THEME_KEY, self.theme.value)
        self.apply()
        return self.theme
