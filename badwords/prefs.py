from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from .config import DEFAULT_PREFS_PATH

logger = logging.getLogger(__name__)

THEME_KEY = "theme"
CONSENT_KEY = "disclaimerAccepted"


def get_prefs_path(path: Path | str | None = None) -> Path:
    candidate = path or os.getenv("BADWORDS_PREFS", DEFAULT_PREFS_PATH)
    return Path(candidate).expanduser()


class PreferenceStore:
    """Durable string key-value store backed by a JSON object file.

    Storage problems never reach the caller: unreadable files read as empty and
    failed writes only update the in-memory copy for the rest of the session.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = get_prefs_path(path)
        self._lock = threading.Lock()
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if self._values is not None:
            return self._values
        values: dict[str, str] = {}
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raw = ""
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("preference read failed", exc_info=exc)
            raw = ""
        if raw.strip():
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.debug("preference file is not valid json", exc_info=exc)
                data = {}
            if isinstance(data, dict):
                values = {str(k): v for k, v in data.items() if isinstance(v, str)}
        self._values = values
        return values

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            values = self._load()
            values[key] = value
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp = self.path.with_name(f"{self.path.name}.tmp")
                tmp.write_text(json.dumps(values, ensure_ascii=False, indent=2) + "\n", "utf-8")
                tmp.replace(self.path)
            except OSError as exc:
                logger.debug("preference write failed", exc_info=exc)

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._load())

    def reload(self) -> None:
        with self._lock:
            self._values = None


_DEFAULT_STORE: PreferenceStore | None = None
_DEFAULT_STORE_LOCK = threading.Lock()


def get_preference_store(path: Path | str | None = None) -> PreferenceStore:
    """Process-wide store, created on first use; a different path replaces it."""
    global _DEFAULT_STORE
    with _DEFAULT_STORE_LOCK:
        if _DEFAULT_STORE is None or (
            path is not None and _DEFAULT_STORE.path != get_prefs_path(path)
        ):
            _DEFAULT_STORE = PreferenceStore(path)
        return _DEFAULT_STORE


def reset_preference_store() -> None:
    global _DEFAULT_STORE
    with _DEFAULT_STORE_LOCK:
        _DEFAULT_STORE = None
