from __future__ import annotations

import json
import os
import warnings
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .api.client import DEFAULT_API_BASE
from .api.http_client import build_base_url

DEFAULT_CONFIG_PATH = Path("~/.config/badwords/config.json").expanduser()
DEFAULT_PREFS_PATH = "~/.config/badwords/prefs.json"

CONFIG_ENV_OVERRIDES = {
    "api_base": "BADWORDS_API",
    "timeout_s": "BADWORDS_TIMEOUT_S",
    "prefs_path": "BADWORDS_PREFS",
    "confirm_status_ms": "BADWORDS_CONFIRM_STATUS_MS",
    "feedback_status_ms": "BADWORDS_FEEDBACK_STATUS_MS",
    "default_severity": "BADWORDS_DEFAULT_SEVERITY",
}

_INT_KEYS = {"timeout_s", "confirm_status_ms", "feedback_status_ms", "default_severity"}


def get_config_path(path: Path | None = None) -> Path:
    candidate = path or Path(os.getenv("BADWORDS_CONFIG", DEFAULT_CONFIG_PATH))
    return candidate.expanduser()


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = get_config_path(path)
    if not config_path.exists():
        return {}
    raw = config_path.read_text()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid config json") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be an object")
    return data


def get_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, env_var in CONFIG_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            overrides[key] = value
    return overrides


@dataclass
class BadwordsConfig:
    api_base: str = DEFAULT_API_BASE
    timeout_s: int = 10
    prefs_path: str = DEFAULT_PREFS_PATH

    # Status lifetimes: confirmations are shorter than operation feedback.
    confirm_status_ms: int = 2500
    feedback_status_ms: int = 3500

    default_severity: int = 50

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _parse_int(value: object, default: int, *, key: str) -> int:
    if value is None:
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default


def load_config(path: Path | None = None) -> BadwordsConfig:
    cfg = BadwordsConfig()
    try:
        data = read_config_file(path)
    except (ValueError, OSError) as exc:
        warnings.warn(f"Invalid config file: {exc}", RuntimeWarning, stacklevel=2)
        data = {}
    cfg = _apply_dict(cfg, data)
    cfg = _apply_env(cfg)
    cfg.api_base = build_base_url(cfg.api_base) or DEFAULT_API_BASE
    return cfg


def _apply_dict(cfg: BadwordsConfig, data: dict[str, Any]) -> BadwordsConfig:
    for key, value in data.items():
        if not hasattr(cfg, key):
            continue
        if key in _INT_KEYS:
            setattr(cfg, key, _parse_int(value, getattr(cfg, key), key=key))
            continue
        if value is None:
            continue
        setattr(cfg, key, str(value))
    return cfg


def _apply_env(cfg: BadwordsConfig) -> BadwordsConfig:
    cfg.api_base = os.getenv("BADWORDS_API", cfg.api_base)
    cfg.timeout_s = _parse_int(os.getenv("BADWORDS_TIMEOUT_S"), cfg.timeout_s, key="timeout_s")
    cfg.prefs_path = os.getenv("BADWORDS_PREFS", cfg.prefs_path)
    cfg.confirm_status_ms = _parse_int(
        os.getenv("BADWORDS_CONFIRM_STATUS_MS"),
        cfg.confirm_status_ms,
        key="confirm_status_ms",
    )
    cfg.feedback_status_ms = _parse_int(
        os.getenv("BADWORDS_FEEDBACK_STATUS_MS"),
        cfg.feedback_status_ms,
        key="feedback_status_ms",
    )
    cfg.default_severity = _parse_int(
        os.getenv("BADWORDS_DEFAULT_SEVERITY"),
        cfg.default_severity,
        key="default_severity",
    )
    return cfg
