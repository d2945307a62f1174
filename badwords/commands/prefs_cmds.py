from __future__ import annotations

import json

from rich import print

from badwords.commands.common import load_config_or_exit
from badwords.config import get_config_path, get_env_overrides
from badwords.prefs import get_preference_store


def prefs_cmd() -> None:
    """Print stored client preferences as JSON."""

    cfg = load_config_or_exit()
    store = get_preference_store(cfg.prefs_path)
    store.reload()
    print(json.dumps(store.snapshot(), ensure_ascii=False, indent=2))


def config_cmd() -> None:
    """Print the effective config and active environment overrides."""

    cfg = load_config_or_exit()
    payload = {
        "path": str(get_config_path()),
        "config": cfg.as_dict(),
        "env_overrides": get_env_overrides(),
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
