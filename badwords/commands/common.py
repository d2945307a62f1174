from __future__ import annotations

import logging
import os
from typing import Any

import typer
from rich import print
from rich.markup import escape

from badwords.config import BadwordsConfig, load_config, read_config_file
from badwords.status import Status, StatusKind

STATUS_STYLES = {
    StatusKind.ERROR: "red",
    StatusKind.SUCCESS: "green",
    StatusKind.INFO: "cyan",
}


def configure_logging() -> None:
    level_name = (os.environ.get("BADWORDS_LOG_LEVEL") or "").strip().upper()
    if not level_name:
        return
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        print(f"[yellow]Unknown log level {level_name!r}; logging stays off[/yellow]")
        return
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def read_config_or_exit() -> dict[str, Any]:
    try:
        return read_config_file()
    except ValueError as exc:
        print(f"[red]Invalid config file: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def load_config_or_exit() -> BadwordsConfig:
    read_config_or_exit()
    return load_config()


def render_status(status: Status | None) -> None:
    if status is None:
        return
    style = STATUS_STYLES.get(status.kind, "white")
    print(f"[{style}]{escape(status.message)}[/{style}]")
