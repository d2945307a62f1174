from __future__ import annotations

from http.client import HTTPException
from pathlib import Path

import typer
from rich import print

from badwords.api.client import AggregateClient
from badwords.api.types import ApiError
from badwords.commands.common import load_config_or_exit, render_status
from badwords.controller import PageController
from badwords.status import StatusKind
from badwords.submission import SubmissionOutcome

DISCLAIMER_TEXT = (
    "This project may contain many offensive words taken from a list of "
    "inappropriate Uzbek words. They are collected for research and filtering only. "
    "Run `badwords accept` to continue."
)


def _controller() -> PageController:
    controller = PageController(load_config_or_exit())
    controller.notifier.on_change(render_status)
    return controller


def count_cmd(*, wait_s: float) -> None:
    """Fetch and print the total number of words."""

    controller = _controller()
    controller.mount()
    try:
        if not controller.wait_for_initial_fetch(wait_s):
            print("[red]Timed out waiting for the word count[/red]")
            raise typer.Exit(code=1)
        status = controller.notifier.current
        if status is not None and status.kind is StatusKind.ERROR:
            raise typer.Exit(code=1)
        print(f"Jami so'zlar: [bold]{controller.page.total_words}[/bold]")
    finally:
        controller.unmount()


def add_cmd(*, word: str, severity: int | None) -> None:
    """Submit one word through the consent-gated pipeline."""

    controller = _controller()
    controller.mount(fetch=False)
    try:
        if controller.page.disclaimer_open:
            print(f"[yellow]{DISCLAIMER_TEXT}[/yellow]")
        controller.set_word(word)
        if severity is not None:
            controller.set_severity(severity)
        outcome = controller.submit()
        if outcome is SubmissionOutcome.EMPTY:
            print("[yellow]Nothing to add: the word is empty[/yellow]")
            raise typer.Exit(code=1)
        if outcome is not SubmissionOutcome.SUBMITTED:
            raise typer.Exit(code=1)
        print(f"Jami so'zlar: [bold]{controller.page.total_words}[/bold]")
    finally:
        controller.unmount()


def accept_cmd() -> None:
    """Accept the content disclaimer."""

    controller = _controller()
    controller.mount(fetch=False)
    try:
        if not controller.page.disclaimer_open:
            print("[dim]Disclaimer already accepted[/dim]")
            return
        controller.accept_disclaimer()
    finally:
        controller.unmount()


def theme_cmd(*, toggle: bool) -> None:
    """Show or toggle the stored theme."""

    controller = _controller()
    controller.mount(fetch=False)
    try:
        if toggle:
            if controller.toggle_theme() is None:
                print(f"[yellow]{DISCLAIMER_TEXT}[/yellow]")
                raise typer.Exit(code=1)
        print(f"Theme: [bold]{controller.theme.theme.value}[/bold]")
    finally:
        controller.unmount()


def csv_url_cmd() -> None:
    """Print the public CSV export URL."""

    cfg = load_config_or_exit()
    print(AggregateClient(cfg.api_base, timeout_s=cfg.timeout_s).csv_url)


def download_cmd(*, dest: Path) -> None:
    """Save the public CSV export to a local file."""

    cfg = load_config_or_exit()
    client = AggregateClient(cfg.api_base, timeout_s=cfg.timeout_s)
    try:
        saved = client.download_csv(dest.expanduser())
    except ApiError as exc:
        print(f"[red]Download failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    except (OSError, HTTPException) as exc:
        print(f"[red]Download failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    print(f"[green]Saved {saved}[/green]")
