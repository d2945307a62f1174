from __future__ import annotations

from pathlib import Path

import typer

from . import __version__
from .commands.common import configure_logging
from .commands.prefs_cmds import config_cmd, prefs_cmd
from .commands.words_cmds import (
    accept_cmd,
    add_cmd,
    count_cmd,
    csv_url_cmd,
    download_cmd,
    theme_cmd,
)

app = typer.Typer(help="badwords: submit and count words in the Uzbek bad-words list")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    configure_logging()


@app.command()
def count(
    wait: float = typer.Option(15.0, help="Seconds to wait for the server"),
) -> None:
    """Show the total number of words in the list."""

    count_cmd(wait_s=wait)


@app.command()
def add(
    word: str = typer.Argument(..., help="Word to add"),
    severity: int = typer.Option(
        None, min=1, max=100, help="Severity rating (1-100); defaults to config"
    ),
) -> None:
    """Add a word to the list."""

    add_cmd(word=word, severity=severity)


@app.command()
def accept() -> None:
    """Accept the content disclaimer (required before adding words)."""

    accept_cmd()


@app.command()
def theme(
    toggle: bool = typer.Option(False, "--toggle", help="Switch between dark and light"),
) -> None:
    """Show or toggle the theme preference."""

    theme_cmd(toggle=toggle)


@app.command()
def prefs() -> None:
    """Show stored preferences."""

    prefs_cmd()


@app.command("csv-url")
def csv_url() -> None:
    """Print the public CSV export URL."""

    csv_url_cmd()


@app.command()
def download(
    dest: Path = typer.Argument(Path("bad_words.csv"), help="Destination file"),
) -> None:
    """Download the public CSV export."""

    download_cmd(dest=dest)


@app.command()
def config() -> None:
    """Show the effective configuration."""

    config_cmd()


if __name__ == "__main__":
    app()
