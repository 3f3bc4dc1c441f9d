"""
Terminal console for the rat CLI.

Console implements the operator capabilities the OAuth driver needs
(Presenter and LineReader) on top of click's terminal helpers and the
standard browser launcher. Verbosity is held by the console instance and
only affects the decorated info, warning and error messages.
"""

import logging
import sys
import webbrowser

import click

from .oauth import LineReader, Presenter, PresenterError

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {"verbose": 1, "normal": 2, "quiet": 3}


class Console(Presenter, LineReader):
    """
    Presenter and line reader backed by the terminal.

    Example:
        console = Console(verbosity="normal")
        console.info("Requesting authentication code ...")
    """

    def __init__(self, verbosity: str = "normal"):
        """
        Initialize console.

        Args:
            verbosity: "verbose", "normal" or "quiet"
        """
        if verbosity not in VERBOSITY_LEVELS:
            raise ValueError(f"Unknown verbosity: {verbosity}")
        self.verbosity = verbosity

    def _is_relevant(self, level: str) -> bool:
        return VERBOSITY_LEVELS[level] >= VERBOSITY_LEVELS[self.verbosity]

    def open(self, url: str) -> None:
        """Open url in the default web browser."""
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            raise PresenterError(f"Failed to open web browser: {e}") from e

        if not opened:
            raise PresenterError("Failed to open web browser: no usable browser found")
        logger.debug("Opened authorization URL in web browser")

    def show(self, text: str) -> None:
        click.echo(text)

    def prompt(self, text: str) -> None:
        click.echo(text, nl=False)

    def read_line(self) -> str:
        return sys.stdin.readline()

    def info(self, text: str) -> None:
        """Print an informational message (hidden when quiet)."""
        if self._is_relevant("normal"):
            click.secho(text, fg="blue")

    def warning(self, text: str) -> None:
        """Print a warning (hidden when quiet)."""
        if self._is_relevant("normal"):
            click.secho(f"Warning: {text}", fg="yellow")

    def error(self, text: str) -> None:
        """Print an error to stderr (hidden when quiet)."""
        if self._is_relevant("normal"):
            click.secho(f"Error: {text}", fg="red", err=True)
