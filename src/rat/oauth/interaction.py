"""Operator interaction capabilities used by the authorization flow.

The driver never talks to a browser or terminal directly. It is handed a
Presenter for output and a LineReader for the one line of input it needs,
so hosts (and tests) decide how the operator is actually reached.
"""

from abc import ABC, abstractmethod


class Presenter(ABC):
    """Shows progress to the operator and opens URLs in a browser."""

    @abstractmethod
    def open(self, url: str) -> None:
        """Open url in the operator's browser.

        Raises:
            PresenterError: If the browser could not be launched
        """
        pass

    @abstractmethod
    def show(self, text: str) -> None:
        """Show one line of text to the operator."""
        pass

    def prompt(self, text: str) -> None:
        """Show text the operator answers on the same line."""
        self.show(text)


class LineReader(ABC):
    """Reads one line of operator input."""

    @abstractmethod
    def read_line(self) -> str:
        """Block until the operator enters a line and return it.

        Returns an empty string at end of input.
        """
        pass
