"""Browser launcher abstraction for testability.

Opening an issue's Jira page goes through BrowserLauncher so the TUI can be
tested without opening browser windows.
"""

from abc import ABC, abstractmethod

import click


class BrowserLauncher(ABC):
    """Abstract interface for launching URLs in a browser."""

    @abstractmethod
    def launch(self, url: str) -> None:
        """Launch a URL in the default web browser.

        Args:
            url: The URL to open in the browser
        """
        ...


class RealBrowserLauncher(BrowserLauncher):
    """Production implementation that opens URLs via click.launch."""

    def launch(self, url: str) -> None:
        click.launch(url)


class FakeBrowserLauncher(BrowserLauncher):
    """In-memory fake that captures URLs without opening a browser."""

    def __init__(self) -> None:
        self._launched_urls: list[str] = []

    def launch(self, url: str) -> None:
        self._launched_urls.append(url)

    @property
    def launched_urls(self) -> list[str]:
        """URLs passed to launch(), in call order.

        This property is for test assertions only.
        """
        return self._launched_urls
