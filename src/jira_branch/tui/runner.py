"""TUI runner abstraction for testability.

This module provides an ABC for running the Textual browser app, enabling
CLI routing tests without starting the Textual event loop.
"""

from abc import ABC, abstractmethod

from jira_branch.tui.app import IssueBrowserApp
from jira_branch.tui.session import SessionOutcome


class TuiRunner(ABC):
    """Abstract interface for running the browser app."""

    @abstractmethod
    def run(self, app: IssueBrowserApp) -> SessionOutcome | None:
        """Run the app until it exits.

        Args:
            app: The IssueBrowserApp instance to run

        Returns:
            The app's outcome, or None if it exited without one
            (e.g., the terminal was closed)
        """
        ...


class RealTuiRunner(TuiRunner):
    """Production implementation that runs the Textual event loop.

    Textual owns the terminal for the duration of run(): raw mode and the
    alternate screen are restored on every exit path, including errors.
    """

    def run(self, app: IssueBrowserApp) -> SessionOutcome | None:
        return app.run()


class FakeTuiRunner(TuiRunner):
    """Test implementation that captures apps without running the event loop.

    Returns a pre-configured outcome so CLI tests can exercise every
    post-selection path.
    """

    def __init__(self, outcome: SessionOutcome | None = None) -> None:
        """Create FakeTuiRunner.

        Args:
            outcome: Value returned from run(), None simulates an abrupt exit
        """
        self._outcome = outcome
        self._apps_run: list[IssueBrowserApp] = []

    def run(self, app: IssueBrowserApp) -> SessionOutcome | None:
        self._apps_run.append(app)
        return self._outcome

    @property
    def apps_run(self) -> list[IssueBrowserApp]:
        """Apps that would have been run.

        This property is for test assertions only.
        """
        return self._apps_run
