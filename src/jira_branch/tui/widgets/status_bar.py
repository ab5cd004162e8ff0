"""Status bar widget for the browser."""

from rich.text import Text
from textual.widgets import Static


class StatusBar(Static):
    """One-line status display: counts, errors and key hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__("", id="status-bar")
        self._message = ""
        self._hint = ""

    @property
    def message(self) -> str:
        return self._message

    def set_message(self, message: str) -> None:
        """Set the left-hand status message."""
        self._message = message
        self._redraw()

    def set_hint(self, hint: str) -> None:
        """Set the key hint shown after the message."""
        self._hint = hint
        self._redraw()

    def _redraw(self) -> None:
        text = Text(self._message)
        if self._hint:
            text.append("  |  ", style="dim")
            text.append(self._hint, style="dim")
        self.update(text)
