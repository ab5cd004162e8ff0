"""Issue table widget for the browser."""

from rich.text import Text
from textual.widgets import DataTable

from jira_branch.tui.session import Frame


class IssueDataTable(DataTable):
    """DataTable subclass that mirrors a session Frame.

    The table never takes focus: keys go to the app, which updates the
    session and redraws. The highlighted row always follows the session
    cursor.
    """

    can_focus = False

    def __init__(self) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True)

    def on_mount(self) -> None:
        """Configure columns when widget is mounted."""
        self.add_column("key", key="key")
        self.add_column("summary", key="summary")

    def show_frame(self, frame: Frame) -> None:
        """Replace table contents with the frame's rows.

        Args:
            frame: Rendered session state
        """
        self.clear()

        highlighted_row: int | None = None
        for index, row in enumerate(frame.rows):
            # Text cells keep Rich from parsing markup in issue summaries
            self.add_row(Text(row.key), Text(row.summary))
            if row.highlighted:
                highlighted_row = index

        self.show_cursor = highlighted_row is not None
        if highlighted_row is not None:
            self.move_cursor(row=highlighted_row)
