"""
Progress bar for the copy phase of a migration, using the Rich library.

Usage:
    from m3u_migrator.core.progress import CopyProgressBar

    with CopyProgressBar(total=len(records)) as progress:
        for record in records:
            success = copy(record)
            progress.update(success=success)
"""

from rich import get_console
from rich.console import JustifyMethod, OverflowMethod
from rich.highlighter import Highlighter
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    Task,
    TaskID,
)
from rich.style import StyleType
from rich.text import Text
from rich.theme import Theme


PROGRESS_THEME = Theme({
    "bar.back": "grey23",
    "bar.complete": "rgb(165,66,129)",
    "bar.finished": "rgb(114,156,31)",
    "bar.pulse": "rgb(165,66,129)",
    "progress.percentage": "white",
})


class SizedTextColumn(ProgressColumn):
    """
    Text column with a fixed width.

    Text longer than the width is truncated with the given overflow method.
    """

    def __init__(
        self,
        text_format: str,
        style: StyleType = "none",
        justify: JustifyMethod = "left",
        markup: bool = True,
        highlighter: Highlighter | None = None,
        overflow: OverflowMethod | None = None,
        width: int = 20,
    ) -> None:
        self.text_format = text_format
        self.justify: JustifyMethod = justify
        self.style = style
        self.markup = markup
        self.highlighter = highlighter
        self.overflow: OverflowMethod | None = overflow
        self.width = width
        super().__init__()

    def render(self, task: Task) -> Text:
        """Render the column."""
        _text = self.text_format.format(task=task)
        if self.markup:
            text = Text.from_markup(_text, style=self.style, justify=self.justify)
        else:
            text = Text(_text, style=self.style, justify=self.justify)
        if self.highlighter:
            self.highlighter.highlight(text)

        text.truncate(max_width=self.width, overflow=self.overflow, pad=True)
        return text


class CopyProgressBar:
    """
    Progress bar for copying media files into the destination directory.

    Displays:
    - Description (e.g., "Copying")
    - Status: ✓ copied, ✗ failed
    - Progress bar
    - Percentage

    Example:
        Copying         ✓ 120  ✗ 3             ━━━━━━━━━━━━━━━━━  64%

    Attributes:
        total: Number of records to copy.
        completed: Number of records processed so far.
        copied: Number of records copied successfully.
        failed: Number of records whose copy failed.
    """

    def __init__(self, total: int, description: str = "Copying", status_width: int = 25):
        self.total = total
        self.description = description
        self.completed = 0
        self.copied = 0
        self.failed = 0

        self.console = get_console()

        self.progress = Progress(
            SizedTextColumn(
                "[white]{task.description}",
                overflow="ellipsis",
                width=15,
            ),
            SizedTextColumn(
                "{task.fields[status]}",
                width=status_width,
                style="white",
            ),
            BarColumn(bar_width=40, finished_style="green"),
            "[progress.percentage]{task.percentage:>3.0f}%",
            console=self.console,
            transient=False,
            refresh_per_second=10,
        )

        self.task_id: TaskID | None = None
        self._started = False

    def __enter__(self) -> "CopyProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        """Start the progress bar (can be called manually)."""
        if not self._started:
            self.console.push_theme(PROGRESS_THEME)
            self.progress.start()
            self.task_id = self.progress.add_task(
                description=self.description,
                total=self.total,
                status=self._get_status_text(),
            )
            self._started = True

    def stop(self) -> None:
        """Stop the progress bar."""
        if self._started:
            self.progress.stop()
            self.console.pop_theme()
            self._started = False

    def _get_status_text(self) -> str:
        return f"[green]✓ {self.copied}[/green]  [red]✗ {self.failed}[/red]"

    def update(self, success: bool) -> None:
        """
        Update the progress bar with a processed record.

        Args:
            success: Whether the record's media file was copied.
        """
        self.completed += 1
        if success:
            self.copied += 1
        else:
            self.failed += 1

        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                completed=self.completed,
                status=self._get_status_text(),
            )
