"""Rich-based rendering of recorded issues.

Requires the 'rich' package: pip install rich
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from abstract_validation_core.events import (
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from abstract_validation_core.issues import Issue, PathSegment

if TYPE_CHECKING:
    from rich.console import Console
    from rich.table import Table

__all__ = ["RichIssueObserver", "format_path", "render_issues"]


def format_path(path: Iterable[PathSegment]) -> str:
    """Render a path as ``items[0].name``; the root renders as ``<root>``."""
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        else:
            rendered += f".{segment}" if rendered else segment
    return rendered or "<root>"


def render_issues(issues: Iterable[Issue], title: str = "Validation Issues") -> Table:
    """Build a table with one row per issue, in recording order."""
    from rich.markup import escape
    from rich.table import Table

    table = Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
        expand=True,
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Path", style="cyan")
    table.add_column("Code", style="yellow")
    table.add_column("Message", style="red")

    rows = 0
    for rows, issue in enumerate(issues, start=1):
        table.add_row(
            str(rows), escape(format_path(issue.path)), str(issue.code), escape(issue.message)
        )

    if rows == 0:
        table.add_row("-", "-", "-", "No issues")

    return table


class RichIssueObserver(ValidationObserver):
    """Prints each recorded issue as it happens, plus a summary per run.

    Example:
        observer = RichIssueObserver()
        runner.add_observer(observer)
        runner.safe_parse(payload)

    Requires:
        pip install rich
    """

    def __init__(self, console: Console | None = None, show_summary: bool = True) -> None:
        """Initialize the observer.

        Args:
            console: Rich Console instance. If None, creates a new one.
            show_summary: Print a summary line when a run completes.
        """
        from rich.console import Console

        self._console = console or Console()
        self._show_summary = show_summary
        self._issues: list[Issue] = []

    @property
    def issues(self) -> list[Issue]:
        """Issues seen since the last run started."""
        return self._issues.copy()

    def on_event(self, event: ValidationEvent) -> None:
        """Handle validation events.

        Args:
            event: The validation event to handle.
        """
        from rich.markup import escape

        if event.event_type == ValidationEventType.VALIDATION_STARTED:
            self._issues.clear()

        elif event.event_type == ValidationEventType.ISSUE_RECORDED:
            issue: Issue = event.data["issue"]
            self._issues.append(issue)
            self._console.print(
                f"[red]✗[/] [cyan]{escape(format_path(issue.path))}[/]: {escape(issue.message)} "
                f"[dim]({issue.code})[/]",
                highlight=False,
            )

        elif event.event_type == ValidationEventType.VALIDATION_COMPLETED:
            if not self._show_summary:
                return
            name = event.data.get("validator_name", "validator")
            count = event.data.get("issue_count", 0)
            if event.data.get("success"):
                self._console.print(f"[green]✓[/] {escape(name)}: valid", highlight=False)
            else:
                self._console.print(
                    f"[red]✗[/] {escape(name)}: {count} issue(s)",
                    highlight=False,
                )
