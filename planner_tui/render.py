"""Rich renderables for the viewer. Read-only with respect to AppState."""
from __future__ import annotations

from datetime import date

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from planner_feed.models import (
    DUE_TIME_FORMAT,
    Calendar,
    CalendarDay,
    ColumnWidths,
    NormalizedEvent,
)
from planner_tui.state import AppState

TITLE = " CanvasTUI "
WAITING_MESSAGE = "Waiting for data..."
SUBMITTED_MARK = "✓"


def format_day(day: date) -> str:
    """Day header such as ``Monday Oct 19``."""
    return f"{day:%A %b} {day.day}"


def format_due(event: NormalizedEvent) -> str:
    mark = SUBMITTED_MARK if event.submitted else " "
    return f"{event.due_at.strftime(DUE_TIME_FORMAT)} {mark}"


def create_day_table(
    day: CalendarDay,
    widths: ColumnWidths,
    highlight: bool = True,
) -> Table:
    """Create the Course / Assignment / Due table for one day."""
    table = Table(
        show_header=True,
        header_style="magenta",
        box=None,
        expand=True,
        pad_edge=False,
    )
    table.add_column("Course", width=widths.course + 1, no_wrap=True)
    table.add_column("Assignment", min_width=max(widths.title, len("Assignment")) + 2, ratio=1)
    table.add_column("Due", width=widths.due + 2, no_wrap=True)

    for index, event in enumerate(day.events):
        style = "green" if event.submitted else "white"
        if highlight and index == day.selected:
            style += " on black"
        table.add_row(event.course_name, event.title, format_due(event), style=style)

    return table


def render_app(state: AppState) -> RenderableType:
    """Full-screen view of the current day."""
    day = state.calendar.current_day()
    if day is None:
        body: RenderableType = Text(WAITING_MESSAGE)
    else:
        body = Group(
            Text(format_day(day.date), style="bold magenta"),
            create_day_table(day, state.column_widths),
        )

    return Panel(
        body,
        title=TITLE,
        title_align="center",
        box=box.HEAVY,
        border_style="blue",
        padding=(0, 1),
        expand=True,
    )


def render_listing(calendar: Calendar) -> RenderableType:
    """Every day of the calendar, one table each, for non-interactive output."""
    widths = ColumnWidths.for_calendar(calendar)
    sections: list[RenderableType] = []
    for day in calendar.days:
        sections.append(Text(format_day(day.date), style="bold magenta"))
        sections.append(create_day_table(day, widths, highlight=False))
        sections.append(Text(""))
    return Group(*sections)
