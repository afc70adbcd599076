"""
Domain models for the planner calendar.

This module contains the dataclasses the viewer works with once the external
feed has been decoded: a single normalized event, one calendar day with its
item cursor, and the whole calendar with its day cursor.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import date, datetime

DUE_TIME_FORMAT = "%H:%M"


@dataclass(frozen=True)
class NormalizedEvent:
    """One planner item, already converted to local time."""
    course_name: str
    due_at: datetime  # naive, local time zone
    title: str
    url: str
    submitted: bool = False


@dataclass
class CalendarDay:
    """All events sharing one local calendar date.

    ``selected`` is the index of the highlighted row, or None when the day
    has no events.
    """
    date: date
    events: list[NormalizedEvent] = field(default_factory=list)
    selected: t.Optional[int] = None

    def __post_init__(self) -> None:
        self.clamp_selection()

    def clamp_selection(self) -> None:
        if not self.events:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, len(self.events) - 1))

    def select_next(self) -> None:
        if self.selected is None:
            return
        self.selected = min(self.selected + 1, len(self.events) - 1)

    def select_previous(self) -> None:
        if self.selected is None:
            return
        self.selected = max(self.selected - 1, 0)

    def selected_event(self) -> t.Optional[NormalizedEvent]:
        if self.selected is None or not 0 <= self.selected < len(self.events):
            return None
        return self.events[self.selected]


@dataclass
class Calendar:
    """Days in ascending date order plus the day cursor."""
    days: list[CalendarDay] = field(default_factory=list)
    current_day_index: int = 0

    def __post_init__(self) -> None:
        self.clamp_day_index()

    @property
    def is_empty(self) -> bool:
        return not self.days

    def clamp_day_index(self) -> None:
        """Keep the day cursor inside ``[0, len(days) - 1]`` (0 when empty)."""
        if not self.days:
            self.current_day_index = 0
        else:
            self.current_day_index = max(0, min(self.current_day_index, len(self.days) - 1))

    def next_day(self) -> None:
        if not self.days:
            return
        self.current_day_index = min(self.current_day_index + 1, len(self.days) - 1)

    def previous_day(self) -> None:
        if not self.days:
            return
        self.current_day_index = max(self.current_day_index - 1, 0)

    def current_day(self) -> t.Optional[CalendarDay]:
        if not self.days:
            return None
        return self.days[self.current_day_index]

    def events(self) -> list[NormalizedEvent]:
        """All events, in day order and then in-day order."""
        return [event for day in self.days for event in day.events]


@dataclass(frozen=True)
class ColumnWidths:
    """Longest course name, title and due-time string in a calendar."""
    course: int = 0
    title: int = 0
    due: int = 0

    @classmethod
    def for_calendar(cls, calendar: Calendar) -> ColumnWidths:
        events = calendar.events()
        if not events:
            return cls()
        return cls(
            course=max(len(e.course_name) for e in events),
            title=max(len(e.title) for e in events),
            due=max(len(e.due_at.strftime(DUE_TIME_FORMAT)) for e in events),
        )
