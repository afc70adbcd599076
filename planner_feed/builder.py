"""Grouping of normalized events into a date-partitioned calendar."""
from __future__ import annotations

import typing as t
from datetime import date

from planner_feed.decoder import decode_items
from planner_feed.models import Calendar, CalendarDay, NormalizedEvent


def build_calendar(events: t.Iterable[NormalizedEvent]) -> Calendar:
    """Build a Calendar from events in any order.

    Days are emitted in ascending date order. Inside a day events are sorted
    by due time; the sort is stable, so events due at the same moment keep
    their input order. Every cursor starts at 0.
    """
    by_date: dict[date, list[NormalizedEvent]] = {}
    for event in events:
        by_date.setdefault(event.due_at.date(), []).append(event)

    days = [
        CalendarDay(
            date=day,
            events=sorted(by_date[day], key=lambda e: e.due_at),
            selected=0,
        )
        for day in sorted(by_date)
    ]
    return Calendar(days=days, current_day_index=0)


def load_calendar(payload: t.Union[bytes, str]) -> Calendar:
    """Decode a raw payload and build its calendar.

    Raises:
        DecodeError: If the payload cannot be decoded
    """
    return build_calendar(decode_items(payload))
