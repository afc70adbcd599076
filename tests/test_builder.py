"""Tests for grouping events into a calendar."""
import random
from datetime import date, datetime

from planner_feed.builder import build_calendar, load_calendar
from planner_tui.actions import Action
from planner_tui.state import AppState, update


def test_days_are_grouped_and_ordered(make_event) -> None:
    """Test that events land on their local date, days ascending."""
    events = [
        make_event("c", datetime(2026, 10, 22, 8, 0)),
        make_event("a", datetime(2026, 10, 20, 23, 59)),
        make_event("b", datetime(2026, 10, 21, 0, 0)),
        make_event("a2", datetime(2026, 10, 20, 0, 1)),
    ]

    calendar = build_calendar(events)

    assert [day.date for day in calendar.days] == [
        date(2026, 10, 20),
        date(2026, 10, 21),
        date(2026, 10, 22),
    ]
    assert [e.title for e in calendar.days[0].events] == ["a2", "a"]
    assert all(day.events for day in calendar.days)


def test_cursors_start_at_zero(make_event) -> None:
    """Test that the day cursor and every item cursor start on the first entry."""
    events = [make_event(str(i), datetime(2026, 10, 20 + i % 3, 10 + i)) for i in range(6)]

    calendar = build_calendar(events)

    assert calendar.current_day_index == 0
    assert [day.selected for day in calendar.days] == [0, 0, 0]


def test_empty_input_gives_empty_calendar() -> None:
    """Test that no events means no days and a zero day cursor."""
    calendar = build_calendar([])

    assert calendar.is_empty
    assert calendar.current_day_index == 0
    assert calendar.current_day() is None


def test_equal_due_times_keep_input_order(make_event) -> None:
    """Test that the in-day sort is stable."""
    due = datetime(2026, 10, 20, 23, 59)
    events = [
        make_event("first", due),
        make_event("early", datetime(2026, 10, 20, 9, 0)),
        make_event("second", due),
        make_event("third", due),
    ]

    calendar = build_calendar(events)

    assert [e.title for e in calendar.days[0].events] == ["early", "first", "second", "third"]


def test_flattened_calendar_is_sorted_and_stable(make_event) -> None:
    """Test that re-flattening all days yields (date, due_at) order, stable on ties."""
    rng = random.Random(1234)
    events = [
        make_event(f"event-{i}", datetime(2026, 10, rng.randint(19, 25), rng.choice([9, 12, 23]), 0))
        for i in range(60)
    ]

    flattened = build_calendar(events).events()

    # sorted() is stable, so this is the expected order including ties
    expected = sorted(events, key=lambda e: (e.due_at.date(), e.due_at))
    assert flattened == expected


def test_build_is_deterministic(make_event) -> None:
    """Test that identical input builds identical calendars."""
    events = [make_event(str(i), datetime(2026, 10, 20 + i % 2, 12)) for i in range(5)]

    assert build_calendar(events) == build_calendar(list(events))


def test_two_day_walkthrough(two_day_payload: bytes) -> None:
    """Test navigation over a two-day, four-item feed."""
    calendar = load_calendar(two_day_payload)

    assert calendar.current_day_index == 0
    assert calendar.days[0].selected == 0
    assert [e.title for e in calendar.days[0].events] == ["Quiz 3", "Lab 2"]
    assert [e.title for e in calendar.days[1].events] == ["Project proposal", "Reading response"]

    state = AppState()
    state.replace_calendar(calendar)
    update(state, Action.NEXT_DAY)
    update(state, Action.NEXT_ITEM)

    day = state.calendar.current_day()
    assert state.calendar.current_day_index == 1
    assert day.selected_event().title == "Reading response"
