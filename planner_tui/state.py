"""Application state and the reducer that applies actions to it.

The run loop owns the only ``AppState`` and is the only caller of
``update``, so no locking is needed. Everything else (key handling, the
cache loader, the fetcher) only enqueues actions.
"""
from __future__ import annotations

import logging
import typing as t
import webbrowser
from dataclasses import dataclass, field

from planner_feed.models import Calendar, ColumnWidths
from planner_tui.actions import Action, AnyAction, CacheReady, NetworkReady

logger = logging.getLogger(__name__)

UrlOpener = t.Callable[[str], t.Any]


@dataclass
class AppState:
    """Everything the presentation adapter reads."""
    calendar: Calendar = field(default_factory=Calendar)
    received_network: bool = False
    should_quit: bool = False
    column_widths: ColumnWidths = field(default_factory=ColumnWidths)

    def replace_calendar(self, calendar: Calendar) -> None:
        self.calendar = calendar
        self.calendar.clamp_day_index()
        for day in self.calendar.days:
            day.clamp_selection()
        self.column_widths = ColumnWidths.for_calendar(calendar)


def update(state: AppState, action: AnyAction, open_url: UrlOpener = webbrowser.open) -> None:
    """Apply a single action to ``state``.

    Args:
        state: The state to mutate
        action: The action to apply
        open_url: Called with the selected event's URL on ``OPEN_SELECTED``
    """
    if isinstance(action, NetworkReady):
        state.replace_calendar(action.calendar)
        state.received_network = True
        state.calendar.current_day_index = 0
        return

    if isinstance(action, CacheReady):
        # Cache never replaces network data, whichever arrived first
        if state.received_network:
            logger.debug("Ignoring cached calendar; network data already loaded")
            return
        previous_index = state.calendar.current_day_index
        state.replace_calendar(action.calendar)
        state.calendar.current_day_index = previous_index
        state.calendar.clamp_day_index()
        return

    calendar = state.calendar
    if action is Action.QUIT:
        state.should_quit = True
    elif action is Action.NEXT_ITEM:
        day = calendar.current_day()
        if day is not None:
            day.select_next()
    elif action is Action.PREV_ITEM:
        day = calendar.current_day()
        if day is not None:
            day.select_previous()
    elif action is Action.NEXT_DAY:
        calendar.next_day()
    elif action is Action.PREV_DAY:
        calendar.previous_day()
    elif action is Action.OPEN_SELECTED:
        _open_selected(calendar, open_url)
    # TICK, RENDER and NONE leave the state alone


def _open_selected(calendar: Calendar, open_url: UrlOpener) -> None:
    day = calendar.current_day()
    event = day.selected_event() if day is not None else None
    if event is None:
        return

    try:
        opened = open_url(event.url)
    except (webbrowser.Error, OSError) as e:
        logger.warning("Could not open %s: %s", event.url, e)
        return
    if opened is False:
        logger.warning("No browser available to open %s", event.url)
