"""
Actions consumed by the state reducer.

User input, timer ticks and the two background loaders all talk to the run
loop by enqueueing one of these on the shared action queue.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum

from planner_feed.models import Calendar


class Action(Enum):
    """Actions that carry no payload."""
    TICK = "TICK"
    RENDER = "RENDER"
    QUIT = "QUIT"
    NEXT_ITEM = "NEXT_ITEM"
    PREV_ITEM = "PREV_ITEM"
    NEXT_DAY = "NEXT_DAY"
    PREV_DAY = "PREV_DAY"
    OPEN_SELECTED = "OPEN_SELECTED"
    NONE = "NONE"


@dataclass(frozen=True)
class NetworkReady:
    """A calendar built from a fresh network response."""
    calendar: Calendar


@dataclass(frozen=True)
class CacheReady:
    """A calendar built from the on-disk copy of a previous response."""
    calendar: Calendar


AnyAction = t.Union[Action, NetworkReady, CacheReady]
