"""Shared fixtures for planner tests."""
from __future__ import annotations

import json
import typing as t
from datetime import datetime

import pytest

from planner_feed.config import FeedConfig
from planner_feed.models import NormalizedEvent


def local_iso(year: int, month: int, day: int, hour: int, minute: int = 0) -> str:
    """ISO timestamp with the local UTC offset, so it decodes to the same wall time."""
    return datetime(year, month, day, hour, minute).astimezone().isoformat()


def planner_item(
    title: str = "Homework 1",
    due_at: t.Optional[str] = None,
    context_name: str = "17-603 Communications for Software Engineers",
    html_url: str = "/courses/101/assignments/1",
    submissions: t.Any = False,
) -> dict[str, t.Any]:
    """One planner item shaped like the Canvas feed."""
    return {
        "context_type": "Course",
        "course_id": 101,
        "plannable_type": "assignment",
        "context_name": context_name,
        "html_url": html_url,
        "submissions": submissions,
        "plannable": {
            "id": 1,
            "title": title,
            "due_at": due_at or local_iso(2026, 10, 20, 23, 59),
            "points_possible": 10.0,
        },
    }


def event(title: str, due_at: datetime, course_name: str = "17-603", submitted: bool = False) -> NormalizedEvent:
    return NormalizedEvent(
        course_name=course_name,
        due_at=due_at,
        title=title,
        url=f"/courses/101/assignments/{title}",
        submitted=submitted,
    )


@pytest.fixture
def make_item() -> t.Callable[..., dict[str, t.Any]]:
    return planner_item


@pytest.fixture
def make_event() -> t.Callable[..., NormalizedEvent]:
    return event


@pytest.fixture
def iso() -> t.Callable[..., str]:
    return local_iso


@pytest.fixture
def two_day_payload() -> bytes:
    """Two days, four items, deliberately out of order."""
    items = [
        planner_item(title="Reading response", due_at=local_iso(2026, 10, 21, 17, 0)),
        planner_item(title="Quiz 3", due_at=local_iso(2026, 10, 20, 9, 30), submissions={"submitted": True}),
        planner_item(title="Project proposal", due_at=local_iso(2026, 10, 21, 9, 0)),
        planner_item(title="Lab 2", due_at=local_iso(2026, 10, 20, 23, 59)),
    ]
    return json.dumps(items).encode("utf-8")


@pytest.fixture
def config() -> FeedConfig:
    return FeedConfig(base_url="https://canvas.example.edu", access_token="test-token")
