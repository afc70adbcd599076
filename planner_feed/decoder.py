"""Decoding of raw planner feed payloads into normalized events."""
from __future__ import annotations

import typing as t

from pydantic import ValidationError

from planner_feed.models import NormalizedEvent
from planner_feed.schema import PlannerItem, PlannerItemList


class DecodeError(ValueError):
    """Raised when a planner payload cannot be decoded."""


def course_name(context_name: str) -> str:
    """Short course code from a free-text label.

    ``"Intro to Systems"`` becomes ``"Intro-to"``.
    """
    return "-".join(context_name.split()[:2])


def _normalize(item: PlannerItem) -> NormalizedEvent:
    # astimezone() with no argument converts to the process local zone
    local_due_at = item.plannable.due_at.astimezone().replace(tzinfo=None)
    return NormalizedEvent(
        course_name=course_name(item.context_name),
        due_at=local_due_at,
        title=item.plannable.title,
        url=item.html_url,
        submitted=item.submitted,
    )


def decode_items(payload: t.Union[bytes, str]) -> list[NormalizedEvent]:
    """Decode a JSON array of planner items.

    Args:
        payload: Raw response body (or cached copy of one)

    Returns:
        Normalized events in payload order

    Raises:
        DecodeError: If the payload is not valid JSON, not an array, or any
            single item is malformed. No partial result is returned.
    """
    try:
        items = PlannerItemList.validate_json(payload)
    except ValidationError as e:
        raise DecodeError(f"Invalid planner payload: {e.error_count()} error(s): {e}") from e
    except ValueError as e:
        # undecodable bytes
        raise DecodeError(f"Invalid planner payload: {e}") from e
    return [_normalize(item) for item in items]
