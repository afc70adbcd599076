"""
Pydantic models for the Canvas planner items feed.

These mirror the JSON returned by ``/api/v1/planner/items``. Only the fields
the viewer needs are declared; everything else in the payload is ignored.
"""
from __future__ import annotations

import typing as t

from pydantic import AwareDatetime, BaseModel, ConfigDict, StrictBool, TypeAdapter


class Submissions(BaseModel):
    """Submission state object, e.g. ``{"submitted": true, "graded": false}``."""
    submitted: StrictBool


class Plannable(BaseModel):
    """The assignment, quiz or event behind a planner item."""
    # strict: due_at must be an ISO 8601 string, not an epoch number
    model_config = ConfigDict(strict=True)

    title: str
    due_at: AwareDatetime


class PlannerItem(BaseModel):
    """
    One entry of the planner feed.

    ``submissions`` is ``false`` for items that take no submission and an
    object for those that do, so both shapes are accepted here.
    """
    context_name: str
    html_url: str
    submissions: t.Union[StrictBool, Submissions]
    plannable: Plannable

    @property
    def submitted(self) -> bool:
        if isinstance(self.submissions, Submissions):
            return self.submissions.submitted
        return self.submissions


PlannerItemList = TypeAdapter(list[PlannerItem])
