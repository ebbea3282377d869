from __future__ import annotations

from typing import Final, Literal

from attrs import frozen
from pydantic import BaseModel

STATE_RECORD: Final = "state"
"""Record holding the activity's response for an attempt."""

FEEDBACK_RECORD: Final = "feedback"
"""Record holding the last graded feedback of an attempt."""

RESET_RECORD: Final = "reset"
"""Sentinel written before a reset restarts the attempt."""

JSON_MIME_TYPE: Final = "application/json"


@frozen
class RecordRef:
    """An entry of the host's session index: a record written for some attempt."""

    attempt: str | int
    """As reported by the host, not yet parsed."""

    name: str


class ActionRecord(BaseModel):
    """Telemetry sent to the host for every graded part of a submission."""

    action: Literal["EVALUATE_QUESTION"] = "EVALUATE_QUESTION"
    step: str
    """Part label, `part1`, `part2`, ..."""

    correct: bool
    key: str
