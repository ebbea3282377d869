from __future__ import annotations

from enum import StrEnum

from attrs import frozen
from pydantic import BaseModel, ConfigDict


class FeedbackStatus(StrEnum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    NOT_FOUND = "not_found"


class FeedbackResult(BaseModel):
    """
    The grader's analysis of one answered part.

    Persisted in the "feedback" record and handed to the activity for rendering.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    """Response key that was looked up in the match tables."""

    status: FeedbackStatus
    score: int
    message: str
    """Matched message with the response's tags substituted in, or the raw key if nothing matched."""

    @property
    def correct(self) -> bool:
        return self.status is FeedbackStatus.CORRECT


@frozen
class ScoreSummary:
    points_earned: int
    points_available: int

    @property
    def percentage(self) -> int:
        """Weighted score in whole percent, rounded down and clamped to [0, 100]."""
        if self.points_available <= 0:
            return 0
        return max(0, min(100, (100 * self.points_earned) // self.points_available))

    @property
    def complete(self) -> bool:
        return self.percentage == 100
