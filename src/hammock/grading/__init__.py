from __future__ import annotations

from .engine import grade, resolve, score
from .exceptions import GraderError, GradingError
from .model import FeedbackResult, FeedbackStatus, ScoreSummary
from .schema import Feedback, ParseResponse

__all__ = [
    "Feedback",
    "FeedbackResult",
    "FeedbackStatus",
    "GraderError",
    "GradingError",
    "ParseResponse",
    "ScoreSummary",
    "grade",
    "resolve",
    "score",
]
