from __future__ import annotations

from loguru import logger

from .activity import Activity, PartView, QuestionView
from .grading import FeedbackResult, FeedbackStatus
from .host import CallbackHost, Host
from .runner import AttemptRunner
from .spec import QuestionModel, load_questions, validate_question

logger.disable("hammock")

__all__ = [
    "Activity",
    "AttemptRunner",
    "CallbackHost",
    "FeedbackResult",
    "FeedbackStatus",
    "Host",
    "PartView",
    "QuestionModel",
    "QuestionView",
    "load_questions",
    "validate_question",
]
