from __future__ import annotations

from .exceptions import SpecError, ValidationError
from .model import FeedbackModel, PartModel, QuestionModel
from .schema import FeedbackSpec, PartSpec, QuestionSpec
from .validator import (
    load_questions,
    validate_feedback,
    validate_part,
    validate_question,
    validate_questions,
)

__all__ = [
    "FeedbackModel",
    "FeedbackSpec",
    "PartModel",
    "PartSpec",
    "QuestionModel",
    "QuestionSpec",
    "SpecError",
    "ValidationError",
    "load_questions",
    "validate_feedback",
    "validate_part",
    "validate_question",
    "validate_questions",
]
