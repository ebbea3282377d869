from __future__ import annotations

from .abc import Activity
from .model import PartView, QuestionView

__all__ = [
    "Activity",
    "PartView",
    "QuestionView",
]
