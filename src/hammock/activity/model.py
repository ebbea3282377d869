from __future__ import annotations

from typing import Any

from attrs import frozen

from hammock.grading import FeedbackResult


@frozen
class PartView:
    """What the activity gets to see of one part while rendering."""

    prompt: str | None = None
    hints: list[str] | None = None
    config: Any = None

    feedback: FeedbackResult | None = None
    """Present only once the part has been graded."""


@frozen
class QuestionView[R]:
    """
    Read-only data handed to `Activity.render`.

    Hints and config are copies, so a renderer cannot reach the canonical question.
    """

    state: R
    """The stored response for the current attempt."""

    parts: list[PartView]
    """One entry per part, never empty."""

    prompt: str | None = None
    hints: list[str] | None = None
    config: Any = None

    completed: bool = False
    """Whether the last submission earned full marks."""
