from __future__ import annotations

from enum import StrEnum

from attrs import field, frozen

from hammock.grading import FeedbackResult


class RunnerState(StrEnum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    RESETTING = "resetting"
    FAILED = "failed"
    """Recovery raised; every later operation is refused."""


@frozen
class AttemptState[R]:
    """
    The student's work on the current attempt.

    Replaced as a whole by recovery, submit and reset; never modified in place.
    """

    response: R
    """Opaque activity-defined response."""

    feedback: tuple[FeedbackResult | None, ...] = field(converter=tuple)
    """Index-aligned with the question's parts; None for parts not graded."""

    attempt_id: int
    completed: bool = False
