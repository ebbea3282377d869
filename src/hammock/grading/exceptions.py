from __future__ import annotations


class GraderError(Exception):
    """Base exception for the grading module."""


class GradingError(GraderError):
    """Raised when an activity's parsed responses cannot be graded."""
