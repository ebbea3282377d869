from __future__ import annotations


class RunnerError(Exception):
    """Base exception for the runner module."""


class RunnerStateError(RunnerError):
    """Raised when an operation is not allowed in the runner's current state."""
