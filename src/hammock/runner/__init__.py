from __future__ import annotations

from .exceptions import RunnerError, RunnerStateError
from .main import AttemptRunner
from .model import AttemptState, RunnerState

__all__ = [
    "AttemptRunner",
    "AttemptState",
    "RunnerError",
    "RunnerState",
    "RunnerStateError",
]
