from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from .schema import JSON_MIME_TYPE, ActionRecord, RecordRef


class Host(ABC):
    """
    The runtime embedding a question: attempt lifecycle, record storage and scoring.

    Every coroutine is a round trip to the host and the runner awaits each one to
    completion before moving on.
    """

    @property
    @abstractmethod
    def current_attempt(self) -> str | int:
        """Attempt identifier as reported by the host. Parsed by the runner, never trusted."""

    @abstractmethod
    def session_records(self) -> Iterable[RecordRef]:
        """Records already written, across all attempts of this session."""

    @abstractmethod
    async def write_file_record(
        self,
        name: str,
        attempt: int,
        content: str,
        *,
        mime_type: str = JSON_MIME_TYPE,
    ) -> None:
        """Store `content` as record `name` of `attempt`."""

    @abstractmethod
    async def load_file_record(self, name: str, attempt: int) -> object:
        """Load record `name` of `attempt`, either as raw JSON text or already decoded."""

    @abstractmethod
    async def score_attempt(self, kind: str, value: int) -> None:
        """Report the score of the current attempt, e.g. `("percent", 50)`."""

    @abstractmethod
    async def end_attempt(self) -> None:
        """Close the current attempt."""

    @abstractmethod
    async def start_attempt(self) -> str | int:
        """Open a new attempt and return its identifier."""

    @abstractmethod
    async def log_action(self, record: ActionRecord) -> None:
        """Send a telemetry record."""
