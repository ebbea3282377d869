from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from hammock.grading import ParseResponse

from .model import QuestionView


class Activity[R](Protocol):
    """
    The author-supplied side of a question, with `R` the activity's own response type.

    The runner treats `R` as opaque: it only stores it, hands it back, and asks the
    activity to turn it into response keys.
    """

    def render(self, view: QuestionView[R]) -> None:
        """
        Draw the question into the page.

        Must be idempotent and history agnostic: the visual result depends only on `view`,
        never on how often or with what data it was called before. Must not modify `view`.
        """

    def init(self, previous: R | None, config: Any) -> R:
        """
        Generate a fresh response for a new or reset attempt.

        `previous` is None on first load and the discarded response on reset, so
        randomized activities can avoid repeating themselves. Must not touch the page.
        """

    def read(self) -> R:
        """Extract the current response from the page without side effects."""

    def parse(self, response: R, config: Any) -> Sequence[ParseResponse]:
        """
        Turn a response into one entry per part, in part order.

        An entry is a response key, a mapping `{"key": ..., **tags}` whose tags are
        substituted into the matched message (`"Check the {{ord}} blank"`), or None
        for a part that has not been answered.
        """
