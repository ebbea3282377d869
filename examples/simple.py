from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import anyio
from attrs import define, field
from loguru import logger

from hammock import AttemptRunner, CallbackHost, QuestionView, validate_question
from hammock.grading import ParseResponse

QUESTION = validate_question(
    {
        "prompt": "What is 6 x 7?",
        "parts": [
            {
                "score": 2,
                "match": {
                    "42": [True, "Correct!"],
                    "43": [1, "Close, off by one."],
                },
            }
        ],
        "match": {"other": "{{answer}} is not right, try again."},
    }
)


@define
class ConsoleActivity:
    """Keeps the 'page' in memory and prints what it renders."""

    typed: str = ""

    def render(self, view: QuestionView[dict[str, str]]) -> None:
        feedback = view.parts[0].feedback
        print(view.prompt, "->", feedback.message if feedback else "(no feedback yet)")

    def init(self, previous: dict[str, str] | None, config: Any) -> dict[str, str]:
        return {"answer": ""}

    def read(self) -> dict[str, str]:
        return {"answer": self.typed}

    def parse(self, response: dict[str, str], config: Any) -> Sequence[ParseResponse]:
        answer = response["answer"]
        if not answer:
            return [None]
        if answer in ("42", "43"):
            return [answer]
        return [{"key": "other", "answer": answer}]


@define
class DictSuperActivity:
    """Stand-in for the browser host, answering every callback immediately."""

    currentAttempt: str = "1"
    sessionData: str = "<session/>"
    files: dict[tuple[str, str], str] = field(factory=dict)

    def writeFileRecord(self, name, mime_type, attempt, content, cb):
        self.files[(name, str(attempt))] = content
        cb()

    def loadFileRecord(self, name, attempt, cb):
        cb(self.files[(name, str(attempt))])

    def scoreAttempt(self, kind, value, cb):
        print(f"host: scored {value}%")
        cb()

    def endAttempt(self, cb):
        cb()

    def startAttempt(self, cb):
        self.currentAttempt = str(int(self.currentAttempt) + 1)
        cb(f'<attempt_history current_attempt="{self.currentAttempt}"/>')

    def logAction(self, record, cb):
        cb()


async def main() -> None:
    activity = ConsoleActivity()
    runner = AttemptRunner(QUESTION, activity, CallbackHost(DictSuperActivity()))
    await runner.render()

    for typed in ("17", "43", "42"):
        activity.typed = typed
        await runner.submit()
        await runner.render()

    await runner.reset()
    await runner.render()


if __name__ == "__main__":
    logger.enable("hammock")
    anyio.run(main)
