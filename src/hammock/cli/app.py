from __future__ import annotations

import json
from pathlib import Path

import anyio.to_thread
from cyclopts import App

from hammock.grading import GradingError, grade, score
from hammock.logging import setup_logging
from hammock.spec import QuestionModel, ValidationError, load_questions

app = App(name="hammock", help="Check and try out authored questions.")

UNANSWERED = "-"


async def _load(path: Path) -> tuple[QuestionModel, ...]:
    try:
        return await anyio.to_thread.run_sync(load_questions, path)
    except ValidationError as e:
        raise SystemExit(str(e)) from e


def _select(questions: tuple[QuestionModel, ...], index: int) -> QuestionModel:
    if not 0 <= index < len(questions):
        raise SystemExit(
            f"question index {index} out of range (0-{len(questions) - 1})"
        )
    return questions[index]


@app.command
async def validate(
    path: Path, *, index: int | None = None, log_level: str = "WARNING"
) -> None:
    """
    Validate a question file and print its canonical JSON.

    Args:
        path: JSON file holding one question or an array of questions.
        index: Only print the question at this position.
        log_level: Log level for diagnostics on stderr.
    """
    setup_logging(log_level)
    questions = await _load(path)

    if index is not None:
        print(json.dumps(_select(questions, index).to_spec(), indent=2))
    elif len(questions) == 1:
        print(json.dumps(questions[0].to_spec(), indent=2))
    else:
        print(json.dumps([q.to_spec() for q in questions], indent=2))


@app.command(name="grade")
async def grade_keys(
    path: Path, *keys: str, index: int = 0, log_level: str = "WARNING"
) -> None:
    """
    Grade one response key per part and print the feedback.

    Args:
        path: JSON file holding one question or an array of questions.
        keys: Response keys in part order; use "-" for an unanswered part.
        index: Position of the question to grade.
        log_level: Log level for diagnostics on stderr.
    """
    setup_logging(log_level)
    question = _select(await _load(path), index)

    responses = [None if key == UNANSWERED else key for key in keys]
    try:
        feedback = grade(question, responses)
    except GradingError as e:
        raise SystemExit(str(e)) from e

    for i, fb in enumerate(feedback):
        if fb is None:
            print(f"part{i + 1}: unanswered")
        else:
            max_score = question.parts[i].score
            print(f"part{i + 1}: {fb.status} ({fb.score}/{max_score}) {fb.message}")

    summary = score(question, feedback)
    print(
        f"score: {summary.points_earned}/{summary.points_available} "
        f"({summary.percentage}%)"
    )
