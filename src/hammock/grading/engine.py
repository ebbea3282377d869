from __future__ import annotations

from collections.abc import Mapping, Sequence

from loguru import logger

from hammock.spec import QuestionModel
from hammock.template import substitute

from .exceptions import GradingError
from .model import FeedbackResult, FeedbackStatus, ScoreSummary
from .schema import Feedback, ParseResponse


def resolve(
    question: QuestionModel, part_index: int, response: ParseResponse
) -> FeedbackResult | None:
    """
    Resolve one parsed response against the match tables.

    The part's own table is consulted first, then the question-wide table. A key found in
    neither yields a `NOT_FOUND` result worth no points rather than an error.

    Returns:
        None if the part has not been answered yet.

    Raises:
        GradingError: If `response` is not a key, a tagged mapping or None.
    """
    if response is None:
        return None

    key, tags = _unpack(response, part_index)
    part = question.parts[part_index]

    matched = part.match.get(key)
    if matched is None:
        matched = question.match.get(key)
    if matched is None:
        logger.debug("No match for key {!r} in part {}", key, part_index)
        return FeedbackResult(
            key=key, status=FeedbackStatus.NOT_FOUND, score=0, message=key
        )

    status = (
        FeedbackStatus.CORRECT
        if matched.score >= part.score
        else FeedbackStatus.INCORRECT
    )
    return FeedbackResult(
        key=key,
        status=status,
        score=matched.score,
        message=substitute(matched.message, tags),
    )


def grade(
    question: QuestionModel, responses: Sequence[ParseResponse]
) -> tuple[FeedbackResult | None, ...]:
    """Resolve one parsed response per part."""
    if len(responses) != len(question.parts):
        raise GradingError(
            f"expected {len(question.parts)} parsed responses, got {len(responses)}"
        )
    return tuple(resolve(question, i, response) for i, response in enumerate(responses))


def score(question: QuestionModel, feedback: Feedback) -> ScoreSummary:
    """Sum earned points over graded parts against the total of the part scores."""
    earned = sum(fb.score for fb in feedback if fb is not None)
    return ScoreSummary(points_earned=earned, points_available=question.points_available)


def _unpack(response: ParseResponse, part_index: int) -> tuple[str, dict[str, str]]:
    match response:
        case str(key):
            return key, {"key": key}
        case Mapping() if isinstance(response.get("key"), str):
            tags = {str(name): str(value) for name, value in response.items()}
            return tags["key"], tags
        case _:
            raise GradingError(
                f"part {part_index}: parsed response must be a key, a mapping with a "
                f"string 'key', or None, got {response!r}"
            )
