from __future__ import annotations

import pytest

from hammock.grading import (
    FeedbackResult,
    FeedbackStatus,
    GradingError,
    ScoreSummary,
    grade,
    resolve,
    score,
)
from hammock.spec import QuestionModel, validate_question
from hammock.template import substitute


class TestResolve:
    def test_unanswered(self, question: QuestionModel):
        assert resolve(question, 0, None) is None

    def test_full_marks_are_correct(self):
        q = validate_question({"parts": [{"score": 5, "match": {"a": [True, "Good"]}}]})
        fb = resolve(q, 0, "a")
        assert fb == FeedbackResult(
            key="a", status=FeedbackStatus.CORRECT, score=5, message="Good"
        )
        assert fb.correct

    def test_partial_marks_are_incorrect(self, question: QuestionModel):
        fb = resolve(question, 0, "half")
        assert fb is not None
        assert fb.status is FeedbackStatus.INCORRECT
        assert fb.score == 2
        assert not fb.correct

    def test_falls_through_to_question_table(self, question: QuestionModel):
        fb = resolve(question, 1, {"key": "other", "ord": "second"})
        assert fb is not None
        assert fb.status is FeedbackStatus.INCORRECT
        assert fb.score == 0
        assert fb.message == "Check the second blank again"

    def test_part_table_wins_over_question_table(self):
        q = validate_question(
            {
                "parts": [{"score": 2, "match": {"k": [1, "part"]}}],
                "match": {"k": [2, "question"]},
            }
        )
        fb = resolve(q, 0, "k")
        assert fb is not None
        assert (fb.score, fb.message) == (1, "part")

    def test_not_found(self, question: QuestionModel):
        fb = resolve(question, 0, "zzz")
        assert fb == FeedbackResult(
            key="zzz", status=FeedbackStatus.NOT_FOUND, score=0, message="zzz"
        )

    def test_tags_fill_the_message(self, question: QuestionModel):
        fb = resolve(question, 1, {"key": "b", "who": "Ada"})
        assert fb is not None
        assert fb.message == "Nice, Ada"
        assert fb.status is FeedbackStatus.CORRECT

    def test_missing_tags_render_empty(self, question: QuestionModel):
        fb = resolve(question, 1, "b")
        assert fb is not None
        assert fb.message == "Nice, "

    @pytest.mark.parametrize(
        ("message", "expected"),
        [("Hi {{user.name}}", "Hi "), ("Hi {{first-name}}", "Hi {{first-name}}")],
    )
    def test_unrenderable_tags_degrade(self, message, expected):
        q = validate_question({"parts": [{"match": {"a": [True, message]}}]})
        fb = resolve(q, 0, {"key": "a", "first-name": "Ada"})
        assert fb is not None
        assert fb.message == expected
        assert fb.correct

    @pytest.mark.parametrize("response", [{"ord": "first"}, {"key": 3}, 7, ["a"]])
    def test_malformed_response(self, question: QuestionModel, response):
        with pytest.raises(GradingError, match="part 0"):
            resolve(question, 0, response)


class TestGrade:
    def test_one_result_per_part(self, question: QuestionModel):
        results = grade(question, ["a", None])
        assert results[0] is not None and results[0].status is FeedbackStatus.CORRECT
        assert results[1] is None

    def test_length_mismatch(self, question: QuestionModel):
        with pytest.raises(GradingError, match="expected 2"):
            grade(question, ["a"])


class TestScore:
    def test_weighted_percentage(self, question: QuestionModel):
        summary = score(question, grade(question, ["a", "other"]))
        assert summary == ScoreSummary(points_earned=5, points_available=10)
        assert summary.percentage == 50
        assert not summary.complete

    def test_unanswered_parts_earn_nothing(self, question: QuestionModel):
        summary = score(question, grade(question, [None, None]))
        assert summary.percentage == 0

    def test_full_marks(self, question: QuestionModel):
        summary = score(question, grade(question, ["a", "b"]))
        assert summary.percentage == 100
        assert summary.complete

    def test_rounds_down(self):
        assert ScoreSummary(points_earned=2, points_available=3).percentage == 66

    def test_clamped(self):
        assert ScoreSummary(points_earned=12, points_available=10).percentage == 100
        assert ScoreSummary(points_earned=-1, points_available=10).percentage == 0

    def test_nonzero_score_is_not_completion(self, question: QuestionModel):
        summary = score(question, grade(question, ["half", None]))
        assert summary.percentage == 20
        assert not summary.complete


def test_substitute_leaves_plain_text_alone():
    assert substitute("No tags here", {"key": "a"}) == "No tags here"


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("{{user.name}} and {{ user['x'] }}", " and "),
        ("Dear {{first-name}}", "Dear {{first-name}}"),
        ("{{ key | no_such_filter }}", "{{ key | no_such_filter }}"),
    ],
)
def test_substitute_never_raises(template, expected):
    assert substitute(template, {"key": "a"}) == expected

