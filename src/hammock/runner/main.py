from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from typing import Any, Final

import anyio
import loguru
import pydantic
from attrs import define, evolve, field
from loguru import logger
from pydantic import TypeAdapter

from hammock.activity import Activity, PartView, QuestionView
from hammock.grading import FeedbackResult, ScoreSummary, grade, score
from hammock.host import (
    FEEDBACK_RECORD,
    JSON_MIME_TYPE,
    RESET_RECORD,
    STATE_RECORD,
    ActionRecord,
    Host,
    HostProtocolAnomaly,
    RecordIndex,
    parse_attempt_id,
)
from hammock.spec import QuestionModel

from .exceptions import RunnerError, RunnerStateError
from .model import AttemptState, RunnerState

_response_adapter: Final = TypeAdapter(Any)
_feedback_adapter: Final = TypeAdapter(list[FeedbackResult | None])


def _encode(adapter: TypeAdapter[Any], value: object) -> str:
    return adapter.dump_json(value).decode()


def _decode[T](adapter: TypeAdapter[T], content: object, name: str) -> T:
    try:
        if isinstance(content, str | bytes):
            return adapter.validate_json(content)
        return adapter.validate_python(content)
    except pydantic.ValidationError as e:
        raise HostProtocolAnomaly(f"record {name!r} could not be decoded: {e}") from e


@define
class AttemptRunner[R]:
    """
    Runs one question across attempts for one student.

    The runner owns the `AttemptState` and is the only one to replace it. Operations
    (`recover`, `render`, `submit`, `reset`) form a single pipeline: each waits for the
    one issued before it to settle, so reads and writes of the state never interleave.
    The first operation also recovers the state saved by earlier visits.
    """

    question: QuestionModel
    activity: Activity[R]
    host: Host

    log_actions: bool = True
    """Whether to send a telemetry record to the host for every graded part."""

    mime_type: str = JSON_MIME_TYPE

    _attempt_id: int = field(init=False)
    _index: RecordIndex = field(init=False)
    _logger: loguru.Logger = field(init=False)

    _state: AttemptState[R] | None = field(init=False, default=None)
    _status: RunnerState = field(init=False, default=RunnerState.UNINITIALIZED)
    _pending: anyio.Event | None = field(init=False, default=None)
    _failure: BaseException | None = field(init=False, default=None)

    def __attrs_post_init__(self) -> None:
        # fails before any state exists if the host reports garbage
        self._attempt_id = parse_attempt_id(self.host.current_attempt)
        self._index = RecordIndex.from_refs(self.host.session_records())
        self._logger = logger.bind(attempt_id=self._attempt_id)

    @property
    def status(self) -> RunnerState:
        return self._status

    @property
    def attempt_id(self) -> int:
        return self._attempt_id

    @property
    def state(self) -> AttemptState[R]:
        if self._state is None:
            raise RunnerStateError("attempt state has not been recovered yet")
        return self._state

    async def recover(self) -> AttemptState[R]:
        """Wait until the saved state has been recovered and return it."""
        return await self._serialized(self._current_state)

    async def render(self) -> QuestionView[R]:
        """Hand a fresh read-only view of the question to the activity."""
        return await self._serialized(self._render)

    async def submit(self) -> ScoreSummary:
        """
        Grade the activity's current response and persist the result.

        A full score completes the attempt and moves the host to a new one; the
        question then only accepts `reset()`.

        Raises:
            RunnerStateError: If the last submission already completed the attempt.
        """
        return await self._serialized(self._submit)

    async def reset(self) -> AttemptState[R]:
        """Discard the feedback, generate a new response and move to a new attempt."""
        return await self._serialized(self._reset)

    async def _serialized[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        previous = self._pending
        turn = anyio.Event()
        self._pending = turn
        try:
            if previous is not None:
                await previous.wait()
            if self._status is RunnerState.UNINITIALIZED:
                await self._recover()
            if self._status is RunnerState.FAILED:
                raise RunnerError(
                    "recovering the saved attempt failed"
                ) from self._failure
            return await operation()
        finally:
            turn.set()

    async def _current_state(self) -> AttemptState[R]:
        return self.state

    # Recovery

    async def _recover(self) -> None:
        self._status = RunnerState.LOADING
        try:
            self._state = await self._load_saved_state()
        except BaseException as e:
            self._status = RunnerState.FAILED
            self._failure = e
            raise
        self._status = RunnerState.READY

    async def _load_saved_state(self) -> AttemptState[R]:
        attempt = self._attempt_id
        index = self._index

        if index.has(attempt, RESET_RECORD):
            self._logger.info("Attempt {} was reset before restarting", attempt)
            return self._fresh_state()

        if not index.has(attempt, STATE_RECORD):
            if current := index.names(attempt):
                self._logger.warning(
                    "Attempt {} has records {} but no saved state, starting fresh",
                    attempt,
                    sorted(current),
                )
            else:
                self._logger.debug("No saved state for attempt {}", attempt)
            return self._fresh_state()

        if index.has(attempt, FEEDBACK_RECORD):
            feedback_attempt: int | None = attempt
        elif index.has(attempt - 1, RESET_RECORD):
            feedback_attempt = None
        elif index.has(attempt - 1, FEEDBACK_RECORD):
            feedback_attempt = attempt - 1
        else:
            self._logger.warning(
                "Attempt {} has saved state but no feedback or reset, starting fresh",
                attempt,
            )
            return self._fresh_state()

        loaded: dict[str, object] = {}

        async def load(name: str, at: int) -> None:
            loaded[name] = await self.host.load_file_record(name, at)

        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(load, STATE_RECORD, attempt)
                if feedback_attempt is not None:
                    tg.start_soon(load, FEEDBACK_RECORD, feedback_attempt)
        except ExceptionGroup as group:
            # callers get the host's own error, not the task group wrapper
            raise group.exceptions[0]

        try:
            response = _decode(_response_adapter, loaded[STATE_RECORD], STATE_RECORD)
            feedback = self._blank_feedback()
            if feedback_attempt is not None:
                feedback = self._decode_feedback(loaded[FEEDBACK_RECORD])
        except HostProtocolAnomaly as e:
            self._logger.warning("{}, starting fresh", e)
            return self._fresh_state()

        self._logger.info(
            "Recovered attempt {} (feedback from attempt {})", attempt, feedback_attempt
        )
        return AttemptState(response=response, feedback=feedback, attempt_id=attempt)

    def _decode_feedback(self, content: object) -> tuple[FeedbackResult | None, ...]:
        feedback = _decode(_feedback_adapter, content, FEEDBACK_RECORD)
        if len(feedback) != len(self.question.parts):
            raise HostProtocolAnomaly(
                f"record {FEEDBACK_RECORD!r} has {len(feedback)} entries "
                f"for {len(self.question.parts)} parts"
            )
        return tuple(feedback)

    def _fresh_state(self) -> AttemptState[R]:
        return AttemptState(
            response=self.activity.init(None, self._config()),
            feedback=self._blank_feedback(),
            attempt_id=self._attempt_id,
        )

    def _blank_feedback(self) -> tuple[None, ...]:
        return tuple(None for _ in self.question.parts)

    def _config(self) -> Any:
        return copy.deepcopy(self.question.config)

    # Render

    async def _render(self) -> QuestionView[R]:
        state = self.state
        question = self.question
        view = QuestionView(
            state=state.response,
            parts=[
                PartView(
                    prompt=part.prompt,
                    hints=list(part.hints) if part.hints is not None else None,
                    config=copy.deepcopy(part.config),
                    feedback=state.feedback[i],
                )
                for i, part in enumerate(question.parts)
            ],
            prompt=question.prompt,
            hints=list(question.hints) if question.hints is not None else None,
            config=self._config(),
            completed=state.completed,
        )
        self.activity.render(view)
        return view

    # Submit

    async def _submit(self) -> ScoreSummary:
        if self._status is RunnerState.COMPLETED:
            raise RunnerStateError("attempt is complete, reset it to submit again")

        self._status = RunnerState.SUBMITTING
        try:
            summary = await self._grade_and_persist()
        except BaseException:
            # a failed restart can leave the graded submission committed
            completed = self._state is not None and self._state.completed
            self._status = RunnerState.COMPLETED if completed else RunnerState.READY
            raise

        self._status = RunnerState.COMPLETED if summary.complete else RunnerState.READY
        return summary

    async def _grade_and_persist(self) -> ScoreSummary:
        response = self.activity.read()
        feedback = grade(self.question, self.activity.parse(response, self._config()))
        summary = score(self.question, feedback)
        attempt = self._attempt_id

        self._logger.info(
            "Submission scored {}/{} ({}%)",
            summary.points_earned,
            summary.points_available,
            summary.percentage,
        )

        if self.log_actions:
            await self._send_actions(feedback)

        await self._write(STATE_RECORD, attempt, _encode(_response_adapter, response))
        await self._write(
            FEEDBACK_RECORD, attempt, _encode(_feedback_adapter, list(feedback))
        )
        await self.host.score_attempt("percent", summary.percentage)

        self._state = AttemptState(
            response=response,
            feedback=feedback,
            attempt_id=attempt,
            completed=summary.complete,
        )

        if summary.complete:
            new_attempt = await self._restart()
            self._state = evolve(self._state, attempt_id=new_attempt)

        return summary

    async def _send_actions(self, feedback: tuple[FeedbackResult | None, ...]) -> None:
        async with anyio.create_task_group() as tg:
            for i, fb in enumerate(feedback):
                if fb is None:
                    continue
                record = ActionRecord(
                    step=f"part{i + 1}", correct=fb.correct, key=fb.key
                )
                tg.start_soon(self._send_action, record)

    async def _send_action(self, record: ActionRecord) -> None:
        try:
            await self.host.log_action(record)
        except Exception as e:
            # telemetry is best-effort
            self._logger.warning("Could not log action for {}: {}", record.step, e)

    # Reset

    async def _reset(self) -> AttemptState[R]:
        resumed = self._status
        self._status = RunnerState.RESETTING
        try:
            previous = self.state
            response = self.activity.init(previous.response, self._config())
            await self._write(
                RESET_RECORD, previous.attempt_id, _encode(_response_adapter, response)
            )
            new_attempt = await self._restart()
        except BaseException:
            self._status = resumed
            raise

        # the host is on the new attempt now, even if the write below fails
        state = AttemptState(
            response=response,
            feedback=self._blank_feedback(),
            attempt_id=new_attempt,
        )
        self._state = state
        self._status = RunnerState.READY

        await self._write(
            STATE_RECORD, new_attempt, _encode(_response_adapter, response)
        )
        return state

    # Host round trips

    async def _write(self, name: str, attempt: int, content: str) -> None:
        await self.host.write_file_record(
            name, attempt, content, mime_type=self.mime_type
        )

    async def _restart(self) -> int:
        await self.host.end_attempt()
        reported = await self.host.start_attempt()
        new_attempt = parse_attempt_id(reported, source="start_attempt")

        self._logger.info(
            "Attempt {} ended, attempt {} started", self._attempt_id, new_attempt
        )
        self._attempt_id = new_attempt
        self._logger = logger.bind(attempt_id=new_attempt)
        return new_attempt
