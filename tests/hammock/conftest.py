from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any, override

import pytest
from attrs import define, field

from hammock.activity import QuestionView
from hammock.grading import ParseResponse
from hammock.host import JSON_MIME_TYPE, ActionRecord, Host, RecordRef
from hammock.spec import QuestionModel, validate_question


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@define
class MemoryHost(Host):
    """In-memory host that records every round trip in order."""

    attempt: str | int = 1
    records: dict[tuple[int, str], str] = field(factory=dict)
    calls: list[tuple[Any, ...]] = field(factory=list)
    actions: list[ActionRecord] = field(factory=list)
    next_attempt: str | int | None = None
    fail_actions: bool = False
    fail_loads: bool = False
    fail_start: bool = False
    fail_writes: set[tuple[str, int]] = field(factory=set)

    @property
    @override
    def current_attempt(self) -> str | int:
        return self.attempt

    @override
    def session_records(self) -> Iterable[RecordRef]:
        return [RecordRef(attempt=str(a), name=n) for a, n in self.records]

    @override
    async def write_file_record(
        self,
        name: str,
        attempt: int,
        content: str,
        *,
        mime_type: str = JSON_MIME_TYPE,
    ) -> None:
        self.calls.append(("write", name, attempt))
        if (name, attempt) in self.fail_writes:
            raise ConnectionError(f"could not store {name!r}")
        self.records[(attempt, name)] = content

    @override
    async def load_file_record(self, name: str, attempt: int) -> object:
        self.calls.append(("load", name, attempt))
        if self.fail_loads:
            raise ConnectionError("storage offline")
        return self.records[(attempt, name)]

    @override
    async def score_attempt(self, kind: str, value: int) -> None:
        self.calls.append(("score", kind, value))

    @override
    async def end_attempt(self) -> None:
        self.calls.append(("end",))

    @override
    async def start_attempt(self) -> str | int:
        self.calls.append(("start",))
        if self.fail_start:
            raise ConnectionError("host did not open a new attempt")
        if self.next_attempt is not None:
            return self.next_attempt
        self.attempt = int(self.attempt) + 1
        return str(self.attempt)

    @override
    async def log_action(self, record: ActionRecord) -> None:
        self.calls.append(("log", record.step))
        if self.fail_actions:
            raise ConnectionError("telemetry endpoint unreachable")
        self.actions.append(record)

    def store(self, attempt: int, name: str, value: object) -> None:
        self.records[(attempt, name)] = json.dumps(value)

    def load(self, attempt: int, name: str) -> Any:
        return json.loads(self.records[(attempt, name)])

    def kinds(self) -> list[Any]:
        return [call[0] for call in self.calls if call[0] != "log"]


@define
class FakeActivity:
    """Activity whose page holds `current` and whose parser answers `keys`."""

    keys: Sequence[ParseResponse]
    current: Any = None
    inits: list[tuple[Any, Any]] = field(factory=list)
    renders: list[QuestionView[Any]] = field(factory=list)

    def render(self, view: QuestionView[Any]) -> None:
        self.renders.append(view)

    def init(self, previous: Any, config: Any) -> Any:
        self.inits.append((previous, config))
        return {"seed": len(self.inits)}

    def read(self) -> Any:
        return self.current

    def parse(self, response: Any, config: Any) -> Sequence[ParseResponse]:
        return self.keys


@pytest.fixture
def question() -> QuestionModel:
    return validate_question(
        {
            "prompt": "Fill in the blanks",
            "hints": ["Think about units"],
            "config": {"blanks": 2},
            "parts": [
                {
                    "score": 5,
                    "hints": ["First blank"],
                    "match": {"a": [True, "Good"], "half": [2, "Partly"]},
                },
                {"score": 5, "match": {"b": [True, "Nice, {{who}}"]}},
            ],
            "match": {"other": "Check the {{ord}} blank again"},
        }
    )


@pytest.fixture
def host() -> MemoryHost:
    return MemoryHost()


@pytest.fixture
def make_host() -> type[MemoryHost]:
    return MemoryHost


@pytest.fixture
def make_activity() -> type[FakeActivity]:
    return FakeActivity
