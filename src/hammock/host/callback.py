from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, final, override

import anyio
from attrs import define, field

from .abc import Host
from .schema import JSON_MIME_TYPE, ActionRecord, RecordRef
from .session import XmlPayload, parse_session_data, parse_start_attempt

type Callback = Callable[..., None]


class SuperActivity(Protocol):
    """The callback-style host API exposed to embedded activities."""

    currentAttempt: str | int
    sessionData: XmlPayload

    def writeFileRecord(
        self, name: str, mime_type: str, attempt: str | int, content: str, cb: Callback
    ) -> None: ...

    def loadFileRecord(self, name: str, attempt: str | int, cb: Callback) -> None: ...

    def scoreAttempt(self, kind: str, value: int, cb: Callback) -> None: ...

    def endAttempt(self, cb: Callback) -> None: ...

    def startAttempt(self, cb: Callback) -> None: ...

    def logAction(self, record: dict[str, Any], cb: Callback) -> None: ...


@define
class _Reply:
    done: anyio.Event = field(factory=anyio.Event)
    value: Any = None

    def __call__(self, *args: Any) -> None:
        if args:
            self.value = args[0]
        self.done.set()


@final
@define
class CallbackHost(Host):
    """Adapts a callback-style `SuperActivity` to the async `Host` interface."""

    superactivity: SuperActivity

    async def _call(self, method: Callable[..., None], *args: Any) -> Any:
        reply = _Reply()
        method(*args, reply)
        await reply.done.wait()
        return reply.value

    @property
    @override
    def current_attempt(self) -> str | int:
        return self.superactivity.currentAttempt

    @override
    def session_records(self) -> Iterable[RecordRef]:
        return parse_session_data(self.superactivity.sessionData)

    @override
    async def write_file_record(
        self,
        name: str,
        attempt: int,
        content: str,
        *,
        mime_type: str = JSON_MIME_TYPE,
    ) -> None:
        await self._call(
            self.superactivity.writeFileRecord, name, mime_type, attempt, content
        )

    @override
    async def load_file_record(self, name: str, attempt: int) -> object:
        return await self._call(self.superactivity.loadFileRecord, name, attempt)

    @override
    async def score_attempt(self, kind: str, value: int) -> None:
        await self._call(self.superactivity.scoreAttempt, kind, value)

    @override
    async def end_attempt(self) -> None:
        await self._call(self.superactivity.endAttempt)

    @override
    async def start_attempt(self) -> str | int:
        response = await self._call(self.superactivity.startAttempt)
        if isinstance(response, int):
            return response
        return parse_start_attempt(response)

    @override
    async def log_action(self, record: ActionRecord) -> None:
        await self._call(self.superactivity.logAction, record.model_dump(mode="json"))
