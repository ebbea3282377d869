from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

from attrs import define, field
from loguru import logger

from .exceptions import ConfigurationError
from .schema import RecordRef

_INTEGER: Final = re.compile(r"[+-]?\d+")


def parse_attempt_id(value: object, *, source: str = "host") -> int:
    """
    Strictly parse an attempt identifier reported by the host.

    The host hands out both `"3"` and `3`; anything that is not a positive integer
    (including `"none"`, `"3abc"` and booleans) is rejected.

    Raises:
        ConfigurationError: If `value` is not a positive integer.
    """
    match value:
        case bool():
            attempt = None
        case int():
            attempt = value
        case str() if _INTEGER.fullmatch(value.strip()):
            attempt = int(value)
        case _:
            attempt = None

    if attempt is None or attempt < 1:
        raise ConfigurationError(
            f"{source} reported attempt {value!r}, expected a positive integer"
        )
    return attempt


@define
class RecordIndex:
    """Which record names exist for which attempt, built from the host's session data."""

    _records: dict[int, set[str]] = field(factory=dict, alias="_records")

    @classmethod
    def from_refs(cls, refs: Iterable[RecordRef]) -> RecordIndex:
        index = cls()
        for ref in refs:
            try:
                attempt = parse_attempt_id(ref.attempt, source="session data")
            except ConfigurationError as e:
                logger.warning("Skipping record {!r}: {}", ref.name, e)
                continue
            index.add(attempt, ref.name)
        return index

    def add(self, attempt: int, name: str) -> None:
        self._records.setdefault(attempt, set()).add(name)

    def has(self, attempt: int, name: str) -> bool:
        return name in self._records.get(attempt, ())

    def names(self, attempt: int) -> frozenset[str]:
        return frozenset(self._records.get(attempt, ()))
