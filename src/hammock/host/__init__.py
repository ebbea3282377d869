from __future__ import annotations

from .abc import Host
from .callback import CallbackHost, SuperActivity
from .exceptions import ConfigurationError, HostError, HostProtocolAnomaly
from .records import RecordIndex, parse_attempt_id
from .schema import (
    FEEDBACK_RECORD,
    JSON_MIME_TYPE,
    RESET_RECORD,
    STATE_RECORD,
    ActionRecord,
    RecordRef,
)
from .session import parse_session_data, parse_start_attempt

__all__ = [
    "FEEDBACK_RECORD",
    "JSON_MIME_TYPE",
    "RESET_RECORD",
    "STATE_RECORD",
    "ActionRecord",
    "CallbackHost",
    "ConfigurationError",
    "Host",
    "HostError",
    "HostProtocolAnomaly",
    "RecordIndex",
    "RecordRef",
    "SuperActivity",
    "parse_attempt_id",
    "parse_session_data",
    "parse_start_attempt",
]
