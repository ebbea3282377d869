from __future__ import annotations

import xml.etree.ElementTree as ET

from .exceptions import ConfigurationError
from .schema import RecordRef

type XmlPayload = str | bytes | ET.Element


def _element(payload: XmlPayload) -> ET.Element:
    if isinstance(payload, ET.Element):
        return payload
    try:
        return ET.fromstring(payload)
    except ET.ParseError as e:
        raise ConfigurationError(f"host sent malformed XML: {e}") from e


def parse_session_data(payload: XmlPayload) -> list[RecordRef]:
    """
    List the records in the host's session data.

    Expects `<storage><file_directory><file_record file_name="...">` entries, each with a
    `<record_context attempt="..."/>` child. Records without a name or attempt are left out.
    """
    refs: list[RecordRef] = []
    for record in _element(payload).iter("file_record"):
        name = record.get("file_name")
        context = record.find("record_context")
        attempt = context.get("attempt") if context is not None else None
        if name and attempt is not None:
            refs.append(RecordRef(attempt=attempt, name=name))
    return refs


def parse_start_attempt(payload: XmlPayload) -> str:
    """Extract `attempt_history/@current_attempt` from a start-attempt response."""
    root = _element(payload)
    history = root if root.tag == "attempt_history" else root.find(".//attempt_history")
    attempt = history.get("current_attempt") if history is not None else None
    if attempt is None:
        raise ConfigurationError(
            "start-attempt response has no attempt_history/@current_attempt"
        )
    return attempt
