from __future__ import annotations

from collections.abc import Mapping, Sequence

from .model import FeedbackResult

type ParseResponse = str | Mapping[str, object] | None
"""
One entry of `Activity.parse()` output.

`None` marks an unanswered part. A string is the response key; a mapping carries the key
under `"key"` plus extra tags substituted into the matched message.
"""

type Feedback = Sequence[FeedbackResult | None]
"""Per-part feedback, index-aligned with the question's parts."""
