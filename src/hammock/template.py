from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from jinja2 import ChainableUndefined, TemplateError, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment
from loguru import logger

_env: Final = SandboxedEnvironment(
    autoescape=False, keep_trailing_newline=True, undefined=ChainableUndefined
)


def substitute(template: str, vars: Mapping[str, str]) -> str:
    """Fill `{{name}}` placeholders in a feedback message from `vars`.

    Names missing from `vars` render as an empty string, dotted names included.
    A tag that cannot be rendered at all (e.g. `{{first-name}}`) leaves the message
    as written instead of failing the grading.
    """
    try:
        return _env.from_string(template).render(dict(vars))
    except TemplateError as e:
        logger.warning("Could not fill in message {!r}: {}", template, e)
        return template


def check_template(template: str) -> str | None:
    """Return a description of the syntax error in `template`, or None if it compiles."""
    try:
        _env.parse(template)
    except TemplateSyntaxError as e:
        return f"line {e.lineno}: {e.message}"
    return None
