from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """
    Configures loguru for the hammock library.

    This function enables "hammock" logs and sets up a standard format
    that includes the bound `attempt_id` of the runner emitting the record.
    """
    logger.remove()
    logger.configure(extra={"attempt_id": "-"})

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "attempt <cyan>{extra[attempt_id]}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(sys.stderr, format=fmt, level=level)
    logger.enable("hammock")
