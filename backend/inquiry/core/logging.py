"""Structured logging for the inquiry API.

Every record is JSON on stdout and carries the ``request_id`` and ``user_code``
of the request it was emitted under (``-`` outside a request).
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from sys import stdout
from typing import Any

from loguru import logger

request_id_ctx_var: ContextVar[str] = ContextVar("request_id", default="-")
user_code_ctx_var: ContextVar[str] = ContextVar("user_code", default="-")


def _patch_record(record: dict[str, Any]) -> None:
    record["extra"].setdefault("request_id", request_id_ctx_var.get())
    record["extra"].setdefault("user_code", user_code_ctx_var.get())


def setup_logging(level: str = "INFO") -> None:
    """Route Loguru to a JSON stdout sink at ``level`` (e.g. ``DEBUG`` for cache hits)."""

    level = level.upper()
    logging.basicConfig(level=logging.getLevelName(level))
    # httpx logs every request at INFO; the gateway client already does that
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.remove()
    logger.configure(patcher=_patch_record)
    logger.add(
        stdout,
        level=level,
        enqueue=True,
        backtrace=False,
        diagnose=False,
        serialize=True,
    )
