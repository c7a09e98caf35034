"""Audit logging utilities."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import Request
from loguru import logger

from inquiry.core.logging import user_code_ctx_var


def log_audit(
    request: Request,
    entity: str,
    action: str,
    details: Optional[dict[str, Any]] = None,
) -> None:
    """Emit one audit record for an inquiry screen action (SEARCH, EXPORT, REPORT)."""

    logger.bind(
        audit=True,
        user_code=user_code_ctx_var.get(),
        entity=entity,
        action=action,
        details=details or {},
        remote_addr=(request.client.host if request.client else None),
    ).info("audit")
