"""Concurrency helpers for controlling background thread usage."""

from __future__ import annotations

from typing import Any, Callable

import anyio

from inquiry.core.config import settings

_export_sem = anyio.Semaphore(settings.EXPORT_MAX_CONCURRENCY)


async def run_in_thread_limited(func: Callable[..., Any], *args: Any):
    """Run a sync callable in a worker thread with bounded concurrency."""

    async with _export_sem:
        return await anyio.to_thread.run_sync(func, *args)
