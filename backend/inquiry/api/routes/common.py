"""Helpers shared by the inquiry screen routers."""

from datetime import datetime
from io import BytesIO
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from anyio import fail_after
from fastapi import HTTPException, Query, status
from fastapi.responses import StreamingResponse
from loguru import logger

from inquiry.core.concurrency import run_in_thread_limited
from inquiry.core.config import settings
from inquiry.schemas.common import ExportFormat
from inquiry.services.export import (
    Criteria,
    ExportColumn,
    build_filename,
    media_type_for,
    render_export,
)
from inquiry.services.sequencing import search_sequencer
from inquiry.services.shaping import sort_records

T = TypeVar("T")


class PageParams:
    """Query parameters controlling sort and paging of a search response."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        sort_by: Optional[str] = Query(None, description="Result column (camelCase) to sort on"),
        descending: bool = Query(False),
    ) -> None:
        self.page = page
        self.page_size = page_size
        self.sort_by = sort_by
        self.descending = descending


class SortParams:
    """On-screen sort carried into an export; exports are never paged."""

    def __init__(
        self,
        sort_by: Optional[str] = Query(None, description="Result column (camelCase) to sort on"),
        descending: bool = Query(False),
    ) -> None:
        self.sort_by = sort_by
        self.descending = descending

    def apply(self, records: Sequence[T]) -> list[T]:
        if not self.sort_by:
            return list(records)
        return sort_records(records, self.sort_by, self.descending)


async def run_sequenced(
    session_key: str | None, search: Callable[[], Awaitable[T]]
) -> tuple[T, int | None]:
    """Run ``search``; if a newer search began in the same session meanwhile, discard it."""

    if session_key is None:
        return await search(), None
    ticket = search_sequencer.begin(session_key)
    result = await search()
    search_sequencer.ensure_current(session_key, ticket)
    return result, ticket


async def stream_export(
    screen: str,
    fmt: ExportFormat,
    columns: Sequence[ExportColumn],
    records: Sequence[Any],
    criteria: Criteria,
) -> StreamingResponse:
    try:
        with fail_after(settings.EXPORT_OP_TIMEOUT_SEC):
            body = await run_in_thread_limited(
                render_export, screen, fmt, columns, records, criteria, datetime.now()
            )
    except TimeoutError as exc:
        logger.bind(screen=screen, format=fmt, rows=len(records)).warning("export_timed_out")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Export timed out. Please retry.",
            headers={"Retry-After": "2"},
        ) from exc

    filename = build_filename(screen, fmt)
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(BytesIO(body), media_type=media_type_for(fmt), headers=headers)
