"""POs paid inquiry endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from loguru import logger

from inquiry.api.routes.common import PageParams, SortParams, run_sequenced, stream_export
from inquiry.core.audit import log_audit
from inquiry.core.config import settings
from inquiry.core.deps import get_gateway, get_gateway_user, get_search_session
from inquiry.core.errors import GatewayError
from inquiry.core.rate_limit import limiter
from inquiry.schemas.common import ExportFormat
from inquiry.schemas.pos_paid import (
    DATE_FIELD_OPTIONS,
    DateFieldOption,
    POsPaidRow,
    POsPaidSearch,
    POsPaidSearchOut,
)
from inquiry.services.export import POS_PAID_COLUMNS, pos_paid_criteria
from inquiry.services.filters import Gateway
from inquiry.services.search import search_pos_paid
from inquiry.services.shaping import shape_results

router = APIRouter(prefix="/pos-paid", tags=["pos-paid"])

SEARCH_FAILED = "Failed to search POs Paid data"


async def _search(client: Gateway, criteria: POsPaidSearch, user: str) -> list[POsPaidRow]:
    try:
        return await search_pos_paid(client, criteria, user=user)
    except GatewayError as exc:
        logger.bind(gateway_url=exc.url, error=str(exc)).error("pos_paid_search_failed")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=SEARCH_FAILED) from exc


@router.get("/date-fields", response_model=List[DateFieldOption])
async def date_fields() -> List[DateFieldOption]:
    return [
        DateFieldOption(value=str(code), label=label, field_id=code)
        for code, label in DATE_FIELD_OPTIONS
    ]


@router.post("/search", response_model=POsPaidSearchOut)
async def search(
    criteria: POsPaidSearch,
    request: Request,
    paging: PageParams = Depends(),
    client: Gateway = Depends(get_gateway),
    session_key: str | None = Depends(get_search_session),
    user: str = Depends(get_gateway_user),
) -> POsPaidSearchOut:
    rows, ticket = await run_sequenced(session_key, lambda: _search(client, criteria, user))
    shaped = shape_results(
        rows, paging.sort_by, paging.descending, paging.page, paging.page_size
    )
    log_audit(request, "pos_paid", "SEARCH", {"rows": shaped["total"]})
    return POsPaidSearchOut(sequence=ticket, **shaped)


@router.post("/export")
@limiter.limit(settings.EXPORT_RATE)
async def export(
    criteria: POsPaidSearch,
    request: Request,
    format: ExportFormat = Query("xlsx"),
    sort: SortParams = Depends(),
    client: Gateway = Depends(get_gateway),
    user: str = Depends(get_gateway_user),
):
    rows = sort.apply(await _search(client, criteria, user))
    log_audit(request, "pos_paid", "EXPORT", {"rows": len(rows), "format": format})
    return await stream_export("pos-paid", format, POS_PAID_COLUMNS, rows, pos_paid_criteria(criteria))
