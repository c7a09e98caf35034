"""Domestic PO item inquiry endpoints."""

from fastapi import APIRouter, Depends, Query, Request

from inquiry.api.routes.common import PageParams, SortParams, run_sequenced, stream_export
from inquiry.core.audit import log_audit
from inquiry.core.config import settings
from inquiry.core.deps import get_gateway, get_gateway_user, get_search_session
from inquiry.core.rate_limit import limiter
from inquiry.schemas.common import ExportFormat
from inquiry.schemas.po_items import POItemSearch, POItemSearchOut
from inquiry.services.export import PO_ITEM_COLUMNS, po_item_criteria
from inquiry.services.filters import Gateway
from inquiry.services.search import search_po_items
from inquiry.services.shaping import shape_results

router = APIRouter(prefix="/po-items", tags=["po-items"])


@router.post("/search", response_model=POItemSearchOut)
async def search(
    criteria: POItemSearch,
    request: Request,
    paging: PageParams = Depends(),
    client: Gateway = Depends(get_gateway),
    session_key: str | None = Depends(get_search_session),
    user: str = Depends(get_gateway_user),
) -> POItemSearchOut:
    rows, ticket = await run_sequenced(
        session_key, lambda: search_po_items(client, criteria, user_id=user)
    )
    shaped = shape_results(
        rows, paging.sort_by, paging.descending, paging.page, paging.page_size
    )
    log_audit(request, "po_items", "SEARCH", {"rows": shaped["total"]})
    return POItemSearchOut(sequence=ticket, **shaped)


@router.post("/export")
@limiter.limit(settings.EXPORT_RATE)
async def export(
    criteria: POItemSearch,
    request: Request,
    format: ExportFormat = Query("xlsx"),
    sort: SortParams = Depends(),
    client: Gateway = Depends(get_gateway),
    user: str = Depends(get_gateway_user),
):
    """Export every matching row, not just the page on screen."""

    rows = sort.apply(await search_po_items(client, criteria, user_id=user))
    log_audit(request, "po_items", "EXPORT", {"rows": len(rows), "format": format})
    return await stream_export("po-items", format, PO_ITEM_COLUMNS, rows, po_item_criteria(criteria))
