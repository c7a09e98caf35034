"""Production schedule inquiry endpoints, including the legacy report hand-off."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from loguru import logger

from inquiry.api.routes.common import PageParams, SortParams, run_sequenced, stream_export
from inquiry.core.audit import log_audit
from inquiry.core.config import settings
from inquiry.core.deps import get_gateway, get_gateway_user, get_search_session
from inquiry.core.errors import GatewayError, SearchValidationError
from inquiry.core.rate_limit import limiter
from inquiry.schemas.common import ExportFormat, ValidationOut
from inquiry.schemas.production_schedule import (
    ProductionScheduleRow,
    ProductionScheduleSearch,
    ProductionScheduleSearchOut,
    ReportObjectOut,
)
from inquiry.services.export import PRODUCTION_COLUMNS, production_criteria
from inquiry.services.filters import Gateway
from inquiry.services.report_params import (
    build_user_criteria,
    generate_report_object,
    validate_search_criteria,
)
from inquiry.services.search import search_production_schedule
from inquiry.services.shaping import shape_results

router = APIRouter(prefix="/production-schedule", tags=["production-schedule"])

SEARCH_FAILED = "Production Schedule search failed. Please try again."


async def _search(client: Gateway, criteria: ProductionScheduleSearch, user: str) -> list[ProductionScheduleRow]:
    try:
        return await search_production_schedule(client, criteria, user=user)
    except GatewayError as exc:
        logger.bind(gateway_url=exc.url, error=str(exc)).error("production_schedule_search_failed")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=SEARCH_FAILED) from exc


@router.post("/validate", response_model=ValidationOut)
async def validate(criteria: ProductionScheduleSearch) -> ValidationOut:
    errors = validate_search_criteria(criteria)
    return ValidationOut(is_valid=not errors, errors=errors)


@router.post("/search", response_model=ProductionScheduleSearchOut)
async def search(
    criteria: ProductionScheduleSearch,
    request: Request,
    paging: PageParams = Depends(),
    client: Gateway = Depends(get_gateway),
    session_key: str | None = Depends(get_search_session),
    user: str = Depends(get_gateway_user),
) -> ProductionScheduleSearchOut:
    rows, ticket = await run_sequenced(session_key, lambda: _search(client, criteria, user))
    shaped = shape_results(
        rows, paging.sort_by, paging.descending, paging.page, paging.page_size
    )
    log_audit(request, "production_schedule", "SEARCH", {"rows": shaped["total"]})
    return ProductionScheduleSearchOut(
        sequence=ticket, criteria=build_user_criteria(criteria), **shaped
    )


@router.post("/report", response_model=ReportObjectOut)
async def report(criteria: ProductionScheduleSearch, request: Request) -> ReportObjectOut:
    """Report configuration for the legacy report creator; nothing is rendered here."""

    errors = validate_search_criteria(criteria)
    if errors:
        raise SearchValidationError(errors)
    report_object = generate_report_object(criteria)
    log_audit(request, "production_schedule", "REPORT", {"prms": report_object.prms})
    return report_object


@router.post("/export")
@limiter.limit(settings.EXPORT_RATE)
async def export(
    criteria: ProductionScheduleSearch,
    request: Request,
    format: ExportFormat = Query("xlsx"),
    sort: SortParams = Depends(),
    client: Gateway = Depends(get_gateway),
    user: str = Depends(get_gateway_user),
):
    rows = sort.apply(await _search(client, criteria, user))
    log_audit(request, "production_schedule", "EXPORT", {"rows": len(rows), "format": format})
    return await stream_export(
        "production-schedule", format, PRODUCTION_COLUMNS, rows, production_criteria(criteria)
    )
