"""Per-screen search calls against the gateway."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Type, TypeVar

from loguru import logger
from pydantic import ValidationError

from inquiry.core.config import settings
from inquiry.core.errors import GatewaySearchError, SearchValidationError
from inquiry.schemas.common import GatewayRow
from inquiry.schemas.filters import GatewaySearchEnvelope
from inquiry.schemas.po_items import POItemDomRequest, POItemRow, POItemSearch
from inquiry.schemas.pos_paid import POsPaidRequest, POsPaidRow, POsPaidSearch
from inquiry.schemas.production_schedule import (
    FilterRow,
    ProductionScheduleApiRequest,
    ProductionScheduleRow,
    ProductionScheduleSearch,
)
from inquiry.services import gateway
from inquiry.services.filters import Gateway
from inquiry.services.report_params import validate_search_criteria

EMPTY_SENTINEL = "Empty"

REPORT_BY_CODES = {"daily": 1, "weekly": 2, "monthly": 3}
DEFAULT_REPORT_BY = 2

_DATE_INPUT_FORMATS = ("%m/%d/%Y", "%Y/%m/%d", "%m-%d-%Y")

MALFORMED_RESPONSE = "Malformed search response"

RowT = TypeVar("RowT", bound=GatewayRow)


def _unset_if_empty(value: Optional[str]) -> str:
    if not value or value == EMPTY_SENTINEL:
        return ""
    return value


def parse_date(value: Optional[str]) -> Optional[date]:
    """Lenient date parsing for screen input; ``None`` when blank or unparseable."""

    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def to_us_date(value: Optional[str]) -> str:
    parsed = parse_date(value)
    return parsed.strftime("%m/%d/%Y") if parsed else ""


def _envelope(raw: Any, path: str) -> GatewaySearchEnvelope:
    try:
        if isinstance(raw, list):
            return GatewaySearchEnvelope(data=raw)
        if not isinstance(raw, dict):
            return GatewaySearchEnvelope()
        return GatewaySearchEnvelope.model_validate(raw)
    except ValidationError as exc:
        logger.bind(gateway_url=path, error=str(exc)).warning("search_envelope_malformed")
        raise GatewaySearchError(path, MALFORMED_RESPONSE) from exc


def _rows(model: Type[RowT], envelope: GatewaySearchEnvelope, path: str) -> list[RowT]:
    try:
        return [model.model_validate(record) for record in envelope.records]
    except ValidationError as exc:
        logger.bind(gateway_url=path, error=str(exc)).warning("search_rows_malformed")
        raise GatewaySearchError(path, MALFORMED_RESPONSE) from exc


# PO items -------------------------------------------------------------------


def build_po_item_request(search: POItemSearch, user_id: str | None = None) -> POItemDomRequest:
    return POItemDomRequest(
        vhs_name=settings.VHS_NAME,
        item_number=search.item_number,
        vendor_number=_unset_if_empty(search.vendor_value),
        warehouse=_unset_if_empty(search.warehouse_value),
        status_code=_unset_if_empty(search.status_value),
        buyer_number=_unset_if_empty(search.buyer_value),
        due_date_from=to_us_date(search.due_date_from),
        due_date_to=to_us_date(search.due_date_to),
        user_id=user_id or settings.DEFAULT_USER,
    )


async def search_po_items(
    client: Gateway, search: POItemSearch, user_id: str | None = None
) -> list[POItemRow]:
    request = build_po_item_request(search, user_id)
    path = gateway.po_items_search_path(settings.GATEWAY_ENVIRONMENT)
    raw = await client.post(path, request.model_dump(by_alias=True))
    envelope = _envelope(raw, path)
    if envelope.success is False:
        raise GatewaySearchError(path, envelope.error_message or envelope.message)
    rows = _rows(POItemRow, envelope, path)
    logger.bind(screen="po-items", count=len(rows)).info("search_completed")
    return rows


# Production schedule --------------------------------------------------------


def _row_value(rows: list[FilterRow], field_type: str) -> str:
    for row in rows:
        if row.field_type == field_type and row.is_active:
            return row.filter_value
    return ""


def report_by_code(report_by: str) -> int:
    return REPORT_BY_CODES.get((report_by or "").lower(), DEFAULT_REPORT_BY)


def build_production_request(
    search: ProductionScheduleSearch, user: str | None = None
) -> ProductionScheduleApiRequest:
    rows = search.filter_rows
    orders = search.order_type_filters
    options = search.report_options
    return ProductionScheduleApiRequest(
        item_num=_row_value(rows, "Item"),
        vendor_num=_row_value(rows, "Vendor"),
        warehouse=_row_value(rows, "Warehouse"),
        drp_planner=_row_value(rows, "DRP"),
        forecast_planner=_row_value(rows, "FC"),
        past_weeks=search.time_period.past_weeks,
        forecast_weeks=search.time_period.future_weeks,
        vhs_name=settings.VHS_NAME.lower(),
        user=user or settings.DEFAULT_USER,
        rp_filter=options.rp_filter,
        planned_orders=int(orders.planned_orders),
        firmed_orders=int(orders.firmed_orders),
        shipped_orders=int(orders.shipped_orders),
        report_by=report_by_code(options.report_by),
        exclude_container_direct=0 if options.container_direct_filter else 1,
        production_resource=_row_value(rows, "ProductionResource"),
        item_class=_row_value(rows, "ItemClass"),
    )


async def search_production_schedule(
    client: Gateway, search: ProductionScheduleSearch, user: str | None = None
) -> list[ProductionScheduleRow]:
    """Validate, then search. Invalid criteria never reach the gateway."""

    errors = validate_search_criteria(search)
    if errors:
        raise SearchValidationError(errors)

    request = build_production_request(search, user)
    path = gateway.production_schedule_search_path(settings.GATEWAY_ENVIRONMENT)
    envelope = _envelope(await client.post(path, request.model_dump(by_alias=True)), path)
    if not envelope.success:
        raise GatewaySearchError(path, envelope.error_message)
    rows = _rows(ProductionScheduleRow, envelope, path)
    logger.bind(screen="production-schedule", count=len(rows)).info("search_completed")
    return rows


# POs paid -------------------------------------------------------------------


def build_pos_paid_request(search: POsPaidSearch, user: str | None = None) -> POsPaidRequest:
    return POsPaidRequest(
        item_number=search.item_number,
        warehouse=search.warehouse or "",
        status=search.status or "",
        vendor=search.vendor or "",
        date_field=int(search.date_field),
        date_from=search.date_from or "",
        date_to=search.date_to or "",
        vhs_name=settings.VHS_NAME,
        user=user or settings.REPORT_USER,
    )


async def search_pos_paid(
    client: Gateway, search: POsPaidSearch, user: str | None = None
) -> list[POsPaidRow]:
    request = build_pos_paid_request(search, user)
    path = gateway.pos_paid_search_path(settings.GATEWAY_ENVIRONMENT)
    envelope = _envelope(await client.post(path, request.model_dump(by_alias=True)), path)
    if envelope.success is False:
        raise GatewaySearchError(path, envelope.error_message or envelope.message)
    rows = _rows(POsPaidRow, envelope, path)
    logger.bind(screen="pos-paid", count=len(rows)).info("search_completed")
    return rows
