"""Production schedule criteria: validation, summary text and legacy report parameters.

The legacy report creator reads a single pipe-delimited ``prms`` string whose
fields are positional, so :data:`REPORT_PARAMETER_ORDER` must never be reordered.
"""

from __future__ import annotations

from inquiry.core.config import settings
from inquiry.schemas.production_schedule import (
    FilterRow,
    ProductionScheduleSearch,
    ReportObjectOut,
)

REPORT_PARAMETER_ORDER: tuple[str, ...] = (
    "item",
    "vendor",
    "warehouse",
    "drp",
    "fc",
    "pastWeeks",
    "futureWeeks",
    "vhsName",
    "user",
    "groupByWarehouse",
    "rpFilter",
    "plannedOrderFilter",
    "firmedOrderFilter",
    "shippedOrderFilter",
    "page",
    "reportBy",
    "containerDirectFilter",
    "prodResource",
    "itemClass",
)

REPORT_PAGE = "ProductionSched.asp"
REPORT_STYLE_SHEET = "ProductionSched.xml"

# Filter row field type -> positional slot in the report parameters
_ROW_SLOTS = {
    "Item": "item",
    "Vendor": "vendor",
    "Warehouse": "warehouse",
    "DRP": "drp",
    "FC": "fc",
    "ProductionResource": "prodResource",
    "ItemClass": "itemClass",
}

MAX_WEEKS = 52


def validate_search_criteria(search: ProductionScheduleSearch) -> list[str]:
    """Every problem with ``search``, in display order. Empty means valid."""

    errors: list[str] = []
    if not any(row.is_active and row.filter_value.strip() for row in search.filter_rows):
        errors.append("At least one filter criteria must be specified")

    orders = search.order_type_filters
    if not (orders.planned_orders or orders.firmed_orders or orders.shipped_orders):
        errors.append("At least one order type must be selected")

    if not 0 <= search.time_period.past_weeks <= MAX_WEEKS:
        errors.append(f"Past weeks must be between 0 and {MAX_WEEKS}")
    if not 0 <= search.time_period.future_weeks <= MAX_WEEKS:
        errors.append(f"Future weeks must be between 0 and {MAX_WEEKS}")
    return errors


def _describe_row(index: int, row: FilterRow) -> str:
    prefix = f" {row.logical_operator} " if index > 0 and row.logical_operator else ""
    return f'{prefix}{row.field_type} {row.comparison_operator} "{row.filter_value}"'


def build_user_criteria(search: ProductionScheduleSearch) -> str:
    parts: list[str] = []

    rows = "".join(_describe_row(i, row) for i, row in enumerate(search.filter_rows))
    if rows:
        parts.append(rows)

    orders = search.order_type_filters
    selected = [
        label
        for label, flag in (
            ("Planned", orders.planned_orders),
            ("Firmed", orders.firmed_orders),
            ("Shipped", orders.shipped_orders),
        )
        if flag
    ]
    if selected:
        parts.append(f"Order Types: {', '.join(selected)}")

    parts.append(f"Past Weeks: {search.time_period.past_weeks}")
    parts.append(f"Future Weeks: {search.time_period.future_weeks}")
    parts.append(f"Report By: {search.report_options.report_by}")
    if search.report_options.container_direct_filter:
        parts.append("Container Direct Filter")
    return ", ".join(parts)


def _row_values(search: ProductionScheduleSearch) -> dict[str, str]:
    # Later rows of the same field type win, matching the report creator's reading
    values = {slot: "" for slot in _ROW_SLOTS.values()}
    for row in search.filter_rows:
        slot = _ROW_SLOTS.get(row.field_type)
        if slot:
            values[slot] = row.filter_value
    return values


def _flag(value: bool) -> str:
    return "1" if value else "0"


def build_report_parameters(
    search: ProductionScheduleSearch,
    vhs_name: str | None = None,
    user_name: str | None = None,
) -> str:
    """Encode ``search`` as the report creator's 19-field ``prms`` string."""

    fields = _row_values(search)
    orders = search.order_type_filters
    options = search.report_options
    fields.update(
        {
            "pastWeeks": str(search.time_period.past_weeks),
            "futureWeeks": str(search.time_period.future_weeks),
            "vhsName": vhs_name or settings.REPORT_VHS_NAME,
            "user": user_name or settings.REPORT_USER,
            "groupByWarehouse": "true" if options.group_by_warehouse else "false",
            "rpFilter": "true" if options.rp_filter else "false",
            "plannedOrderFilter": _flag(orders.planned_orders),
            "firmedOrderFilter": _flag(orders.firmed_orders),
            "shippedOrderFilter": _flag(orders.shipped_orders),
            "page": REPORT_PAGE,
            "reportBy": options.report_by,
            "containerDirectFilter": _flag(options.container_direct_filter),
        }
    )
    return "|".join(fields[name] for name in REPORT_PARAMETER_ORDER)


def generate_report_object(
    search: ProductionScheduleSearch,
    environment_code: str | None = None,
    vhs_name: str | None = None,
    user_name: str | None = None,
) -> ReportObjectOut:
    criteria = build_user_criteria(search)
    return ReportObjectOut(
        criteria=criteria.replace("_", "-"),
        environment_code=environment_code or settings.REPORT_ENVIRONMENT_CODE,
        xml_style_sheet=REPORT_STYLE_SHEET,
        prms=build_report_parameters(search, vhs_name, user_name),
        call_mode="",
        report_url=settings.REPORT_CREATOR_URL,
    )
