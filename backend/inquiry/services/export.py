"""Spreadsheet and CSV exports of inquiry results."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date, datetime
from io import BytesIO, StringIO
from typing import Any, Iterable, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from inquiry.schemas.po_items import POItemSearch
from inquiry.schemas.pos_paid import DATE_FIELD_OPTIONS, POsPaidSearch
from inquiry.schemas.production_schedule import ProductionScheduleSearch

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"

MAX_COLUMN_WIDTH = 60
MIN_COLUMN_WIDTH = 10

Criteria = list[tuple[str, str]]


@dataclass(frozen=True)
class ExportColumn:
    header: str
    key: str


def _columns(*pairs: tuple[str, str]) -> tuple[ExportColumn, ...]:
    return tuple(ExportColumn(header, key) for header, key in pairs)


PO_ITEM_COLUMNS = _columns(
    ("PO Number", "po_number"),
    ("Item Number", "item_number"),
    ("Item Description", "item_desc"),
    ("Vendor", "vendor"),
    ("Vendor Name", "vname"),
    ("Order Qty", "order_qty"),
    ("Open Qty", "order_qty_open"),
    ("In-Transit Qty", "intransit_qty"),
    ("Due Date", "due"),
    ("Order Date", "order_date"),
    ("Ship Date", "ship_date"),
    ("Expected Delivery", "xpected_delivery"),
    ("Status", "proc_status_desc"),
    ("Warehouse", "whse"),
    ("Buyer", "buyer_num"),
)

PRODUCTION_COLUMNS = _columns(
    ("Order Number", "order_num"),
    ("Item Number", "item_num"),
    ("Item Class", "item_class"),
    ("Item Description", "item_desc"),
    ("Warehouse", "whse"),
    ("Vendor", "vendor_num"),
    ("Vendor Name", "vendor_name"),
    ("Production Resource", "production_resource"),
    ("Week", "wk_num"),
    ("Planned Qty", "p_qty"),
    ("Firmed Qty", "f_qty"),
    ("Shipped Qty", "s_qty"),
    ("Replaceable", "replaceable_flag"),
)

POS_PAID_COLUMNS = _columns(
    ("Vendor", "vendor"),
    ("Vendor #", "vendor_num"),
    ("Whse", "warehouse"),
    ("Buying Entity", "buying_entity"),
    ("PO #", "pom_order_num"),
    ("Date Paid", "pom_date_paid"),
    ("Currency", "currency_code"),
    ("Order Amount", "order_amount"),
    ("Adjustments", "total_adjustments"),
    ("Total Paid", "total_paid"),
    ("PO Status", "po_status"),
    ("ETD", "etd_date"),
    ("ETA", "eta_date"),
    ("On Board", "onboard"),
    ("Payment Terms", "payment_terms"),
    ("Pmt Approved", "pmt_approve_date"),
)

EXPORT_TITLES = {
    "po-items": "PO Item Inquiry",
    "production-schedule": "Production Schedule",
    "pos-paid": "POs Paid Inquiry",
}

FILENAME_PREFIXES = {
    "po-items": "PO_Items_Export",
    "production-schedule": "Production_Schedule_Export",
    "pos-paid": "POs_Paid_Inquiry",
}


def build_filename(screen: str, fmt: str, today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"{FILENAME_PREFIXES[screen]}_{stamp}.{fmt}"


# Criteria summaries ---------------------------------------------------------


def _present(criteria: Criteria, label: str, value: Any) -> None:
    if value not in (None, "", "Empty"):
        criteria.append((label, str(value)))


def po_item_criteria(search: POItemSearch) -> Criteria:
    criteria: Criteria = []
    _present(criteria, "Item Number", search.item_number)
    _present(criteria, "Due Date From", search.due_date_from)
    _present(criteria, "Due Date To", search.due_date_to)
    _present(criteria, "Buyer", search.buyer_value)
    _present(criteria, "Vendor", search.vendor_value)
    _present(criteria, "Status", search.status_value)
    _present(criteria, "Warehouse", search.warehouse_value)
    return criteria


def production_criteria(search: ProductionScheduleSearch) -> Criteria:
    criteria: Criteria = []
    for row in search.filter_rows:
        if row.is_active and row.filter_value.strip():
            criteria.append((row.field_type, f"{row.comparison_operator} {row.filter_value}"))
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
    _present(criteria, "Order Types", ", ".join(selected))
    criteria.append(("Past Weeks", str(search.time_period.past_weeks)))
    criteria.append(("Future Weeks", str(search.time_period.future_weeks)))
    _present(criteria, "Report By", search.report_options.report_by)
    if search.report_options.container_direct_filter:
        criteria.append(("Container Direct Filter", "Yes"))
    return criteria


def pos_paid_criteria(search: POsPaidSearch) -> Criteria:
    criteria: Criteria = []
    _present(criteria, "Item Number", search.item_number)
    _present(criteria, "Warehouse", search.warehouse)
    _present(criteria, "Vendor", search.vendor)
    _present(criteria, "Status", search.status)
    if search.date_field != "-1":
        labels = dict(DATE_FIELD_OPTIONS)
        criteria.append(("Date Field", labels[int(search.date_field)]))
        _present(criteria, "Date From", search.date_from)
        _present(criteria, "Date To", search.date_to)
    return criteria


# Writers --------------------------------------------------------------------


def _cell(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _row_values(record: Any, columns: Sequence[ExportColumn]) -> list[Any]:
    return [_cell(record, column.key) for column in columns]


def _autosize(sheet, max_col: int, first_row: int) -> None:
    for col in range(1, max_col + 1):
        longest = 0
        for (value,) in sheet.iter_rows(min_row=first_row, min_col=col, max_col=col, values_only=True):
            if value is not None:
                longest = max(longest, min(len(str(value)), MAX_COLUMN_WIDTH))
        sheet.column_dimensions[get_column_letter(col)].width = max(longest + 2, MIN_COLUMN_WIDTH)


def build_workbook(
    title: str,
    columns: Sequence[ExportColumn],
    records: Iterable[Any],
    criteria: Criteria,
    generated_at: datetime | None = None,
) -> Workbook:
    """Title, generated stamp and criteria rows above a bold header and the data."""

    generated_at = generated_at or datetime.now()
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title[:31]

    sheet.append([title])
    sheet["A1"].font = Font(bold=True, size=14)
    sheet.append([f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}"])
    for label, value in criteria:
        sheet.append([f"{label}: {value}"])
    sheet.append([])

    sheet.append([column.header for column in columns])
    header_row = sheet.max_row
    for cell in sheet[header_row]:
        cell.font = Font(bold=True)
    sheet.freeze_panes = sheet.cell(row=header_row + 1, column=1)

    for record in records:
        sheet.append(_row_values(record, columns))

    # Title and criteria lines sit in column A; size from the header down
    _autosize(sheet, len(columns), header_row)
    return workbook


def save_workbook(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_csv(
    columns: Sequence[ExportColumn],
    records: Iterable[Any],
    criteria: Criteria,
    generated_at: datetime | None = None,
) -> bytes:
    """RFC 4180 CSV: ``# Label: value`` metadata rows, a blank row, header, data."""

    generated_at = generated_at or datetime.now()
    out = StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow([f"# Generated: {generated_at:%Y-%m-%d %H:%M:%S}"])
    for label, value in criteria:
        writer.writerow([f"# {label}: {value}"])
    writer.writerow([])
    writer.writerow([column.header for column in columns])
    for record in records:
        writer.writerow(["" if value is None else value for value in _row_values(record, columns)])
    return out.getvalue().encode("utf-8")


def render_export(
    screen: str,
    fmt: str,
    columns: Sequence[ExportColumn],
    records: Sequence[Any],
    criteria: Criteria,
    generated_at: datetime | None = None,
) -> bytes:
    """Build the export body for ``fmt``; meant to run in a worker thread."""

    if fmt == "csv":
        return build_csv(columns, records, criteria, generated_at)
    workbook = build_workbook(EXPORT_TITLES[screen], columns, records, criteria, generated_at)
    return save_workbook(workbook)


def media_type_for(fmt: str) -> str:
    return CSV_MEDIA_TYPE if fmt == "csv" else XLSX_MEDIA_TYPE
