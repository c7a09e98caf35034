"""Export layout, escaping and file naming."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime

from openpyxl import load_workbook

from inquiry.schemas.po_items import POItemRow, POItemSearch
from inquiry.schemas.pos_paid import POsPaidSearch
from inquiry.services.export import (
    PO_ITEM_COLUMNS,
    ExportColumn,
    build_csv,
    build_filename,
    build_workbook,
    po_item_criteria,
    pos_paid_criteria,
    render_export,
)

GENERATED = datetime(2025, 1, 15, 9, 30, 0)
COLUMNS = (ExportColumn("Item", "item"), ExportColumn("Description", "desc"), ExportColumn("Qty", "qty"))


def test_csv_escapes_commas_quotes_and_newlines():
    rows = [{"item": "ITM001", "desc": 'Headboard - Upholstered, 60" Wide', "qty": 3},
            {"item": "ITM002", "desc": "two\nlines", "qty": None}]
    body = build_csv(COLUMNS, rows, [("Item Number", "ITM, 00")], GENERATED).decode("utf-8")

    parsed = list(csv.reader(io.StringIO(body, newline="")))

    assert parsed[0] == ["# Generated: 2025-01-15 09:30:00"]
    assert parsed[1] == ["# Item Number: ITM, 00"]
    assert parsed[2] == []
    assert parsed[3] == ["Item", "Description", "Qty"]
    assert parsed[4] == ["ITM001", 'Headboard - Upholstered, 60" Wide', "3"]
    assert parsed[5] == ["ITM002", "two\nlines", ""]
    assert '"Headboard - Upholstered, 60"" Wide"' in body
    assert body.endswith("\r\n")


def test_workbook_layout():
    rows = [POItemRow(po_number="PO-1", item_number="ITM001", order_qty=12)]
    workbook = build_workbook(
        "PO Item Inquiry", PO_ITEM_COLUMNS, rows, [("Item Number", "ITM001"), ("Buyer", "B001")], GENERATED
    )
    sheet = workbook.active

    assert sheet["A1"].value == "PO Item Inquiry"
    assert sheet["A2"].value == "Generated: 2025-01-15 09:30:00"
    assert sheet["A3"].value == "Item Number: ITM001"
    assert sheet["A4"].value == "Buyer: B001"
    assert sheet["A5"].value is None
    assert sheet["A6"].value == "PO Number"
    assert sheet["A6"].font.bold
    assert [sheet.cell(row=7, column=c).value for c in (1, 2, 6)] == ["PO-1", "ITM001", 12]
    assert sheet.column_dimensions["A"].width >= len("PO Number")


def test_rendered_xlsx_opens():
    body = render_export("po-items", "xlsx", PO_ITEM_COLUMNS, [], [], GENERATED)
    workbook = load_workbook(io.BytesIO(body))
    assert workbook.active.title == "PO Item Inquiry"


def test_file_names_embed_iso_date():
    day = date(2025, 3, 7)
    assert build_filename("po-items", "xlsx", day) == "PO_Items_Export_2025-03-07.xlsx"
    assert build_filename("production-schedule", "csv", day) == "Production_Schedule_Export_2025-03-07.csv"
    assert build_filename("pos-paid", "xlsx", day) == "POs_Paid_Inquiry_2025-03-07.xlsx"


def test_only_active_criteria_are_listed():
    search = POItemSearch(item_number="ITM001", buyer_value="Empty", warehouse_value="WH01")
    assert po_item_criteria(search) == [("Item Number", "ITM001"), ("Warehouse", "WH01")]


def test_pos_paid_criteria_name_the_date_column():
    search = POsPaidSearch(date_field="4", date_from="2024-10-01")
    assert pos_paid_criteria(search) == [("Date Field", "Pmt Approved"), ("Date From", "2024-10-01")]
