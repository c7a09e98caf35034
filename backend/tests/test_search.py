"""Gateway request composition and mock search behaviour per screen."""

from __future__ import annotations

from typing import Any

import pytest

from inquiry.core.errors import GatewaySearchError, SearchValidationError
from inquiry.schemas.po_items import POItemSearch
from inquiry.schemas.pos_paid import POsPaidSearch
from inquiry.schemas.production_schedule import ProductionScheduleSearch
from inquiry.services.mock_data import MOCK_PO_ITEMS, MockGatewayClient, filter_po_items
from inquiry.services.search import (
    build_po_item_request,
    build_pos_paid_request,
    build_production_request,
    report_by_code,
    search_pos_paid,
    search_po_items,
    search_production_schedule,
    to_us_date,
)


class StubGateway:
    def __init__(self, response: Any):
        self.response = response
        self.posts: list[tuple[str, dict]] = []

    async def get(self, path, params=None):
        return []

    async def post(self, path, payload):
        self.posts.append((path, payload))
        return self.response


def _production(**overrides) -> ProductionScheduleSearch:
    payload = {
        "filterRows": [
            {"fieldType": "Item", "filterValue": "ITM001"},
            {"fieldType": "Warehouse", "filterValue": "WH02", "isActive": False},
            {"fieldType": "DRP", "filterValue": "DRP001", "logicalOperator": "AND"},
        ],
        "orderTypeFilters": {"plannedOrders": True},
        "timePeriod": {"pastWeeks": 2, "futureWeeks": 8},
    }
    payload.update(overrides)
    return ProductionScheduleSearch.model_validate(payload)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-12-05", "12/05/2024"),
        ("2024-12-05T06:00:00.000Z", "12/05/2024"),
        ("12/05/2024", "12/05/2024"),
        ("not a date", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_due_dates_are_sent_as_us_dates(value, expected):
    assert to_us_date(value) == expected


def test_po_item_request_treats_empty_sentinel_as_unset():
    search = POItemSearch(
        item_number=" ITM001 ",
        buyer_value="Empty",
        vendor_value="V002",
        status_value=None,
        warehouse_value="WH01",
        due_date_from="2024-12-01",
    )
    body = build_po_item_request(search, user_id="jdoe").model_dump(by_alias=True)

    assert body == {
        "vhsName": "MASTERYY",
        "itemNumber": "ITM001",
        "vendorNumber": "V002",
        "warehouse": "WH01",
        "statusCode": "",
        "buyerNumber": "",
        "dueDateFrom": "12/01/2024",
        "dueDateTo": "",
        "userId": "jdoe",
        "application": "DOM_INQUIRY",
    }


@pytest.mark.anyio
async def test_mock_item_search_is_case_insensitive_substring():
    rows = await search_po_items(MockGatewayClient(), POItemSearch(item_number="itm001"))

    assert rows
    assert all("itm001" in row.item_number.lower() for row in rows)
    assert {row.item_number for row in rows} == {"ITM001"}


def test_mock_filter_on_codes_and_inclusive_due_range():
    first = MOCK_PO_ITEMS[0]
    due = first["due"]
    us_due = f"{due[5:7]}/{due[8:10]}/{due[0:4]}"
    rows = filter_po_items(
        {
            "buyerNumber": first["buyerNum"],
            "vendorNumber": "Empty",
            "dueDateFrom": us_due,
            "dueDateTo": us_due,
        }
    )

    assert first in rows
    assert all(row["buyerNum"] == first["buyerNum"] and row["due"] == due for row in rows)


def test_production_request_uses_active_rows_only():
    body = build_production_request(_production(), user="SYSTEM").model_dump(by_alias=True)

    assert body["itemNum"] == "ITM001"
    assert body["warehouse"] == ""
    assert body["drpPlanner"] == "DRP001"
    assert body["forecastWeeks"] == 8
    assert (body["plannedOrders"], body["firmedOrders"], body["shippedOrders"]) == (1, 0, 0)
    assert body["excludeContainerDirect"] == 1
    assert body["groupByWhse"] == "false"
    assert body["app"] == "ProductionSchedule"
    assert body["vhsName"] == "masteryy"


@pytest.mark.parametrize(
    ("report_by", "code"),
    [("daily", 1), ("Weekly", 2), ("MONTHLY", 3), ("itemQty", 2), ("", 2)],
)
def test_report_by_codes(report_by, code):
    assert report_by_code(report_by) == code


@pytest.mark.anyio
async def test_invalid_production_search_never_reaches_gateway():
    stub = StubGateway({"items": [], "success": True})

    with pytest.raises(SearchValidationError) as excinfo:
        await search_production_schedule(stub, _production(timePeriod={"pastWeeks": 100, "futureWeeks": 4}))

    assert excinfo.value.messages == ["Past weeks must be between 0 and 52"]
    assert stub.posts == []


@pytest.mark.anyio
async def test_unsuccessful_production_response_raises():
    stub = StubGateway({"items": [], "success": False, "errorMessage": "Planner not found"})

    with pytest.raises(GatewaySearchError) as excinfo:
        await search_production_schedule(stub, _production())

    assert excinfo.value.error_message == "Planner not found"
    assert stub.posts[0][0] == "/api/ProductionSchedule/afi/search"


@pytest.mark.anyio
async def test_production_rows_are_read_from_items():
    stub = StubGateway(
        {"items": [{"orderNum": "MO1", "pQty": 5, "wkNum": 3, "itemNum": "ITM001", "extraColumn": "kept"}], "success": True}
    )

    rows = await search_production_schedule(stub, _production())

    assert rows[0].order_num == "MO1"
    assert rows[0].p_qty == 5
    assert rows[0].model_dump(by_alias=True)["extraColumn"] == "kept"


def test_pos_paid_request():
    search = POsPaidSearch(item_number="ITM", vendor="V001", date_field="2", date_from="2024-11-01")
    body = build_pos_paid_request(search).model_dump(by_alias=True)

    assert body["dateField"] == 2
    assert body["dateFrom"] == "2024-11-01"
    assert body["dateTo"] == ""
    assert body["orderBy"] == 1
    assert body["app"] == "POsPaidInq.asp"
    assert body["warehouse"] == ""


def test_pos_paid_rejects_unknown_date_field():
    with pytest.raises(ValueError):
        POsPaidSearch(date_field="9")


@pytest.mark.anyio
async def test_numeric_identifiers_are_read_as_text():
    po_rows = await search_po_items(
        StubGateway({"data": [{"poNumber": 4501, "itemNumber": 1001, "orderQty": "12"}]}),
        POItemSearch(item_number="1001"),
    )
    production_rows = await search_production_schedule(
        StubGateway({"success": True, "items": [{"orderNum": 10001, "vendorNum": 42}]}), _production()
    )
    paid_rows = await search_pos_paid(
        StubGateway({"success": True, "data": [{"pomOrderNum": 700001, "orderAmount": 99.5}]}),
        POsPaidSearch(),
    )

    assert (po_rows[0].po_number, po_rows[0].item_number, po_rows[0].order_qty) == ("4501", "1001", 12)
    assert (production_rows[0].order_num, production_rows[0].vendor_num) == ("10001", "42")
    assert (paid_rows[0].pom_order_num, paid_rows[0].order_amount) == ("700001", 99.5)


@pytest.mark.anyio
async def test_null_success_flag():
    response = {"success": None, "data": [{"pomOrderNum": "P1"}], "items": None}

    # Only an explicit false fails the PO item and POs paid searches
    assert len(await search_po_items(StubGateway(response), POItemSearch())) == 1
    assert len(await search_pos_paid(StubGateway(response), POsPaidSearch())) == 1

    with pytest.raises(GatewaySearchError):
        await search_production_schedule(StubGateway({"success": None, "items": []}), _production())


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response",
    [
        {"success": "maybe", "items": []},
        {"success": True, "items": "not a list"},
        {"success": True, "items": [{"pQty": "lots"}]},
        {"success": True, "items": [{"wkNum": {"week": 3}}]},
    ],
)
async def test_malformed_production_response_is_a_gateway_error(response):
    with pytest.raises(GatewaySearchError) as excinfo:
        await search_production_schedule(StubGateway(response), _production())

    assert excinfo.value.error_message == "Malformed search response"


@pytest.mark.anyio
async def test_malformed_pos_paid_row_is_a_gateway_error():
    stub = StubGateway({"success": True, "data": [{"totalPaid": "n/a"}]})

    with pytest.raises(GatewaySearchError):
        await search_pos_paid(stub, POsPaidSearch())
