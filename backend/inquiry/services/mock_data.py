"""Development data set served in place of the gateway when ``GATEWAY_MODE=mock``.

The responses deliberately reuse the gateway's wire shapes (bare arrays for the
DOM lists, ``{data: [...]}`` for the common lists, ``{items, success}`` for the
production schedule) so the normalisation path is exercised end to end.
"""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from typing import Any

from loguru import logger

from inquiry.services import gateway

MOCK_BUYERS: list[dict[str, str]] = [
    {"buyerNum": "B001", "firstName": "John", "lastName": "Smith"},
    {"buyerNum": "B002", "firstName": "Sarah", "lastName": "Johnson"},
    {"buyerNum": "B003", "firstName": "Mike", "lastName": "Davis"},
    {"buyerNum": "B004", "firstName": "Lisa", "lastName": "Wilson"},
    {"buyerNum": "B005", "firstName": "David", "lastName": "Brown"},
]

MOCK_VENDORS: list[dict[str, str]] = [
    {"vendorNum": "V001", "vendorName": "Ashley Furniture Industries"},
    {"vendorNum": "V002", "vendorName": "Global Manufacturing Co."},
    {"vendorNum": "V003", "vendorName": "Premium Wood Suppliers"},
    {"vendorNum": "V004", "vendorName": "Metal Works International"},
    {"vendorNum": "V005", "vendorName": "Fabric & Textiles Ltd."},
]

MOCK_STATUSES: list[dict[str, Any]] = [
    {"statusCode": "10", "statusDescription": "On-Order", "isActive": True},
    {"statusCode": "20", "statusDescription": "In-Transit", "isActive": True},
    {"statusCode": "30", "statusDescription": "Received", "isActive": True},
    {"statusCode": "40", "statusDescription": "Cancelled", "isActive": True},
    {"statusCode": "50", "statusDescription": "Completed", "isActive": True},
]

MOCK_WAREHOUSES: list[dict[str, str]] = [
    {"whseCode": "WH01", "whseDescription": "Main Warehouse - Arcadia"},
    {"whseCode": "WH02", "whseDescription": "Distribution Center - Chicago"},
    {"whseCode": "WH03", "whseDescription": "Regional Hub - Atlanta"},
    {"whseCode": "WH04", "whseDescription": "West Coast Facility - LA"},
    {"whseCode": "WH05", "whseDescription": "Northeast Center - Boston"},
]

_FURNITURE_ITEMS = [
    "Dining Chair - Oak Finish",
    "Coffee Table - Walnut",
    "Sofa Frame - Steel",
    "Bedroom Dresser - Cherry Wood",
    "Fabric Cushions - Blue Pattern",
    "Table Legs - Metal Black",
    "Bookshelf Unit - Pine",
    "Office Chair - Ergonomic",
    "Mattress - Queen Size",
    "Lamp Base - Ceramic White",
    "Cabinet Hardware - Brass",
    "Dining Table Top - Marble",
    "Nightstand - Mahogany",
    "Sectional Sofa - Leather",
    "Bar Stool - Chrome",
    "Recliner Chair - Brown",
    'Headboard - Upholstered, 60" Wide',
]

_BASE_DATE = date(2024, 12, 1)
_EMPTY = "Empty"


def _iso(value: date) -> str:
    return value.isoformat()


def _build_po_items(count: int = 500, seed: int = 1207) -> list[dict[str, Any]]:
    rng = random.Random(seed)
    items: list[dict[str, Any]] = []
    for i in range(1, count + 1):
        buyer = rng.choice(MOCK_BUYERS)
        vendor = rng.choice(MOCK_VENDORS)
        status = rng.choice(MOCK_STATUSES)
        warehouse = rng.choice(MOCK_WAREHOUSES)
        order_qty = rng.randint(10, 509)
        due = _BASE_DATE + timedelta(days=rng.randint(0, 30))
        if rng.random() > 0.7:
            due = date(2025, rng.randint(1, 3), rng.randint(1, 28))
        order_date = _BASE_DATE - timedelta(days=rng.randint(0, 30))
        items.append(
            {
                "poNumber": f"PO-2024-{i:03d}",
                "itemNumber": f"ITM{i:03d}",
                "itemDesc": rng.choice(_FURNITURE_ITEMS),
                "orderQty": order_qty,
                "orderQtyOpen": int(order_qty * rng.random() * 0.5),
                "intransitQty": 0,
                "inspectionQty": 0,
                "stockQty": 0,
                "returnedQty": 0,
                "due": _iso(due),
                "orderDate": _iso(order_date),
                "shipDate": _iso(order_date + timedelta(days=rng.randint(1, 15))),
                "xpectedDelivery": _iso(order_date + timedelta(days=rng.randint(15, 45))),
                "buyerFirstName": buyer["firstName"],
                "buyerLastName": buyer["lastName"],
                "buyerNum": buyer["buyerNum"],
                "vendor": vendor["vendorNum"],
                "vname": vendor["vendorName"],
                "status": status["statusDescription"],
                "statusCode": status["statusCode"],
                "procStatus": status["statusCode"],
                "procStatusDesc": status["statusDescription"],
                "whse": warehouse["whseCode"],
            }
        )
    return items


def _build_production_rows(count: int = 120, seed: int = 311) -> list[dict[str, Any]]:
    rng = random.Random(seed)
    rows: list[dict[str, Any]] = []
    for i in range(1, count + 1):
        vendor = rng.choice(MOCK_VENDORS)
        warehouse = rng.choice(MOCK_WAREHOUSES)
        rows.append(
            {
                "orderNum": f"MO{10000 + i}",
                "pQty": rng.randint(0, 200),
                "fQty": rng.randint(0, 200),
                "sQty": rng.randint(0, 200),
                "wkNum": rng.randint(1, 52),
                "itemNum": f"ITM{(i % 60) + 1:03d}",
                "itemClass": rng.choice(["UPH", "CASE", "BED", "OCC"]),
                "itemDesc": rng.choice(_FURNITURE_ITEMS),
                "replaceableFlag": rng.choice(["Y", "N"]),
                "whse": warehouse["whseCode"],
                "vendorNum": vendor["vendorNum"],
                "vendorName": vendor["vendorName"],
                "productionResource": rng.choice(["LINE-A", "LINE-B", "CELL-7"]),
            }
        )
    return rows


def _build_pos_paid(count: int = 80, seed: int = 59) -> list[dict[str, Any]]:
    rng = random.Random(seed)
    rows: list[dict[str, Any]] = []
    for i in range(1, count + 1):
        vendor = rng.choice(MOCK_VENDORS)
        warehouse = rng.choice(MOCK_WAREHOUSES)
        amount = round(rng.uniform(500, 50000), 2)
        adjustments = round(rng.uniform(-250, 0), 2)
        etd = _BASE_DATE + timedelta(days=rng.randint(-60, 0))
        rows.append(
            {
                "vendor": vendor["vendorName"],
                "vendorNum": vendor["vendorNum"],
                "warehouse": warehouse["whseCode"],
                "buyingEntity": rng.choice(["AFI", "HOM"]),
                "pomOrderNum": f"{700000 + i}",
                "pomDatePaid": _iso(etd + timedelta(days=rng.randint(20, 50))),
                "currencyCode": rng.choice(["USD", "CNY", "VND"]),
                "orderAmount": amount,
                "totalAdjustments": adjustments,
                "totalPaid": round(amount + adjustments, 2),
                "poStatus": rng.choice(["Paid", "Rc. to Stk.", "In-Transit"]),
                "etdDate": _iso(etd),
                "etaDate": _iso(etd + timedelta(days=rng.randint(14, 35))),
                "onboard": _iso(etd + timedelta(days=1)),
                "paymentTerms": rng.choice(["NET 30", "NET 60", "TT AT SIGHT"]),
                "pmtApproveDate": _iso(etd + timedelta(days=rng.randint(10, 20))),
                "itemNumber": f"ITM{(i % 40) + 1:03d}",
                "statusCode": rng.choice(["30", "40", "50"]),
            }
        )
    return rows


MOCK_PO_ITEMS = _build_po_items()
MOCK_PRODUCTION_ROWS = _build_production_rows()
MOCK_POS_PAID = _build_pos_paid()


def _is_set(value: Any) -> bool:
    return bool(value) and value != _EMPTY


def _parse_us_date(value: str) -> date | None:
    try:
        return datetime.strptime(value, "%m/%d/%Y").date()
    except (TypeError, ValueError):
        return None


def filter_po_items(payload: dict[str, Any], items: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
    """Apply a ``POItemDomRequest`` to the mock PO items the way the gateway does."""

    rows = list(MOCK_PO_ITEMS if items is None else items)

    item_number = (payload.get("itemNumber") or "").strip().lower()
    if item_number:
        rows = [row for row in rows if item_number in row["itemNumber"].lower()]
    if _is_set(payload.get("buyerNumber")):
        rows = [row for row in rows if row["buyerNum"] == payload["buyerNumber"]]
    if _is_set(payload.get("vendorNumber")):
        rows = [row for row in rows if row["vendor"] == payload["vendorNumber"]]
    if _is_set(payload.get("statusCode")):
        rows = [row for row in rows if row["statusCode"] == payload["statusCode"]]
    if _is_set(payload.get("warehouse")):
        rows = [row for row in rows if row["whse"] == payload["warehouse"]]

    date_from = _parse_us_date(payload.get("dueDateFrom") or "")
    date_to = _parse_us_date(payload.get("dueDateTo") or "")
    if date_from:
        rows = [row for row in rows if date.fromisoformat(row["due"]) >= date_from]
    if date_to:
        rows = [row for row in rows if date.fromisoformat(row["due"]) <= date_to]
    return rows


def _filter_production(payload: dict[str, Any]) -> list[dict[str, Any]]:
    rows = MOCK_PRODUCTION_ROWS
    for request_key, row_key in (
        ("itemNum", "itemNum"),
        ("vendorNum", "vendorNum"),
        ("warehouse", "whse"),
        ("itemClass", "itemClass"),
    ):
        wanted = payload.get(request_key)
        if wanted:
            rows = [row for row in rows if str(row[row_key]).lower() == str(wanted).lower()]
    resource = payload.get("productionResource")
    if resource and resource != "ALL":
        rows = [row for row in rows if row["productionResource"] == resource]
    return rows


def _filter_pos_paid(payload: dict[str, Any]) -> list[dict[str, Any]]:
    rows = MOCK_POS_PAID
    item_number = (payload.get("itemNumber") or "").strip().lower()
    if item_number:
        rows = [row for row in rows if item_number in row["itemNumber"].lower()]
    if payload.get("warehouse"):
        rows = [row for row in rows if row["warehouse"] == payload["warehouse"]]
    if payload.get("vendor"):
        rows = [row for row in rows if row["vendorNum"] == payload["vendor"]]
    if payload.get("status"):
        rows = [row for row in rows if row["statusCode"] == payload["status"]]
    return rows


class MockGatewayClient:
    """Same surface as :class:`inquiry.services.gateway.GatewayClient`, served from memory."""

    def __init__(self, environment: str = "afi") -> None:
        self.environment = environment

    async def aclose(self) -> None:
        return None

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        logger.bind(path=path, params=params).debug("mock_gateway_get")
        if path == gateway.BUYERS_PATH:
            return list(MOCK_BUYERS)
        if path == gateway.DOM_VENDORS_PATH:
            return {"vendors": list(MOCK_VENDORS)}
        if path == gateway.DOM_STATUSES_PATH:
            return {"data": list(MOCK_STATUSES)}
        if path == gateway.WAREHOUSES_PATH:
            return list(MOCK_WAREHOUSES)
        if path == gateway.VENDORS_PATH:
            return {
                "data": [
                    {"vendorNumber": v["vendorNum"], "vendorName": v["vendorName"], "isActive": True}
                    for v in MOCK_VENDORS
                ],
                "success": True,
            }
        if path == gateway.ITEM_CLASSES_PATH:
            return {"data": [{"itemClass": code} for code in ("BED", "CASE", "OCC", "UPH")]}
        if path in (gateway.DRP_PLANNERS_PATH, gateway.FC_PLANNERS_PATH):
            prefix = "DRP" if path == gateway.DRP_PLANNERS_PATH else "FC"
            return {
                "data": [
                    {"plannerCode": f"{prefix}00{n}", "plannerName": f"{prefix} Planner {n}"}
                    for n in range(1, 4)
                ]
            }
        if path == gateway.OFFICES_PATH:
            return {"data": [{"officeCode": "AFI", "officeName": "Ashley Furniture Industries"}]}
        if path == gateway.PO_STATUSES_PATH:
            return [
                {"statusCode": code, "statusDescription": desc}
                for code, desc in (("30", "In-Transit"), ("40", "Rc. to Stk."), ("50", "Paid"))
            ]
        return []

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        logger.bind(path=path).debug("mock_gateway_post")
        if path == gateway.po_items_search_path(self.environment):
            rows = filter_po_items(payload)
            return {"data": rows, "totalRecords": len(rows)}
        if path == gateway.production_schedule_search_path(self.environment):
            rows = _filter_production(payload)
            return {"items": rows, "success": True, "errorMessage": "", "totalCount": len(rows)}
        if path == gateway.pos_paid_search_path(self.environment):
            rows = _filter_pos_paid(payload)
            return {"success": True, "data": rows, "totalCount": len(rows)}
        return {"data": []}
