"""Pydantic models for the domestic PO item inquiry."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from inquiry.schemas.common import CamelModel, GatewayRow, ReportType


class POItemSearch(CamelModel):
    """Search form submitted by the PO item inquiry screen."""

    item_number: str = ""
    due_date_from: Optional[str] = None
    due_date_to: Optional[str] = None
    buyer_value: Optional[str] = None
    vendor_value: Optional[str] = None
    status_value: Optional[str] = None
    warehouse_value: Optional[str] = None
    report_type: ReportType = "browser"

    @field_validator("item_number")
    @classmethod
    def _strip_item(cls, value: str) -> str:
        return value.strip()


class POItemDomRequest(CamelModel):
    """Body of the gateway's ``po-item-inquiry-dom`` search call."""

    vhs_name: str
    item_number: str
    vendor_number: str
    warehouse: str
    status_code: str
    buyer_number: str
    due_date_from: str
    due_date_to: str
    user_id: str
    application: str = "DOM_INQUIRY"


class POItemRow(GatewayRow):
    po_number: Optional[str] = None
    item_number: Optional[str] = None
    item_desc: Optional[str] = None
    vendor: Optional[str] = None
    vname: Optional[str] = None
    whse: Optional[str] = None
    order_qty: int | float | None = None
    order_qty_open: int | float | None = None
    intransit_qty: int | float | None = None
    inspection_qty: int | float | None = None
    stock_qty: int | float | None = None
    returned_qty: int | float | None = None
    due: Optional[str] = None
    order_date: Optional[str] = None
    ship_date: Optional[str] = None
    xpected_delivery: Optional[str] = None
    status: Optional[str] = None
    status_code: Optional[str] = None
    proc_status: Optional[str] = None
    proc_status_desc: Optional[str] = None
    buyer_num: Optional[str] = None
    buyer_first_name: Optional[str] = None
    buyer_last_name: Optional[str] = None


class POItemSearchOut(CamelModel):
    total: int
    page: int
    page_size: int
    sequence: Optional[int] = Field(default=None, description="Search ticket within the caller's session")
    items: List[POItemRow] = Field(default_factory=list)
