"""Pydantic models for the POs paid inquiry."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from inquiry.schemas.common import CamelModel, GatewayRow, ReportType

DATE_FIELD_OPTIONS: list[tuple[int, str]] = [
    (-1, "All Dates"),
    (0, "PO Date"),
    (1, "ETD"),
    (2, "ETA"),
    (3, "On Board"),
    (4, "Pmt Approved"),
    (5, "Vendor Paid"),
]


class DateFieldOption(CamelModel):
    value: str
    label: str
    field_id: int


class POsPaidSearch(CamelModel):
    item_number: str = ""
    warehouse: Optional[str] = None
    status: Optional[str] = None
    vendor: Optional[str] = None
    date_field: str = "-1"
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    report_type: ReportType = "browser"

    @field_validator("date_field", mode="before")
    @classmethod
    def _known_date_field(cls, value: object) -> str:
        text = "-1" if value in (None, "") else str(value).strip()
        try:
            code = int(text)
        except ValueError as exc:
            raise ValueError("dateField must be a number") from exc
        if code not in {option for option, _ in DATE_FIELD_OPTIONS}:
            raise ValueError("dateField is not a known date column")
        return text


class POsPaidRequest(CamelModel):
    """Body of the gateway's ``POsPaid`` search call."""

    item_number: str
    warehouse: str
    status: str
    vendor: str
    date_field: int
    date_from: str
    date_to: str
    order_by: int = 1
    vhs_name: str
    user: str
    app: str = "POsPaidInq.asp"


class POsPaidRow(GatewayRow):
    vendor: Optional[str] = None
    vendor_num: Optional[str] = None
    warehouse: Optional[str] = None
    buying_entity: Optional[str] = None
    pom_order_num: Optional[str] = None
    pom_date_paid: Optional[str] = None
    currency_code: Optional[str] = None
    order_amount: int | float | None = None
    total_adjustments: int | float | None = None
    total_paid: int | float | None = None
    po_status: Optional[str] = None
    etd_date: Optional[str] = None
    eta_date: Optional[str] = None
    onboard: Optional[str] = None
    payment_terms: Optional[str] = None
    pmt_approve_date: Optional[str] = None


class POsPaidSearchOut(CamelModel):
    total: int
    page: int
    page_size: int
    sequence: Optional[int] = None
    items: List[POsPaidRow] = Field(default_factory=list)
