"""Pydantic models for the production schedule inquiry and its legacy report."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from inquiry.schemas.common import CamelModel, GatewayRow, ReportType

ProductionFieldType = Literal[
    "Item",
    "Vendor",
    "Warehouse",
    "DRP",
    "FC",
    "Office",
    "ProductionResource",
    "ItemClass",
]
LogicalOperator = Literal["AND", "OR"]
ComparisonOperator = Literal[
    "equals", "contains", "startsWith", "endsWith", "greaterThan", "lessThan"
]


class FilterRow(CamelModel):
    id: str = ""
    field_type: ProductionFieldType
    logical_operator: Optional[LogicalOperator] = None
    comparison_operator: ComparisonOperator = "equals"
    filter_value: str = ""
    is_active: bool = True


class OrderTypeFilters(CamelModel):
    planned_orders: bool = False
    firmed_orders: bool = False
    shipped_orders: bool = False


class TimePeriod(CamelModel):
    # Range is checked by validate_search_criteria so the screen gets all messages at once
    past_weeks: int = 0
    future_weeks: int = 0


class ReportOptions(CamelModel):
    report_by: str = "itemQty"
    container_direct_filter: bool = False
    rp_filter: bool = False
    group_by_warehouse: bool = False


class ProductionScheduleSearch(CamelModel):
    filter_rows: List[FilterRow] = Field(default_factory=list)
    order_type_filters: OrderTypeFilters = Field(default_factory=OrderTypeFilters)
    time_period: TimePeriod = Field(default_factory=TimePeriod)
    report_options: ReportOptions = Field(default_factory=ReportOptions)
    report_type: ReportType = "browser"


class ProductionScheduleApiRequest(CamelModel):
    """Body of the gateway's ``ProductionSchedule`` search call."""

    item_num: str
    vendor_num: str
    warehouse: str
    drp_planner: str
    forecast_planner: str
    past_weeks: int
    forecast_weeks: int
    vhs_name: str
    user: str
    group_by_whse: str = "false"
    rp_filter: bool
    planned_orders: int
    firmed_orders: int
    shipped_orders: int
    app: str = "ProductionSchedule"
    report_by: int
    exclude_container_direct: int
    production_resource: str
    item_class: str


class ProductionScheduleRow(GatewayRow):
    order_num: Optional[str] = None
    p_qty: int | float | None = None
    f_qty: int | float | None = None
    s_qty: int | float | None = None
    wk_num: Optional[int] = None
    item_num: Optional[str] = None
    item_class: Optional[str] = None
    item_desc: Optional[str] = None
    replaceable_flag: Optional[str] = None
    whse: Optional[str] = None
    vendor_num: Optional[str] = None
    vendor_name: Optional[str] = None
    production_resource: Optional[str] = None


class ProductionScheduleSearchOut(CamelModel):
    total: int
    page: int
    page_size: int
    sequence: Optional[int] = None
    criteria: str = Field(description="Human readable summary of the submitted criteria")
    items: List[ProductionScheduleRow] = Field(default_factory=list)


class ReportObjectOut(CamelModel):
    """Configuration handed to the legacy report creator."""

    criteria: str
    environment_code: str
    xml_style_sheet: str = "ProductionSched.xml"
    prms: str
    call_mode: str = ""
    report_url: str
