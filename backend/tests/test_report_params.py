"""Production schedule criteria text, report parameters and validation."""

from __future__ import annotations

from inquiry.schemas.production_schedule import ProductionScheduleSearch
from inquiry.services.report_params import (
    REPORT_PARAMETER_ORDER,
    build_report_parameters,
    build_user_criteria,
    generate_report_object,
    validate_search_criteria,
)


def _search(**overrides) -> ProductionScheduleSearch:
    payload = {
        "filterRows": [
            {"id": "1", "fieldType": "Item", "comparisonOperator": "equals", "filterValue": "ITM_001", "isActive": True},
            {
                "id": "2",
                "fieldType": "Vendor",
                "logicalOperator": "AND",
                "comparisonOperator": "equals",
                "filterValue": "V002",
                "isActive": True,
            },
        ],
        "orderTypeFilters": {"plannedOrders": True, "firmedOrders": False, "shippedOrders": True},
        "timePeriod": {"pastWeeks": 4, "futureWeeks": 12},
        "reportOptions": {"reportBy": "weekly", "containerDirectFilter": True, "rpFilter": False},
    }
    payload.update(overrides)
    return ProductionScheduleSearch.model_validate(payload)


def test_parameters_are_positional_and_complete():
    prms = build_report_parameters(_search(), "AFI", "jdoe")
    fields = prms.split("|")

    assert len(fields) == len(REPORT_PARAMETER_ORDER) == 19
    assert fields == [
        "ITM_001", "V002", "", "", "", "4", "12", "AFI", "jdoe", "false", "false",
        "1", "0", "1", "ProductionSched.asp", "weekly", "1", "", "",
    ]


def test_parameters_are_deterministic():
    assert build_report_parameters(_search()) == build_report_parameters(_search())


def test_defaults_come_from_settings():
    fields = build_report_parameters(_search()).split("|")
    assert fields[7:9] == ["AFI", "system"]


def test_rp_filter_and_trailing_fields():
    search = _search(
        filterRows=[
            {"fieldType": "ProductionResource", "filterValue": "ALL"},
            {"fieldType": "ItemClass", "filterValue": "UPH", "logicalOperator": "OR"},
        ],
        reportOptions={"reportBy": "daily", "rpFilter": True},
    )
    fields = build_report_parameters(search).split("|")
    assert fields[10] == "true"
    assert fields[15:] == ["daily", "0", "ALL", "UPH"]


def test_group_by_warehouse_fills_its_slot():
    search = _search(reportOptions={"reportBy": "weekly", "groupByWarehouse": True})
    assert build_report_parameters(search).split("|")[9] == "true"


def test_user_criteria_text():
    assert build_user_criteria(_search()) == (
        'Item equals "ITM_001" AND Vendor equals "V002", Order Types: Planned, Shipped, '
        "Past Weeks: 4, Future Weeks: 12, Report By: weekly, Container Direct Filter"
    )


def test_report_object_replaces_underscores_in_criteria():
    report = generate_report_object(_search())

    assert report.criteria.startswith('Item equals "ITM-001"')
    assert report.environment_code == "AFI"
    assert report.xml_style_sheet == "ProductionSched.xml"
    assert report.call_mode == ""
    assert report.prms.startswith("ITM_001|V002|")
    assert report.report_url.startswith("/ReportsNET/ReportCreator/")


def test_empty_rows_and_no_order_types_report_both_messages():
    search = _search(
        filterRows=[{"fieldType": "Item", "filterValue": "   ", "isActive": True}],
        orderTypeFilters={},
    )
    assert validate_search_criteria(search) == [
        "At least one filter criteria must be specified",
        "At least one order type must be selected",
    ]


def test_inactive_row_does_not_count_as_criteria():
    search = _search(filterRows=[{"fieldType": "Item", "filterValue": "ITM001", "isActive": False}])
    assert "At least one filter criteria must be specified" in validate_search_criteria(search)


def test_week_ranges():
    assert validate_search_criteria(_search(timePeriod={"pastWeeks": 100, "futureWeeks": 52})) == [
        "Past weeks must be between 0 and 52"
    ]
    assert validate_search_criteria(_search(timePeriod={"pastWeeks": 0, "futureWeeks": -1})) == [
        "Future weeks must be between 0 and 52"
    ]


def test_valid_search_has_no_messages():
    assert validate_search_criteria(_search()) == []
