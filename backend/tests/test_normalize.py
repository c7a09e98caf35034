import pytest

from inquiry.services.normalize import (
    FIELD_MAPPINGS,
    extract_records,
    normalize_filter_values,
    to_filter_values,
)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        42,
        "warehouses",
        {},
        {"success": True, "message": "ok"},
        {"data": {"inner": {"deeper": [{"whseCode": "WH01"}]}}},
    ],
)
def test_extract_records_never_raises_on_odd_shapes(raw):
    assert extract_records(raw) == []


def test_extract_records_prefers_known_keys_over_key_order():
    raw = {"meta": ["x"], "items": [{"a": 1}]}
    assert extract_records(raw) == [{"a": 1}]


def test_extract_records_skips_empty_known_key():
    raw = {"data": [], "warehouses": [{"whseCode": "WH01"}]}
    assert extract_records(raw, FIELD_MAPPINGS["Whse"].probe_keys) == [{"whseCode": "WH01"}]


def test_extract_records_falls_back_to_first_list_property():
    raw = {"count": 1, "rows": [{"whseCode": "WH03"}]}
    assert extract_records(raw) == [{"whseCode": "WH03"}]


def test_bare_array_is_used_as_is():
    values = normalize_filter_values("Whse", [{"whseCode": "WH01", "whseDescription": "Main"}])
    assert [(v.field_id, v.filter_id, v.filter_desc) for v in values] == [("Whse", "WH01", "Main")]


def test_description_falls_back_to_identifier():
    values = normalize_filter_values("Whse", [{"code": "WH09"}])
    assert values[0].filter_desc == "WH09"


def test_missing_identifier_gets_positional_id():
    values = normalize_filter_values("Whse", [{"whseCode": "WH01"}, {"name": "Unnamed dock"}])
    assert values[1].filter_id == "warehouse_1"
    assert values[1].filter_desc == "Unnamed dock"


def test_buyer_names_are_composed():
    values = normalize_filter_values(
        "Buyno", {"buyers": [{"BuyerNum": "B7", "FirstName": "Ana", "LastName": "Ruiz"}]}
    )
    assert (values[0].filter_id, values[0].filter_desc) == ("B7", "Ana Ruiz")


def test_inactive_records_are_skipped():
    raw = {
        "data": [
            {"vendorNumber": "V1", "vendorName": "Active", "isActive": True},
            {"vendorNumber": "V2", "vendorName": "Retired", "isActive": False},
            {"vendorNumber": "V3", "vendorName": "Unflagged"},
        ]
    }
    assert [v.filter_id for v in normalize_filter_values("Vendor", raw)] == ["V1", "V3"]


def test_incomplete_rows_dropped_when_mapping_says_so():
    raw = {"data": [{"plannerCode": "DRP1"}, {"plannerName": "No code"}, "junk", None]}
    values = normalize_filter_values("DRP", raw)
    assert [(v.filter_id, v.filter_desc) for v in values] == [("DRP1", "DRP1")]


def test_blank_and_nested_values_are_not_identifiers():
    records = [{"whseCode": "  ", "warehouseCode": {"x": 1}, "code": "WH05"}]
    values = to_filter_values(FIELD_MAPPINGS["Whse"], records)
    assert values[0].filter_id == "WH05"


def test_shared_warehouse_mapping_keeps_its_own_field_id():
    values = normalize_filter_values("Warehouse", [{"whseCode": "WH01"}])
    assert values[0].field_id == "Warehouse"


def test_unknown_field_normalizes_to_empty():
    assert normalize_filter_values("Mystery", [{"id": 1}]) == []
