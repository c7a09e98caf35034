import pytest

from inquiry.schemas.po_items import POItemRow
from inquiry.services.shaping import shape_results


def _rows():
    return [
        {"id": 1, "qty": 5, "name": "beta"},
        {"id": 2, "qty": None, "name": "Alpha"},
        {"id": 3, "qty": 1, "name": "gamma"},
        {"id": 4, "qty": 5, "name": None},
    ]


def test_none_sorts_last_in_both_directions():
    ascending = shape_results(_rows(), "qty", False, 1, 10)["items"]
    descending = shape_results(_rows(), "qty", True, 1, 10)["items"]

    assert [r["id"] for r in ascending] == [3, 1, 4, 2]
    assert [r["id"] for r in descending] == [1, 4, 3, 2]


def test_strings_sort_case_insensitively():
    items = shape_results(_rows(), "name", page_size=10)["items"]
    assert [r["id"] for r in items] == [2, 1, 3, 4]


def test_paging():
    result = shape_results(list(range(7)), page=2, page_size=3)
    assert result == {"total": 7, "page": 2, "page_size": 3, "items": [3, 4, 5]}
    assert shape_results(list(range(7)), page=4, page_size=3)["items"] == []


def test_models_sort_by_camel_case_alias():
    rows = [POItemRow(item_number="ITM002"), POItemRow(item_number="ITM001")]
    items = shape_results(rows, "itemNumber", page_size=5)["items"]
    assert [r.item_number for r in items] == ["ITM001", "ITM002"]


def test_rejects_bad_page():
    with pytest.raises(ValueError):
        shape_results([], page=0)
