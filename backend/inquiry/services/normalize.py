"""Turn the gateway's inconsistent list responses into uniform filter values.

The gateway endpoints do not agree on an envelope (bare arrays, ``{data: []}``,
``{items: [], success}``) nor on field casing. Every known spelling is declared
once in :data:`FIELD_MAPPINGS`; nothing else in the service guesses at names.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Sequence

from loguru import logger

from inquiry.schemas.filters import FilterValue

COMMON_ARRAY_KEYS: tuple[str, ...] = ("data", "items", "results", "list", "records")


@dataclass(frozen=True)
class FieldMapping:
    """How to read one filter field's records from its gateway endpoint."""

    field_id: str
    label: str
    id_keys: tuple[str, ...]
    desc_keys: tuple[str, ...]
    array_keys: tuple[str, ...] = ()
    active_key: str | None = None
    compose_name: tuple[tuple[str, ...], tuple[str, ...]] | None = None
    drop_incomplete: bool = False
    fallback_prefix: str = ""

    @property
    def probe_keys(self) -> tuple[str, ...]:
        return COMMON_ARRAY_KEYS[:1] + self.array_keys + COMMON_ARRAY_KEYS[1:]


FIELD_MAPPINGS: dict[str, FieldMapping] = {
    "Buyno": FieldMapping(
        field_id="Buyno",
        label="Buyer",
        array_keys=("buyers",),
        id_keys=(
            "buyerNum", "buyerNumber", "buyno", "id", "code", "buyerCode", "buyerId",
            "buyer_id", "buyer_num", "buyer_number", "BuyerNum", "BuyerNumber",
            "BuyerId", "BUYER_NUM", "BUYER_ID",
        ),
        compose_name=(
            ("firstName", "first_name", "fname", "FirstName", "FIRST_NAME"),
            ("lastName", "last_name", "lname", "LastName", "LAST_NAME"),
        ),
        desc_keys=(
            "name", "buyerName", "buyer_name", "BuyerName", "BUYER_NAME",
            "description", "desc", "Description", "DESC",
        ),
        fallback_prefix="buyer",
    ),
    "pomVendorNum": FieldMapping(
        field_id="pomVendorNum",
        label="Vendor",
        array_keys=("vendors",),
        id_keys=("vendorNum", "vendorNumber", "id", "code", "vendorCode"),
        desc_keys=("vendorName", "name", "description", "desc", "label"),
        fallback_prefix="vendor",
    ),
    "Staic": FieldMapping(
        field_id="Staic",
        label="Status",
        array_keys=("statuses",),
        id_keys=("statusCode",),
        desc_keys=("statusDescription",),
        fallback_prefix="status",
    ),
    "Whse": FieldMapping(
        field_id="Whse",
        label="Warehouse",
        array_keys=("warehouses",),
        id_keys=(
            "whseCode", "warehouseCode", "warehouse_code", "WarehouseCode",
            "WAREHOUSE_CODE", "code", "id", "whse", "whseId", "whse_id", "WhseCode",
            "WhseId", "WHSE_CODE", "WHSE_ID", "Code", "ID",
        ),
        desc_keys=(
            "whseDescription", "warehouseName", "warehouse_name", "WarehouseName",
            "WAREHOUSE_NAME", "description", "desc", "name", "label", "Description",
            "DESC", "Name", "Label", "WhseDescription", "whse_description",
            "WHSE_DESCRIPTION",
        ),
        fallback_prefix="warehouse",
    ),
    "Vendor": FieldMapping(
        field_id="Vendor",
        label="Vendor",
        array_keys=("vendors",),
        id_keys=("vendorNumber", "vendorId"),
        desc_keys=("vendorName", "name"),
        active_key="isActive",
        drop_incomplete=True,
    ),
    "ItemClass": FieldMapping(
        field_id="ItemClass",
        label="Item Class",
        id_keys=("itemClass",),
        desc_keys=("itemClass",),
        drop_incomplete=True,
    ),
    "DRP": FieldMapping(
        field_id="DRP",
        label="DRP Planner",
        id_keys=("plannerCode",),
        desc_keys=("plannerName", "plannerCode"),
        drop_incomplete=True,
    ),
    "FC": FieldMapping(
        field_id="FC",
        label="FC Planner",
        id_keys=("plannerCode",),
        desc_keys=("plannerName", "plannerCode"),
        drop_incomplete=True,
    ),
    "Office": FieldMapping(
        field_id="Office",
        label="Office",
        id_keys=("officeCode", "code"),
        desc_keys=("officeName", "name", "description"),
        drop_incomplete=True,
    ),
    "POStatus": FieldMapping(
        field_id="POStatus",
        label="Status",
        id_keys=("statusCode", "code"),
        desc_keys=("statusDescription", "description"),
        active_key="isActive",
        drop_incomplete=True,
    ),
}
# The production-schedule and POs-paid warehouse dropdowns share the DOM endpoint
FIELD_MAPPINGS["Warehouse"] = replace(FIELD_MAPPINGS["Whse"], field_id="Warehouse")


def extract_records(raw: Any, array_keys: Sequence[str] = COMMON_ARRAY_KEYS) -> list[Any]:
    """Find the list of records inside a gateway response; ``[]`` when there is none."""

    if isinstance(raw, list):
        return raw
    if not isinstance(raw, Mapping):
        return []

    for key in array_keys:
        value = raw.get(key)
        if isinstance(value, list) and value:
            return value

    for key, value in raw.items():
        if isinstance(value, list):
            logger.bind(key=key).debug("records_found_in_unlisted_key")
            return value

    return []


def _first_present(record: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = record.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def to_filter_values(
    mapping: FieldMapping, records: Iterable[Any]
) -> list[FilterValue]:
    """Map raw gateway records onto ``FilterValue`` using the field's declared keys."""

    values: list[FilterValue] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            continue
        if mapping.active_key and record.get(mapping.active_key) is False:
            continue

        filter_id = _first_present(record, mapping.id_keys)
        description = ""
        if mapping.compose_name:
            first_keys, last_keys = mapping.compose_name
            description = " ".join(
                part for part in (_first_present(record, first_keys), _first_present(record, last_keys)) if part
            )
        if not description:
            description = _first_present(record, mapping.desc_keys)

        if mapping.drop_incomplete and not (filter_id and description):
            continue
        if not filter_id:
            filter_id = f"{mapping.fallback_prefix or mapping.field_id.lower()}_{index}"
        if not description:
            description = filter_id

        values.append(
            FilterValue(field_id=mapping.field_id, filter_id=filter_id, filter_desc=description)
        )
    return values


def normalize_filter_values(field_id: str, raw: Any) -> list[FilterValue]:
    """Extract and map a raw response for ``field_id``; never raises on bad shapes."""

    mapping = FIELD_MAPPINGS.get(field_id)
    if mapping is None:
        return []
    return to_filter_values(mapping, extract_records(raw, mapping.probe_keys))
