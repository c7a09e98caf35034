"""Server-side sorting and paging of search results."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


def _field(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    if isinstance(record, BaseModel):
        if key in type(record).model_fields:
            return getattr(record, key)
        # camelCase sort keys coming straight from the screens
        for name, info in type(record).model_fields.items():
            if info.alias == key:
                return getattr(record, name)
        return (record.model_extra or {}).get(key)
    return getattr(record, key, None)


def _sort_key(value: Any) -> tuple[int, Any]:
    # Mixed numbers and strings compare as strings so a bad row cannot break the sort
    if isinstance(value, str):
        return (1, value.lower())
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, str(value).lower())


def sort_records(records: Sequence[T], sort_by: str, descending: bool = False) -> list[T]:
    """Stable sort on one key with ``None`` always last, whatever the direction."""

    present = [r for r in records if _field(r, sort_by) is not None]
    missing = [r for r in records if _field(r, sort_by) is None]
    kinds = {_sort_key(_field(r, sort_by))[0] for r in present}
    if len(kinds) > 1:
        key = lambda r: str(_field(r, sort_by)).lower()  # noqa: E731
    else:
        key = lambda r: _sort_key(_field(r, sort_by))  # noqa: E731
    return sorted(present, key=key, reverse=descending) + missing


def shape_results(
    records: Sequence[T],
    sort_by: str | None = None,
    descending: bool = False,
    page: int = 1,
    page_size: int = 50,
) -> dict[str, Any]:
    """Sort then page ``records``; ``page`` is 1-based and out-of-range pages are empty."""

    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    ordered = sort_records(records, sort_by, descending) if sort_by else list(records)
    start = (page - 1) * page_size
    return {
        "total": len(ordered),
        "page": page,
        "page_size": page_size,
        "items": ordered[start : start + page_size],
    }
