"""Dropdown filter resolution: static field lists, cached value lookups, fallbacks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from loguru import logger

from inquiry.core.cache import FilterValueCache
from inquiry.core.config import settings
from inquiry.core.errors import GatewayError
from inquiry.schemas.filters import FilterField, FilterValue, GatewayListEnvelope
from inquiry.services import gateway
from inquiry.services.normalize import normalize_filter_values


class Gateway(Protocol):
    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any: ...

    async def post(self, path: str, payload: dict[str, Any]) -> Any: ...


SCREEN_FIELDS: dict[str, list[FilterField]] = {
    "po-items": [
        FilterField(field_id="Buyno", field_desc="Buyer"),
        FilterField(field_id="pomVendorNum", field_desc="Vendor"),
        FilterField(field_id="Staic", field_desc="Status"),
        FilterField(field_id="Whse", field_desc="Warehouse"),
    ],
    "production-schedule": [
        FilterField(field_id="Item", field_desc="Item"),
        FilterField(field_id="Vendor", field_desc="Vendor"),
        FilterField(field_id="Warehouse", field_desc="Warehouse"),
        FilterField(field_id="DRP", field_desc="DRP Planner"),
        FilterField(field_id="FC", field_desc="FC Planner"),
        FilterField(field_id="Office", field_desc="Office"),
        FilterField(field_id="ProductionResource", field_desc="Production Resource"),
        FilterField(field_id="ItemClass", field_desc="Item Class"),
    ],
    "pos-paid": [
        FilterField(field_id="Warehouse", field_desc="Warehouse"),
        FilterField(field_id="Vendor", field_desc="Vendor"),
        FilterField(field_id="POStatus", field_desc="Status"),
    ],
}


def _static(field_id: str, pairs: Iterable[tuple[str, str]]) -> list[FilterValue]:
    return [FilterValue(field_id=field_id, filter_id=code, filter_desc=desc) for code, desc in pairs]


@dataclass(frozen=True)
class FilterSource:
    """Where one field's values come from and what to show if that fails."""

    path: str | None
    params: dict[str, str] | None = None
    static: tuple[tuple[str, str], ...] = ()
    fallback: tuple[tuple[str, str], ...] = ()


FILTER_SOURCES: dict[str, FilterSource] = {
    "Buyno": FilterSource(gateway.BUYERS_PATH),
    "pomVendorNum": FilterSource(gateway.DOM_VENDORS_PATH, params={"vhsName": settings.VHS_NAME}),
    "Staic": FilterSource(gateway.DOM_STATUSES_PATH),
    "Whse": FilterSource(gateway.WAREHOUSES_PATH),
    "Warehouse": FilterSource(gateway.WAREHOUSES_PATH),
    "Vendor": FilterSource(gateway.VENDORS_PATH, params={"vhsName": settings.VHS_NAME.lower()}),
    "ItemClass": FilterSource(gateway.ITEM_CLASSES_PATH),
    "DRP": FilterSource(
        gateway.DRP_PLANNERS_PATH,
        fallback=(
            ("DRP001", "DRP Planner Alpha"),
            ("DRP002", "DRP Planner Beta"),
            ("DRP003", "DRP Planner Gamma"),
            ("DRP004", "DRP Planner Delta"),
            ("DRP005", "DRP Planner Epsilon"),
        ),
    ),
    "FC": FilterSource(gateway.FC_PLANNERS_PATH),
    "Office": FilterSource(
        gateway.OFFICES_PATH,
        params={"vhsName": settings.VHS_NAME, "userName": settings.REPORT_USER},
        fallback=(
            ("AFI", "Ashley Furniture Industries"),
            ("HOM", "Home Office"),
            ("MFG", "Manufacturing"),
        ),
    ),
    # The production-resource endpoint is not published yet; the screen offers one option
    "ProductionResource": FilterSource(None, static=(("ALL", "ALL Production Resource"),)),
    "POStatus": FilterSource(
        gateway.PO_STATUSES_PATH,
        fallback=(
            ("10", "Cfm Required"),
            ("20", "On-Order"),
            ("30", "In-Transit"),
            ("35", "Partial RcToStk"),
            ("40", "Rc. to Stk."),
            ("50", "Paid"),
        ),
    ),
}


class FilterValueService:
    """Resolves dropdown values, caching only fetches that actually succeeded."""

    def __init__(self, client: Gateway, cache: FilterValueCache) -> None:
        self.client = client
        self.cache = cache

    @staticmethod
    def get_filter_fields(screen: str) -> list[FilterField]:
        return list(SCREEN_FIELDS.get(screen, []))

    async def _fetch(self, field_id: str, source: FilterSource) -> list[FilterValue]:
        raw = await self.client.get(source.path, params=source.params)
        if isinstance(raw, dict):
            envelope = GatewayListEnvelope.model_validate(raw)
            if envelope.success is False:
                raise GatewayError(source.path, envelope.message or "gateway reported failure")
        return normalize_filter_values(field_id, raw)

    async def get_filter_values(self, field_id: str) -> tuple[list[FilterValue], bool]:
        """Return ``(values, served_from_cache)`` for one field."""

        cached = await self.cache.aget(field_id)
        if cached is not None:
            logger.bind(field_id=field_id, count=len(cached)).debug("filter_cache_hit")
            return [FilterValue.model_validate(item) for item in cached], True

        source = FILTER_SOURCES.get(field_id)
        if source is None:
            logger.bind(field_id=field_id).warning("filter_field_unknown")
            return [], False

        if source.path is None:
            return _static(field_id, source.static), False

        logger.bind(field_id=field_id).debug("filter_cache_miss")
        try:
            values = await self._fetch(field_id, source)
        except GatewayError as exc:
            logger.bind(field_id=field_id, error=str(exc)).warning("filter_fetch_failed")
            # Fallbacks are shown but never cached; the next request retries the gateway
            return _static(field_id, source.fallback), False

        await self.cache.aset(field_id, [value.model_dump() for value in values])
        return values, False

    async def get_many(self, field_ids: Iterable[str]) -> dict[str, list[FilterValue]]:
        """Fetch several fields concurrently; one field failing never sinks the batch."""

        field_ids = list(dict.fromkeys(field_ids))
        results = await asyncio.gather(
            *(self._guarded(field_id) for field_id in field_ids)
        )
        return dict(zip(field_ids, results))

    async def _guarded(self, field_id: str) -> list[FilterValue]:
        try:
            values, _ = await self.get_filter_values(field_id)
        except Exception as exc:  # noqa: BLE001 - one dropdown must not blank the screen
            logger.bind(field_id=field_id, error=repr(exc)).exception("filter_values_unexpected_error")
            return []
        return values

    async def get_screen_values(self, screen: str) -> dict[str, list[FilterValue]]:
        field_ids = [field.field_id for field in self.get_filter_fields(screen) if field.field_id in FILTER_SOURCES]
        return await self.get_many(field_ids)
