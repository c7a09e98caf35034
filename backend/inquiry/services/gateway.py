"""Async client for the backend inquiry REST gateway."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from inquiry.core.config import settings
from inquiry.core.errors import (
    GatewayHTMLResponseError,
    GatewayStatusError,
    GatewayUnavailableError,
)

WAREHOUSES_PATH = "/api/v1/inquiry-common/warehouses"
BUYERS_PATH = "/api/v1/inquiry-common/buyers"
DOM_VENDORS_PATH = "/api/v1/inquiry-common/dom-vendors"
DOM_STATUSES_PATH = "/api/v1/inquiry-common/dom-statuses"
ITEM_CLASSES_PATH = "/api/v1/inquiry-common/class-items"
DRP_PLANNERS_PATH = "/api/v1/inquiry-common/drp-planners"
FC_PLANNERS_PATH = "/api/v1/inquiry-common/fc-planners"
OFFICES_PATH = "/api/v1/inquiry-common/offices"
VENDORS_PATH = "/api/v1/inquiry-common/vendors"
PO_STATUSES_PATH = "/api/v1/inquiry-common/po-statuses"


def po_items_search_path(environment: str) -> str:
    return f"/api/po-item-inquiry-dom/{environment}/search"


def production_schedule_search_path(environment: str) -> str:
    return f"/api/ProductionSchedule/{environment}/search"


def pos_paid_search_path(environment: str) -> str:
    return f"/api/POsPaid/{environment}/search"


_HTML_MARKER = "<!DOCTYPE html>"


def _looks_like_html(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    if "text/html" in content_type:
        return True
    return _HTML_MARKER.lower() in response.text[:1024].lower()


class GatewayClient:
    """Thin wrapper over ``httpx.AsyncClient`` that speaks the gateway's conventions.

    GET requests always carry the ``environment`` query parameter; POST search
    requests carry it in the path instead. HTML bodies (login pages, proxy error
    pages) are rejected rather than parsed.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        environment: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.environment = environment or settings.GATEWAY_ENVIRONMENT
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.GATEWAY_BASE_URL,
            timeout=timeout or settings.GATEWAY_TIMEOUT_SEC,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        query = {"environment": self.environment, **(params or {})}
        return await self._send("GET", path, params=query)

    async def post(self, path: str, payload: dict[str, Any]) -> Any:
        return await self._send("POST", path, json=payload)

    async def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.bind(method=method, path=path, params=kwargs.get("params")).info(
            "gateway_request"
        )
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.bind(method=method, path=path, error=repr(exc)).error("gateway_unreachable")
            raise GatewayUnavailableError(path, "No response received") from exc

        logger.bind(
            method=method,
            path=path,
            status=response.status_code,
            content_type=response.headers.get("content-type"),
        ).info("gateway_response")

        if _looks_like_html(response):
            preview = response.text[:300]
            logger.bind(path=path, preview=preview).error("gateway_html_response")
            raise GatewayHTMLResponseError(path, preview)

        if not response.is_success:
            logger.bind(path=path, status=response.status_code, body=response.text[:500]).error(
                "gateway_error_status"
            )
            raise GatewayStatusError(path, response.status_code, response.reason_phrase)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayStatusError(path, response.status_code, "invalid JSON body") from exc


_gateway_client: GatewayClient | None = None


def get_gateway_client() -> GatewayClient:
    """Process-wide client, created lazily and closed on shutdown."""
    global _gateway_client
    if _gateway_client is None:
        _gateway_client = GatewayClient()
    return _gateway_client


async def close_gateway_client() -> None:
    global _gateway_client
    if _gateway_client is not None:
        await _gateway_client.aclose()
        _gateway_client = None
