import json

import httpx
import pytest

from inquiry.core.errors import (
    GatewayHTMLResponseError,
    GatewayStatusError,
    GatewayUnavailableError,
)
from inquiry.services.gateway import GatewayClient


def _client(handler) -> GatewayClient:
    return GatewayClient("http://gateway.test", transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_html_body_is_rejected_not_parsed():
    def handler(request):
        return httpx.Response(
            200,
            text="<!DOCTYPE html><html><body>Sign in</body></html>",
            headers={"content-type": "text/html"},
        )

    with pytest.raises(GatewayHTMLResponseError) as excinfo:
        await _client(handler).get("/api/v1/inquiry-common/buyers")

    assert "Sign in" in excinfo.value.preview


@pytest.mark.anyio
async def test_html_marker_detected_even_with_json_content_type():
    def handler(request):
        return httpx.Response(
            200, content=b"<!doctype html><p>proxy</p>", headers={"content-type": "application/json"}
        )

    with pytest.raises(GatewayHTMLResponseError):
        await _client(handler).post("/api/POsPaid/afi/search", {})


@pytest.mark.anyio
async def test_error_status_surfaces_code_and_reason():
    def handler(request):
        return httpx.Response(500, json={"error": "boom"})

    with pytest.raises(GatewayStatusError) as excinfo:
        await _client(handler).get("/api/v1/inquiry-common/warehouses")

    assert excinfo.value.status_code == 500
    assert excinfo.value.user_message == "Search failed: 500 - Internal Server Error"


@pytest.mark.anyio
async def test_transport_failure_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GatewayUnavailableError) as excinfo:
        await _client(handler).get("/api/v1/inquiry-common/warehouses")

    assert excinfo.value.user_message == "Network error: Unable to reach the server"


@pytest.mark.anyio
async def test_get_adds_environment_and_post_sends_json():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": []})

    client = _client(handler)
    await client.get("/api/v1/inquiry-common/offices", params={"vhsName": "MASTERYY"})
    await client.post("/api/po-item-inquiry-dom/afi/search", {"itemNumber": "ITM001"})

    assert seen[0].url.params["environment"] == "afi"
    assert seen[0].url.params["vhsName"] == "MASTERYY"
    assert seen[1].method == "POST"
    assert json.loads(seen[1].content) == {"itemNumber": "ITM001"}


@pytest.mark.anyio
async def test_empty_body_is_none():
    client = _client(lambda request: httpx.Response(204))
    assert await client.get("/api/v1/inquiry-common/fc-planners") is None
