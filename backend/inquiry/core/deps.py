from fastapi import Depends, Request

from inquiry.core.cache import filter_value_cache
from inquiry.core.config import settings
from inquiry.core.logging import user_code_ctx_var
from inquiry.services.filters import FilterValueService, Gateway
from inquiry.services.gateway import get_gateway_client
from inquiry.services.mock_data import MockGatewayClient

_mock_gateway = MockGatewayClient(environment=settings.GATEWAY_ENVIRONMENT)


def _current_user_code() -> str | None:
    user_code = user_code_ctx_var.get()
    return None if user_code in ("", "-") else user_code


def get_gateway() -> Gateway:
    if settings.is_mock_gateway:
        return _mock_gateway
    return get_gateway_client()


def get_filter_service(client: Gateway = Depends(get_gateway)) -> FilterValueService:
    return FilterValueService(client, filter_value_cache)


def get_search_session(request: Request) -> str | None:
    """Key grouping one screen's searches; only the newest response in a session is kept."""

    return request.headers.get("X-Search-Session") or None


def get_gateway_user() -> str:
    return _current_user_code() or settings.DEFAULT_USER
