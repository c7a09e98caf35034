"""Exception hierarchy and HTTP translation for inquiry failures."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger


class InquiryError(Exception):
    """Base class for errors raised while serving an inquiry screen."""

    user_message = "Request failed. Please try again."


class GatewayError(InquiryError):
    """The backend gateway could not satisfy a request."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class GatewayUnavailableError(GatewayError):
    """No response was received (connection refused, timeout, DNS)."""

    user_message = "Network error: Unable to reach the server"


class GatewayStatusError(GatewayError):
    def __init__(self, url: str, status_code: int, reason: str = ""):
        super().__init__(url, f"Gateway returned {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Search failed: {self.status_code} - {self.reason}".rstrip(" -")


class GatewayHTMLResponseError(GatewayError):
    """The gateway (or a proxy in front of it) answered with an HTML page."""

    def __init__(self, url: str, preview: str = ""):
        super().__init__(url, "API returned HTML instead of JSON")
        self.preview = preview


class GatewaySearchError(GatewayError):
    """The gateway answered but flagged the search as unsuccessful."""

    def __init__(self, url: str, error_message: str | None):
        super().__init__(url, error_message or "API request failed")
        self.error_message = error_message or "API request failed"


class SearchValidationError(InquiryError):
    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class StaleSearchError(InquiryError):
    """A newer search in the same session started before this one finished."""

    def __init__(self, session_key: str, ticket: int, latest: int):
        super().__init__(f"search {ticket} superseded by {latest} in session {session_key}")
        self.session_key = session_key
        self.ticket = ticket
        self.latest = latest


def _gateway_error_response(request: Request, exc: GatewayError) -> JSONResponse:
    logger.bind(path=str(request.url.path), gateway_url=exc.url, error=str(exc)).error(
        "gateway_failure"
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.user_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate inquiry errors into the HTTP responses the screens expect."""

    async def on_gateway_error(request: Request, exc: GatewayError):
        return _gateway_error_response(request, exc)

    async def on_validation_error(request: Request, exc: SearchValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": "Search criteria are invalid.", "errors": exc.messages},
        )

    async def on_stale_search(request: Request, exc: StaleSearchError):
        logger.bind(session=exc.session_key, ticket=exc.ticket, latest=exc.latest).info(
            "search_discarded_stale"
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Search superseded by a newer request", "sequence": exc.ticket},
        )

    app.add_exception_handler(GatewayError, on_gateway_error)
    app.add_exception_handler(SearchValidationError, on_validation_error)
    app.add_exception_handler(StaleSearchError, on_stale_search)
