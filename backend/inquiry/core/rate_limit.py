"""Rate limiting for the export endpoints, backed by SlowAPI."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address


def export_client_key(request: Request) -> str:
    """Throttle per inquiry user when the screen identifies one, else per address."""

    user_code = request.headers.get("X-User-Code")
    if user_code:
        return f"user:{user_code}"
    return get_remote_address(request)


limiter = Limiter(key_func=export_client_key)


def init_rate_limiter(app: FastAPI) -> None:
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    async def export_throttled(request: Request, exc: RateLimitExceeded):  # type: ignore[unused-arg]
        return JSONResponse(
            status_code=429,
            content={"detail": "Too many export requests. Please wait before retrying."},
        )

    app.add_exception_handler(RateLimitExceeded, export_throttled)
