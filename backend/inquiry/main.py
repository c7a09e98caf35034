"""Application entry point for the procurement inquiry API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from loguru import logger

from inquiry.api.routes.filters import router as filters_router
from inquiry.api.routes.po_items import router as po_items_router
from inquiry.api.routes.pos_paid import router as pos_paid_router
from inquiry.api.routes.production_schedule import router as production_schedule_router
from inquiry.core.cache import close_redis_client, get_redis_client
from inquiry.core.config import settings
from inquiry.core.errors import register_exception_handlers
from inquiry.core.logging import setup_logging
from inquiry.core.middleware import BodySizeLimitMiddleware, RequestContextLogMiddleware
from inquiry.core.rate_limit import init_rate_limiter
from inquiry.services.gateway import close_gateway_client, get_gateway_client

setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

init_rate_limiter(app)
register_exception_handlers(app)

app.add_middleware(RequestContextLogMiddleware)


def _cors_origins() -> list[str]:
    if settings.ENV == "prod":
        if not settings.CORS_ALLOWED_ORIGINS:
            raise RuntimeError("CORS_ALLOWED_ORIGINS must be configured for prod")
        return settings.CORS_ALLOWED_ORIGINS
    return settings.CORS_ALLOWED_ORIGINS or ["http://localhost:8080"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "X-Request-ID",
        "X-User-Code",
        "X-Search-Session",
    ],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)

app.add_middleware(BodySizeLimitMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.on_event("startup")
async def startup_event():
    """Open the gateway client and, when enabled, the shared Redis cache tier."""
    if not settings.is_mock_gateway:
        get_gateway_client()
    client = await get_redis_client()
    logger.bind(
        gateway=settings.GATEWAY_BASE_URL,
        gateway_mode=settings.GATEWAY_MODE,
        redis=client is not None,
    ).info("startup_complete")


@app.on_event("shutdown")
async def shutdown_event():
    await close_gateway_client()
    await close_redis_client()


@app.get("/api/healthz", tags=["system"], summary="Liveness probe")
def healthz() -> dict[str, str]:
    """Simple liveness probe that load balancers and monitors can call."""

    return {"status": "ok"}


app.include_router(filters_router, prefix="/api")
app.include_router(po_items_router, prefix="/api")
app.include_router(production_schedule_router, prefix="/api")
app.include_router(pos_paid_router, prefix="/api")
