"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed settings exposed via dependency injection throughout the app."""

    # Read .env with BOM tolerance; case-sensitive keys
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=True,
    )

    APP_NAME: str = "Procurement Inquiry API"
    ENV: str = "dev"  # dev | staging | prod
    DEBUG: bool = True

    # CORS
    CORS_ALLOWED_ORIGINS: list[str] = Field(default_factory=list)

    # Backend REST gateway
    GATEWAY_BASE_URL: str = "http://127.0.0.1:8080"
    GATEWAY_ENVIRONMENT: str = "afi"
    GATEWAY_TIMEOUT_SEC: float = 10.0
    # "live" talks to the gateway, "mock" serves the development data set
    GATEWAY_MODE: str = "live"

    # Identity passed through to the gateway and the legacy report creator
    VHS_NAME: str = "MASTERYY"
    DEFAULT_USER: str = "SYSTEM"
    REPORT_VHS_NAME: str = "AFI"
    REPORT_ENVIRONMENT_CODE: str = "AFI"
    REPORT_USER: str = "system"
    REPORT_CREATOR_URL: str = "/ReportsNET/ReportCreator/ReportCreatorNETWaiting.aspx?Transfer=1"

    # Dropdown values change rarely; 5 minutes matches the screens' refresh cadence
    FILTER_CACHE_TTL_SECONDS: int = 300

    # Redis Cache Configuration (optional - the in-memory tier always works)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str | None = None
    REDIS_ENABLED: bool = False

    # Controls how many workbook builds can run in worker threads at once.
    EXPORT_MAX_CONCURRENCY: int = 4
    EXPORT_OP_TIMEOUT_SEC: float = 30
    # See inquiry.core.rate_limit.limiter for syntax.
    EXPORT_RATE: str = "10/minute"

    MAX_BODY_BYTES: int = 1 * 1024 * 1024  # 1 MB
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 500

    # Distinct X-Search-Session keys remembered before the oldest are forgotten
    SEARCH_SESSIONS_MAX: int = 1000

    LOG_LEVEL: str = "INFO"

    @property
    def is_mock_gateway(self) -> bool:
        return self.GATEWAY_MODE.lower() == "mock"


settings = Settings()
