from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import TimeUnit


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_API_ prefix.
    For example:
        - CRPT_API_REQUEST_LIMIT=5
        - CRPT_API_WINDOW_UNIT=MINUTES
        - CRPT_API_BASE_URL=https://sandbox.example/v1

    Alternatively, settings can be provided programmatically:
        client = CrptApiClient(time_unit=TimeUnit.SECONDS, request_limit=5)
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        case_sensitive=False,
        extra="forbid",
    )

    base_url: str = Field(
        default="https://api.crpt.ru/v1",
        description="Registration API root; documents are POSTed to {base_url}/documents",
    )

    request_limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of requests per window",
    )

    window_count: int = Field(
        default=1,
        ge=1,
        description="Window length, in window_unit units",
    )

    window_unit: TimeUnit = Field(
        default=TimeUnit.SECONDS,
        description="Time unit of the rate limiting window",
    )

    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="TCP/TLS connect timeout",
    )

    read_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for reading the API response",
    )

    user_agent: str = Field(
        default="CrptApi/1.0",
        description="User-Agent header sent with every request",
    )

    @property
    def window_seconds(self) -> float:
        return self.window_unit.to_seconds(self.window_count)
