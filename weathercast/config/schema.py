"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class Provider(StrEnum):
    WEATHERAPI = "weatherapi"
    OPENWEATHERMAP = "openweathermap"


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str | None = None  # None = the provider's public endpoint
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0.0)


class WebConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: Provider = Provider.WEATHERAPI
    api_key_env: str = "WEATHER_API_KEY"
    timezone: str | None = None  # None = system local zone
    default_location: str | None = None  # None = provider default
    default_days: int = Field(default=1, ge=1)
    http: HttpConfig = HttpConfig()
    web: WebConfig = WebConfig()

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v

    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None
