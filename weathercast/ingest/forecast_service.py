"""Forecast service: fetch, normalize and select one location's forecast."""

import logging
from collections.abc import Callable
from datetime import datetime, tzinfo

from weathercast.config.schema import AppConfig, Provider
from weathercast.ingest.adapters import ADAPTERS
from weathercast.ingest.owm_client import OWM_BASE_URL, OpenWeatherMapClient
from weathercast.ingest.provider_client import ProviderClient
from weathercast.ingest.weatherapi_client import (
    WEATHERAPI_BASE_URL,
    WeatherApiClient,
)
from weathercast.models.common import local_now
from weathercast.models.forecast import ForecastReport, SelectionRequest
from weathercast.selection.selector import select_forecast

logger = logging.getLogger(__name__)


class ForecastService:
    def __init__(
        self,
        client: ProviderClient,
        provider: Provider,
        tz: tzinfo | None = None,
        clock: Callable[[tzinfo | None], datetime] = local_now,
    ):
        self.client = client
        self.provider = provider
        self.tz = tz
        self.clock = clock

    def get_report(self, request: SelectionRequest) -> ForecastReport:
        """Fetch and select the forecast for one request.

        Raises ForecastError subclasses when the provider fails. A forecast
        with no current or future days is returned as an empty report.
        """
        now = self.clock(self.tz)
        raw = self.client.get_forecast(request.location, request.requested_day_count)
        forecast = ADAPTERS[self.provider](raw, self.tz)
        days = select_forecast(
            forecast.days, request.requested_day_count, now, self.tz
        )

        logger.info(
            "Forecast for %r: requested=%d available=%d provider_days=%d",
            request.location, request.requested_day_count,
            len(days), forecast.total_days,
        )
        if not days:
            logger.warning(
                "No current or future forecast days for %r", request.location
            )

        return ForecastReport(
            location=forecast.location,
            current=forecast.current,
            days=days,
            total_days=forecast.total_days,
            requested_days=request.requested_day_count,
            generated_at=now,
        )


def build_service(config: AppConfig, api_key: str) -> ForecastService:
    """Wire the client for the configured provider."""
    client_cls, base_url = {
        Provider.WEATHERAPI: (WeatherApiClient, WEATHERAPI_BASE_URL),
        Provider.OPENWEATHERMAP: (OpenWeatherMapClient, OWM_BASE_URL),
    }[config.provider]
    client = client_cls(
        api_key,
        base_url=config.http.base_url or base_url,
        timeout=config.http.timeout_seconds,
        max_retries=config.http.max_retries,
        retry_base_delay=config.http.retry_base_delay_seconds,
    )
    return ForecastService(client, config.provider, tz=config.tzinfo())
