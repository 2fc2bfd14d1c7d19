"""Provider adapters: normalize each provider's JSON into day buckets."""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo

from pydantic import ValidationError

from weathercast.config.schema import Provider
from weathercast.ingest.errors import ForecastParseError
from weathercast.ingest.schemas import (
    OpenWeatherMapResponse,
    WeatherApiForecastDay,
    WeatherApiResponse,
)
from weathercast.models.forecast import (
    CurrentConditions,
    DayBucket,
    ForecastEntry,
    LocationInfo,
    ProviderForecast,
)
from weathercast.selection.selector import group_by_local_date

logger = logging.getLogger(__name__)


def parse_weatherapi(raw: dict, tz: tzinfo | None = None) -> ProviderForecast:
    """WeatherAPI.com already groups hours into day buckets."""
    try:
        resp = WeatherApiResponse.model_validate(raw)
    except ValidationError as e:
        logger.error("WeatherAPI response failed validation: %s", e)
        raise ForecastParseError(f"Unexpected WeatherAPI response: {e}") from e

    days = [
        DayBucket(
            calendar_date=_weatherapi_date(day),
            entries=[
                ForecastEntry(
                    timestamp=h.time_epoch,
                    temperature=h.temp_c,
                    condition_text=h.condition.text,
                    precipitation_chance=h.chance_of_rain or 0.0,
                )
                for h in day.hour
            ],
        )
        for day in resp.forecast.forecastday
    ]
    return ProviderForecast(
        location=LocationInfo(name=resp.location.name, country=resp.location.country),
        current=CurrentConditions(
            temperature=resp.current.temp_c,
            condition_text=resp.current.condition.text,
        ),
        days=days,
    )


def parse_openweathermap(raw: dict, tz: tzinfo | None = None) -> ProviderForecast:
    """OpenWeatherMap returns a flat 3-hourly list; group it by local date."""
    try:
        resp = OpenWeatherMapResponse.model_validate(raw)
    except ValidationError as e:
        logger.error("OpenWeatherMap response failed validation: %s", e)
        raise ForecastParseError(f"Unexpected OpenWeatherMap response: {e}") from e

    entries = [
        ForecastEntry(
            timestamp=item.dt,
            temperature=item.main.temp,
            condition_text=item.weather[0].description,
            precipitation_chance=float(round((item.pop or 0.0) * 100.0)),
        )
        for item in resp.items
    ]
    return ProviderForecast(
        location=LocationInfo(name=resp.city.name, country=resp.city.country),
        current=None,
        days=group_by_local_date(entries, tz),
    )


def _weatherapi_date(day: WeatherApiForecastDay) -> date:
    # The bucket's own date names the day; date_epoch is midnight UTC of it.
    if day.day is not None:
        return day.day
    return datetime.fromtimestamp(day.date_epoch, tz=UTC).date()


ADAPTERS: dict[Provider, Callable[[dict, tzinfo | None], ProviderForecast]] = {
    Provider.WEATHERAPI: parse_weatherapi,
    Provider.OPENWEATHERMAP: parse_openweathermap,
}
