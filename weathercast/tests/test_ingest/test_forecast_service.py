"""Tests for the forecast service with mocked provider clients."""

from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest

from weathercast.config.schema import AppConfig, HttpConfig, Provider
from weathercast.ingest.errors import ForecastFetchError, ForecastParseError
from weathercast.ingest.forecast_service import ForecastService, build_service
from weathercast.ingest.owm_client import OpenWeatherMapClient
from weathercast.ingest.weatherapi_client import WeatherApiClient
from weathercast.models.forecast import SelectionRequest


def _service(client, provider: Provider, now: datetime) -> ForecastService:
    return ForecastService(client, provider, tz=UTC, clock=lambda tz: now)


class TestWeatherApiReport:
    def test_selects_today_and_future(self, weatherapi_payload: dict, now: datetime):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.return_value = weatherapi_payload

        service = _service(client, Provider.WEATHERAPI, now)
        report = service.get_report(SelectionRequest("London", 3))

        client.get_forecast.assert_called_once_with("London", 3)
        assert [d.calendar_date for d in report.days] == [
            date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3),
        ]
        today = report.days[0]
        assert today.is_today
        assert [f"{e.local_time:%H:%M}" for e in today.entries] == ["09:00", "10:00"]
        assert [e.is_high_precipitation for e in today.entries] == [True, False]
        assert report.total_days == 4
        assert report.requested_days == 3
        assert report.generated_at == now
        assert not report.is_short

    def test_fewer_days_than_requested(self, weatherapi_payload: dict, now: datetime):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.return_value = weatherapi_payload

        report = _service(client, Provider.WEATHERAPI, now).get_report(
            SelectionRequest("London", 7)
        )
        assert report.available_days == 3
        assert report.is_short

    def test_stale_payload_gives_empty_report(self, weatherapi_payload: dict):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.return_value = weatherapi_payload
        later = datetime(2024, 6, 10, 12, 0).astimezone()

        report = _service(client, Provider.WEATHERAPI, later).get_report(
            SelectionRequest("London", 3)
        )
        assert report.is_empty
        assert report.location.name == "London"

    def test_fetch_error_propagates(self, now: datetime):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.side_effect = ForecastFetchError("down", status_code=500)

        with pytest.raises(ForecastFetchError):
            _service(client, Provider.WEATHERAPI, now).get_report(
                SelectionRequest("London", 1)
            )

    def test_parse_error_propagates(self, now: datetime):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.return_value = {"unexpected": True}

        with pytest.raises(ForecastParseError):
            _service(client, Provider.WEATHERAPI, now).get_report(
                SelectionRequest("London", 1)
            )

    def test_clock_gets_configured_zone(self, weatherapi_payload: dict, now: datetime):
        client = MagicMock(spec=WeatherApiClient)
        client.get_forecast.return_value = weatherapi_payload
        clock = MagicMock(return_value=now)
        tz = AppConfig(timezone="Europe/London").tzinfo()

        ForecastService(client, Provider.WEATHERAPI, tz=tz, clock=clock).get_report(
            SelectionRequest("London", 1)
        )
        clock.assert_called_once_with(tz)


class TestOpenWeatherMapReport:
    def test_groups_flat_list(self, owm_payload: dict, now: datetime):
        client = MagicMock(spec=OpenWeatherMapClient)
        client.get_forecast.return_value = owm_payload

        report = _service(client, Provider.OPENWEATHERMAP, now).get_report(
            SelectionRequest("Delhi", 5)
        )
        assert report.current is None
        assert report.available_days == 5
        assert report.total_days == 6
        today = report.days[0]
        # 03:00 is more than an hour before 08:30
        assert [f"{e.local_time:%H:%M}" for e in today.entries] == ["09:00", "12:00"]
        assert today.entries[0].is_high_precipitation


class TestBuildService:
    def test_weatherapi_client(self):
        service = build_service(AppConfig(), "key")
        assert isinstance(service.client, WeatherApiClient)
        assert service.client.base_url == "https://api.weatherapi.com"
        assert service.tz is None

    def test_openweathermap_client(self):
        config = AppConfig(
            provider=Provider.OPENWEATHERMAP,
            timezone="Asia/Kolkata",
            http=HttpConfig(timeout_seconds=5.0, max_retries=0),
        )
        service = build_service(config, "key")
        assert isinstance(service.client, OpenWeatherMapClient)
        assert service.client.timeout == 5.0
        assert service.client.max_retries == 0
        assert service.client.api_key == "key"
        assert str(service.tz) == "Asia/Kolkata"

    def test_base_url_override(self):
        config = AppConfig(http=HttpConfig(base_url="http://localhost:8080"))
        service = build_service(config, "key")
        assert service.client.base_url == "http://localhost:8080"


class TestSystemZoneReport:
    def test_openweathermap_grouping_follows_dst(self, london_system_zone):
        late = int(datetime(2024, 10, 27, 23, 0, tzinfo=UTC).timestamp())
        payload = {
            "city": {"name": "London", "country": "GB"},
            "list": [
                {"dt": late, "main": {"temp": 9.0}, "weather": [{"description": "mist"}]},
            ],
        }
        client = MagicMock(spec=OpenWeatherMapClient)
        client.get_forecast.return_value = payload
        # what local_now() returns with no zone configured: a frozen +01:00 offset
        now = datetime(2024, 10, 26, 11, 0, tzinfo=UTC).astimezone()

        service = ForecastService(client, Provider.OPENWEATHERMAP, clock=lambda tz: now)
        report = service.get_report(SelectionRequest("London", 5))

        assert [d.calendar_date for d in report.days] == [date(2024, 10, 27)]
        assert f"{report.days[0].entries[0].local_time:%H:%M}" == "23:00"
