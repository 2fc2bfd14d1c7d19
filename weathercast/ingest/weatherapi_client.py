"""WeatherAPI.com forecast client."""

from weathercast.ingest.provider_client import ProviderClient

WEATHERAPI_BASE_URL = "https://api.weatherapi.com"


class WeatherApiClient(ProviderClient):
    name = "WeatherAPI"

    def __init__(self, api_key: str, base_url: str = WEATHERAPI_BASE_URL, **kwargs):
        super().__init__(api_key, base_url, **kwargs)

    def get_forecast(self, location: str, days: int) -> dict:
        """Fetch up to ``days`` days of hourly forecast, grouped by day."""
        params = {"key": self.api_key, "q": location, "days": days}
        return self._get_json("/v1/forecast.json", params, location)
