"""OpenWeatherMap 5 day / 3 hour forecast client."""

from weathercast.ingest.provider_client import ProviderClient

OWM_BASE_URL = "https://api.openweathermap.org"


class OpenWeatherMapClient(ProviderClient):
    name = "OpenWeatherMap"

    def __init__(self, api_key: str, base_url: str = OWM_BASE_URL, **kwargs):
        super().__init__(api_key, base_url, **kwargs)

    def get_forecast(self, location: str, days: int) -> dict:
        """Fetch the flat 3-hourly forecast list.

        The endpoint always returns five days; ``days`` is applied later by
        the selector.
        """
        params = {"q": location, "appid": self.api_key, "units": "metric"}
        return self._get_json("/data/2.5/forecast", params, location)
