"""Pydantic v2 schemas for provider forecast responses.

Only the fields the adapters read are declared; everything else is ignored.
"""

from datetime import date

from pydantic import BaseModel, Field


class _ProviderModel(BaseModel):
    model_config = {"extra": "ignore"}


# ── WeatherAPI.com /v1/forecast.json ────────────────────────────


class WeatherApiCondition(_ProviderModel):
    text: str


class WeatherApiLocation(_ProviderModel):
    name: str
    country: str


class WeatherApiCurrent(_ProviderModel):
    temp_c: float
    condition: WeatherApiCondition


class WeatherApiHour(_ProviderModel):
    time_epoch: int
    temp_c: float
    chance_of_rain: float | None = None
    condition: WeatherApiCondition


class WeatherApiForecastDay(_ProviderModel):
    day: date | None = Field(default=None, alias="date")
    date_epoch: int
    hour: list[WeatherApiHour] = []


class WeatherApiForecast(_ProviderModel):
    forecastday: list[WeatherApiForecastDay] = []


class WeatherApiResponse(_ProviderModel):
    location: WeatherApiLocation
    current: WeatherApiCurrent
    forecast: WeatherApiForecast


# ── OpenWeatherMap /data/2.5/forecast ───────────────────────────


class OwmMain(_ProviderModel):
    temp: float


class OwmWeather(_ProviderModel):
    description: str


class OwmItem(_ProviderModel):
    dt: int
    main: OwmMain
    weather: list[OwmWeather] = Field(min_length=1)
    pop: float | None = None


class OwmCity(_ProviderModel):
    name: str
    country: str = ""


class OpenWeatherMapResponse(_ProviderModel):
    city: OwmCity
    items: list[OwmItem] = Field(default=[], alias="list")
