"""Per-provider defaults: fallback location and forecast day bound."""

from dataclasses import dataclass

from weathercast.config.schema import AppConfig, Provider


@dataclass(frozen=True)
class ProviderDefaults:
    location: str
    max_days: int


PROVIDER_DEFAULTS: dict[Provider, ProviderDefaults] = {
    Provider.WEATHERAPI: ProviderDefaults(location="India", max_days=14),
    Provider.OPENWEATHERMAP: ProviderDefaults(location="Delhi", max_days=5),
}


def clamp_days(days: int | str | None, provider: Provider) -> int:
    """Clamp a requested day count to ``1..max_days`` for the provider.

    Missing or unparseable values fall back to 1.
    """
    try:
        n = int(days) if days is not None else 1
    except (TypeError, ValueError):
        n = 1
    return max(1, min(n, PROVIDER_DEFAULTS[provider].max_days))


def default_location(config: AppConfig) -> str:
    return config.default_location or PROVIDER_DEFAULTS[config.provider].location
