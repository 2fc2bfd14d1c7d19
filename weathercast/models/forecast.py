"""Normalized forecast data models."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: int  # epoch seconds
    temperature: float  # Celsius
    condition_text: str
    precipitation_chance: float = 0.0  # percent, 0-100


@dataclass(frozen=True)
class DayBucket:
    """Entries sharing one calendar date, as supplied by a provider."""

    calendar_date: date
    entries: list[ForecastEntry] = field(default_factory=list)


@dataclass(frozen=True)
class SelectedEntry:
    entry: ForecastEntry
    local_time: datetime
    is_past: bool = False
    is_high_precipitation: bool = False

    @property
    def timestamp(self) -> int:
        return self.entry.timestamp

    @property
    def temperature(self) -> float:
        return self.entry.temperature

    @property
    def precipitation_chance(self) -> float:
        return self.entry.precipitation_chance

    @property
    def condition_text(self) -> str:
        return self.entry.condition_text


@dataclass(frozen=True)
class ForecastDay:
    calendar_date: date
    is_today: bool
    entries: list[SelectedEntry] = field(default_factory=list)

    @property
    def has_fallback(self) -> bool:
        """True when today's entries are the past-hours fallback."""
        return any(e.is_past for e in self.entries)


@dataclass(frozen=True)
class SelectionRequest:
    location: str
    requested_day_count: int  # caller clamps to the provider bound


@dataclass(frozen=True)
class LocationInfo:
    name: str
    country: str


@dataclass(frozen=True)
class CurrentConditions:
    temperature: float
    condition_text: str


@dataclass(frozen=True)
class ProviderForecast:
    """Provider response normalized to day buckets."""

    location: LocationInfo
    current: CurrentConditions | None
    days: list[DayBucket]

    @property
    def total_days(self) -> int:
        return len(self.days)


@dataclass(frozen=True)
class ForecastReport:
    location: LocationInfo
    current: CurrentConditions | None
    days: list[ForecastDay]
    total_days: int
    requested_days: int
    generated_at: datetime

    @property
    def available_days(self) -> int:
        return len(self.days)

    @property
    def is_empty(self) -> bool:
        return not self.days

    @property
    def is_short(self) -> bool:
        """Fewer days could be shown than were asked for."""
        return self.requested_days > self.available_days
