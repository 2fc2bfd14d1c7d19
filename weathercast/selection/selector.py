"""Forecast selection: which days and hours are shown relative to now.

Rules:
- days before today (viewer's local date) are never shown
- at most ``requested_day_count`` days, earliest first
- today's entries older than one hour before ``now`` are dropped
- if that drops all of today's entries, the last few original entries are
  kept instead and flagged as past
- entries at or above the precipitation threshold are flagged

``requested_day_count`` must already be clamped to ``1..max`` by the caller.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from weathercast.models.common import to_local
from weathercast.models.forecast import (
    DayBucket,
    ForecastDay,
    ForecastEntry,
    SelectedEntry,
)

HIGH_PRECIPITATION_THRESHOLD = 40.0
RECENT_PAST_WINDOW = timedelta(hours=1)
FALLBACK_ENTRY_COUNT = 3


def select_forecast(
    days: Iterable[DayBucket],
    requested_day_count: int,
    now: datetime,
    tz: tzinfo | None = None,
) -> list[ForecastDay]:
    """Select the days and entries to display.

    ``now`` is an aware datetime; its date in ``tz`` is "today". ``tz`` is
    the viewer's zone; None means the system zone, applied per timestamp
    so DST changes inside the forecast window are followed. Returns an
    empty list when no day at or after today exists.
    """
    today = now.astimezone(tz).date()
    cutoff = now - RECENT_PAST_WINDOW

    upcoming = sorted(
        (d for d in days if d.calendar_date >= today),
        key=lambda d: d.calendar_date,
    )[:requested_day_count]

    selected: list[ForecastDay] = []
    for bucket in upcoming:
        is_today = bucket.calendar_date == today
        if is_today:
            entries = _select_today(bucket.entries, cutoff, tz)
        else:
            entries = [_mark(e, tz) for e in bucket.entries]
        selected.append(
            ForecastDay(
                calendar_date=bucket.calendar_date,
                is_today=is_today,
                entries=entries,
            )
        )
    return selected


def select_forecast_entries(
    entries: Iterable[ForecastEntry],
    requested_day_count: int,
    now: datetime,
    tz: tzinfo | None = None,
) -> list[ForecastDay]:
    """Same as select_forecast, for a flat list of timestamped entries."""
    return select_forecast(
        group_by_local_date(entries, tz), requested_day_count, now, tz
    )


def group_by_local_date(
    entries: Iterable[ForecastEntry], tz: tzinfo | None
) -> list[DayBucket]:
    """Group entries into day buckets by their local calendar date.

    Input order is kept within each bucket; buckets come out in date order.
    """
    grouped: dict[date, list[ForecastEntry]] = {}
    for entry in entries:
        day = to_local(entry.timestamp, tz).date()
        grouped.setdefault(day, []).append(entry)
    return [
        DayBucket(calendar_date=day, entries=grouped[day])
        for day in sorted(grouped)
    ]


def is_high_precipitation(chance: float) -> bool:
    return chance >= HIGH_PRECIPITATION_THRESHOLD


def _select_today(
    entries: list[ForecastEntry], cutoff: datetime, tz: tzinfo | None
) -> list[SelectedEntry]:
    recent = [e for e in entries if to_local(e.timestamp, tz) >= cutoff]
    if recent or not entries:
        return [_mark(e, tz) for e in recent]
    # Nothing left for today: show the tail of the day, oldest first.
    return [_mark(e, tz, is_past=True) for e in entries[-FALLBACK_ENTRY_COUNT:]]


def _mark(
    entry: ForecastEntry, tz: tzinfo | None, is_past: bool = False
) -> SelectedEntry:
    return SelectedEntry(
        entry=entry,
        local_time=to_local(entry.timestamp, tz),
        is_past=is_past,
        is_high_precipitation=is_high_precipitation(entry.precipitation_chance),
    )
