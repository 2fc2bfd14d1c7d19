"""Output formatters for forecast reports."""

import json

import click

from weathercast.models.forecast import ForecastReport, SelectedEntry

NO_FORECAST_MESSAGE = "No forecast data available for the requested period"
FALLBACK_NOTICE = "No future hours available for today. Showing last few hours:"
SHORT_FORECAST_NOTE = (
    "Note: Free WeatherAPI.com accounts typically provide only 3 days of "
    "forecast data."
)


def format_entry_line(e: SelectedEntry) -> str:
    """One hour as ``HH:MM - 21°C, 55%, Light rain``."""
    line = (
        f"{e.local_time:%H:%M} - {e.temperature:.0f}°C, "
        f"{e.precipitation_chance:.0f}%, {e.condition_text}"
    )
    if e.is_past:
        line += " (past)"
    return line


def format_report_text(report: ForecastReport, color: bool = True) -> str:
    """Terminal summary, optionally colored with ANSI styles."""

    def style(text: str, **kwargs) -> str:
        return click.style(text, **kwargs) if color else text

    header = style(f"{report.location.name}, {report.location.country}", bold=True)
    if report.current is not None:
        header += (
            f": {report.current.temperature:.0f}°C, "
            f"{report.current.condition_text}"
        )
    lines = [header]

    if report.is_empty:
        lines.append(NO_FORECAST_MESSAGE)
    for day in report.days:
        lines.append("")
        lines.append(f"Forecast for {day.calendar_date:%Y-%m-%d}:")
        if day.has_fallback:
            lines.append(FALLBACK_NOTICE)
        for e in day.entries:
            fg = "red" if e.is_high_precipitation else None
            lines.append(style(format_entry_line(e), fg=fg, dim=e.is_past or None))

    lines += [
        "",
        f"{style('Success', fg='green')}: Weather data fetched successfully!",
        f"Requested days: {report.requested_days}",
        f"Available future days: {report.available_days}",
        f"Total days in API response: {report.total_days}",
        f"Data fetched at: {report.generated_at:%Y-%m-%d %H:%M:%S}",
    ]
    if report.is_short:
        lines += [
            "",
            style(
                f"Warning: You requested {report.requested_days} days, but only "
                f"{report.available_days} future days are available.",
                fg="yellow",
            ),
            SHORT_FORECAST_NOTE,
        ]
    return "\n".join(lines)


def report_to_dict(report: ForecastReport) -> dict:
    current = None
    if report.current is not None:
        current = {
            "temp_c": report.current.temperature,
            "condition": report.current.condition_text,
        }
    return {
        "location": {
            "name": report.location.name,
            "country": report.location.country,
        },
        "current": current,
        "forecast_days": [
            {
                "date": f"{day.calendar_date:%Y-%m-%d}",
                "date_formatted": f"{day.calendar_date:%B %d, %Y}",
                "is_today": day.is_today,
                "hours": [
                    {
                        "time": f"{e.local_time:%H:%M}",
                        "timestamp": e.timestamp,
                        "temp_c": e.temperature,
                        "chance_of_rain": e.precipitation_chance,
                        "condition": e.condition_text,
                        "is_past": e.is_past,
                        "is_high_rain": e.is_high_precipitation,
                    }
                    for e in day.entries
                ],
            }
            for day in report.days
        ],
        "total_days": report.total_days,
        "requested_days": report.requested_days,
        "available_days": report.available_days,
        "generated_at": report.generated_at.isoformat(),
    }


def format_report_json(report: ForecastReport) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)


def chart_points(report: ForecastReport) -> list[dict]:
    """Flat per-entry series for the web temperature chart."""
    return [
        {
            "date": f"{day.calendar_date:%Y-%m-%d}",
            "time": f"{e.local_time:%H:%M}",
            "temp": round(e.temperature),
            "description": e.condition_text,
            "pop": round(e.precipitation_chance),
        }
        for day in report.days
        for e in day.entries
    ]
