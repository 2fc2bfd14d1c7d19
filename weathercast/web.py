"""Weather forecast web app: FastAPI serving server-rendered pages + JSON."""

import logging
from pathlib import Path

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from weathercast.config.defaults import clamp_days, default_location
from weathercast.config.schema import AppConfig
from weathercast.ingest.errors import ForecastError, LocationNotFoundError
from weathercast.ingest.forecast_service import ForecastService
from weathercast.models.forecast import ForecastReport, SelectionRequest
from weathercast.reporting.formatters import (
    NO_FORECAST_MESSAGE,
    chart_points,
    report_to_dict,
)

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"
TITLE = "Weather Forecast"
FETCH_ERROR_MESSAGE = "Location not found or API error"


def create_app(config: AppConfig, service: ForecastService) -> FastAPI:
    app = FastAPI(title=TITLE, version="0.1.0")
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    templates = Jinja2Templates(directory=TEMPLATES_DIR)

    def _request(location: str | None, days: str | None) -> SelectionRequest:
        return SelectionRequest(
            location=(location or "").strip() or default_location(config),
            requested_day_count=clamp_days(days, config.provider),
        )

    def _render_weather(request: Request, sel: SelectionRequest) -> HTMLResponse:
        try:
            report = service.get_report(sel)
        except ForecastError as e:
            logger.error("Forecast for %r failed: %s", sel.location, e)
            return templates.TemplateResponse(
                request,
                "error.html",
                {"title": "Error", "error_message": FETCH_ERROR_MESSAGE},
                status_code=_error_status(e),
            )
        return templates.TemplateResponse(
            request, "weather.html", _weather_context(report)
        )

    @app.get("/", response_class=HTMLResponse)
    def home_page(request: Request):
        return templates.TemplateResponse(
            request,
            "index.html",
            {"title": TITLE, "default_location": default_location(config)},
        )

    @app.post("/weather", response_class=HTMLResponse)
    def weather_form(
        request: Request,
        location: str = Form(...),
        days: str | None = Form(None),
    ):
        return _render_weather(request, _request(location, days))

    @app.get("/weather", response_class=HTMLResponse)
    def weather_query(
        request: Request, location: str | None = None, days: str | None = None
    ):
        return _render_weather(request, _request(location, days))

    @app.get("/api/forecast")
    def api_forecast(location: str | None = None, days: str | None = None):
        sel = _request(location, days)
        try:
            report = service.get_report(sel)
        except ForecastError as e:
            logger.error("Forecast for %r failed: %s", sel.location, e)
            raise HTTPException(_error_status(e), str(e)) from e
        return report_to_dict(report)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "provider": config.provider.value}

    return app


def _error_status(e: ForecastError) -> int:
    return 404 if isinstance(e, LocationNotFoundError) else 502


def _weather_context(report: ForecastReport) -> dict:
    return {
        "title": TITLE,
        "location": report.location.name,
        "country": report.location.country,
        "current": report.current,
        "days": report.requested_days,
        "forecast_days": report.days,
        "no_forecast_message": NO_FORECAST_MESSAGE if report.is_empty else None,
        "short_forecast": report.is_short,
        "available_days": report.available_days,
        "chart_data": chart_points(report),
        "dates": [f"{d.calendar_date:%Y-%m-%d}" for d in report.days],
        "current_time": f"{report.generated_at:%Y-%m-%d %H:%M:%S}",
    }
