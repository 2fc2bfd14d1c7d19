"""CLI entry point for the weather forecast tool."""

import argparse
import logging
import sys

import yaml
from pydantic import ValidationError

from weathercast.config.defaults import clamp_days, default_location
from weathercast.config.loader import (
    MissingApiKeyError,
    get_config_value,
    load_api_key,
    load_config,
)
from weathercast.config.schema import AppConfig, Provider
from weathercast.ingest.errors import ForecastError, LocationNotFoundError
from weathercast.ingest.forecast_service import build_service
from weathercast.models.forecast import SelectionRequest
from weathercast.reporting.formatters import format_report_json, format_report_text

DEFAULT_CONFIG = "weathercast.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathercast",
        description="Hourly weather forecast in the terminal or the browser",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        help="Override the configured forecast provider",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log at DEBUG level"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Print the forecast for a location")
    fc_p.add_argument("location", nargs="?", help="City, region or country")
    fc_p.add_argument("days", nargs="?", help="Number of days (clamped)")
    fc_p.add_argument("--json", action="store_true", help="Print JSON")
    fc_p.add_argument("--no-color", action="store_true", help="Plain text")

    # serve
    serve_p = sub.add_parser("serve", help="Run the web app")
    serve_p.add_argument("--host", help="Bind address")
    serve_p.add_argument("--port", type=int, help="Bind port")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. http.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Error: invalid config {args.config}: {e}", file=sys.stderr)
        return 1
    if args.provider:
        config = config.model_copy(update={"provider": Provider(args.provider)})

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_forecast(config: AppConfig, args) -> int:
    request = SelectionRequest(
        location=args.location or default_location(config),
        requested_day_count=clamp_days(
            args.days if args.days is not None else config.default_days,
            config.provider,
        ),
    )
    try:
        service = build_service(config, load_api_key(config))
        report = service.get_report(request)
    except (MissingApiKeyError, LocationNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ForecastError as e:
        print(f"Error: could not get forecast: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(format_report_json(report))
    else:
        print(format_report_text(report, color=not args.no_color))
    return 0


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weathercast.web import create_app

    try:
        service = build_service(config, load_api_key(config))
    except MissingApiKeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info("Weather app running on http://%s:%d", host, port)
    uvicorn.run(create_app(config, service), host=host, port=port)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    print("Use: config show | config get KEY")
    return 1
