"""CLI entry point for the JakeSky forecast."""

import argparse
import json
import logging
import sys
from pathlib import Path

from jakesky.config.loader import load_config
from jakesky.outputs.speech_formatter import forecast_speech
from jakesky.pipeline import run_forecast
from jakesky.utils.exceptions import JakeSkyError
from jakesky.utils.logger import setup_logger
from jakesky.weather.provider import WeatherProvider


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Curated weather forecast for the hours that matter.",
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in WeatherProvider],
        help="Weather provider (default: JAKESKY_PROVIDER or accuweather).",
    )
    parser.add_argument(
        "--latitude",
        type=float,
        help="Forecast latitude (default: JAKESKY_LATITUDE).",
    )
    parser.add_argument(
        "--longitude",
        type=float,
        help="Forecast longitude (default: JAKESKY_LONGITUDE).",
    )
    parser.add_argument(
        "--units",
        choices=["imperial", "metric"],
        help="Measurement units (default: JAKESKY_UNITS or imperial).",
    )
    parser.add_argument(
        "--timezone",
        help="IANA timezone used for 'now' (default: JAKESKY_TIMEZONE or UTC).",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        help="Directory for cached provider responses.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always fetch live data and skip the response cache.",
    )
    parser.add_argument(
        "--late-slot",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force the 10 PM slot on or off (default: Fridays and Saturdays).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Console logging level (default: INFO).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Print the Alexa speech response for the configured location.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).
    """
    args = parse_args(argv)

    log_level = getattr(logging, args.log_level)
    logger = setup_logger("jakesky", console_level=log_level)

    try:
        config = load_config(
            provider=args.provider,
            latitude=args.latitude,
            longitude=args.longitude,
            units=args.units,
            timezone=args.timezone,
            cache_dir=args.cache_dir,
            use_cache=False if args.no_cache else None,
        )
        weather = run_forecast(config, include_late_slot=args.late_slot)
    except JakeSkyError as e:
        logger.error(f"Forecast failed: {e}")
        sys.exit(1)

    print(json.dumps(forecast_speech(weather), indent=2))


if __name__ == "__main__":
    main()
