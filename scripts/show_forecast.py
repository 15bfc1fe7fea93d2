"""Manual testing script for the forecast pipeline.

Reads JAKESKY_* environment variables for anything not given on the
command line.

Usage:
    python scripts/show_forecast.py --provider openweather --latitude 47.6 --longitude -122.3
    python scripts/show_forecast.py --no-cache --late-slot
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from jakesky.config.loader import load_config
from jakesky.pipeline import run_forecast
from jakesky.utils.exceptions import JakeSkyError
from jakesky.utils.logger import setup_logger

logger = setup_logger(__name__)


def main() -> None:
    """Fetch a live forecast and print the selected slots."""
    parser = argparse.ArgumentParser(
        description="Fetch a curated forecast and print the selected time slots."
    )
    parser.add_argument("--provider", help="accuweather or openweather")
    parser.add_argument("--latitude", type=float)
    parser.add_argument("--longitude", type=float)
    parser.add_argument("--no-cache", action="store_true")
    parser.add_argument(
        "--late-slot", action=argparse.BooleanOptionalAction, default=None
    )
    args = parser.parse_args()

    try:
        config = load_config(
            provider=args.provider,
            latitude=args.latitude,
            longitude=args.longitude,
            use_cache=False if args.no_cache else None,
        )
        weather = run_forecast(config, include_late_slot=args.late_slot)
    except JakeSkyError as e:
        logger.error(f"Forecast failed: {e}")
        sys.exit(1)

    current = weather.current
    logger.info(
        f"Now ({current.timestamp:%a %H:%M} {weather.timezone}): "
        f"{current.temperature:.0f}° {current.summary}"
    )

    # Print results table
    logger.info(f"\n{'Slot':<10} {'Local Time':<18} {'Temp':>6} {'Precip':>7}  {'Summary'}")
    logger.info("-" * 70)
    for forecast in weather.forecasts:
        record = forecast.record
        precip = (
            f"{record.precipitation_probability}%"
            if record.precipitation_probability is not None
            else "N/A"
        )
        logger.info(
            f"{forecast.slot.name.title():<10} {record.timestamp:%Y-%m-%d %H:%M}  "
            f"{record.temperature:>6.1f} {precip:>7}  {record.summary}"
        )


if __name__ == "__main__":
    main()
