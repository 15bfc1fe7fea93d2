"""AWS Lambda entry point for the Alexa skill."""

from typing import Any

from jakesky.config.loader import load_config
from jakesky.outputs.speech_formatter import forecast_speech
from jakesky.pipeline import run_forecast
from jakesky.utils.logger import setup_logger

logger = setup_logger(__name__)

WARMUP_DETAIL_TYPE = "Scheduled Event"


def is_warmup(event: Any) -> bool:
    """Return True for scheduled keep-warm invocations."""
    return isinstance(event, dict) and event.get("detail-type") == WARMUP_DETAIL_TYPE


def handler(event: Any, context: Any) -> dict[str, Any]:
    """Handle an Alexa request with a spoken forecast.

    Configuration comes entirely from JAKESKY_* environment variables.
    Scheduled warm-up events return an empty response without touching
    the provider.
    """
    if is_warmup(event):
        logger.info("Warmup event")
        return {}

    config = load_config()
    weather = run_forecast(config)
    return forecast_speech(weather)
