"""Alexa speech response for a curated forecast."""

from datetime import datetime
from typing import Any

from jakesky.utils.logger import setup_logger
from jakesky.weather.models import Observation, Weather

logger = setup_logger(__name__)


def speakable_time(timestamp: datetime) -> str:
    """Render a local hour the way it is said aloud ("midnight", "noon", "6 PM")."""
    hour = timestamp.hour
    if hour == 0:
        return "midnight"
    if hour == 12:
        return "noon"
    return f"{hour % 12 or 12} {'PM' if hour >= 12 else 'AM'}"


def speakable_weather(observation: Observation) -> str:
    """Render temperature and conditions, e.g. "30 and Sunny"."""
    summary = observation.summary
    if summary.lower() == "drizzle":
        summary = "Drizzling"
    return f"{observation.temperature:.0f} and {summary}"


def forecast_text(weather: Weather) -> str:
    """Build the spoken forecast sentence sequence."""
    sentences = [f"It's currently {speakable_weather(weather.current)}."]

    forecasts = list(weather.forecasts)
    for forecast in forecasts[:-1]:
        sentences.append(
            f"At {speakable_time(forecast.record.timestamp)}, "
            f"it will be {speakable_weather(forecast.record)}."
        )
    if forecasts:
        last = forecasts[-1].record
        sentences.append(
            f"And at {speakable_time(last.timestamp)} "
            f"it will be {speakable_weather(last)}."
        )

    return " ".join(sentences)


def forecast_speech(weather: Weather) -> dict[str, Any]:
    """Wrap the spoken forecast in an Alexa PlainText output speech response.

    Args:
        weather: Curated forecast from the assembler.

    Returns:
        Alexa skill response document.
    """
    text = forecast_text(weather)
    logger.info(f'Forecast: "{text}"')

    return {
        "version": "1.0",
        "response": {
            "outputSpeech": {
                "type": "PlainText",
                "text": text,
            }
        },
    }
