"""Output formatting for curated forecasts."""

from .speech_formatter import forecast_speech

__all__ = ["forecast_speech"]
