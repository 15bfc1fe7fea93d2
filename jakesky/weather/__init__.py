"""Weather retrieval, normalization and time-slot selection."""

from jakesky.weather.models import (
    CurrentConditions,
    HourlyRecord,
    ProviderResponse,
    SlotForecast,
    TimeSlot,
    Weather,
)
from jakesky.weather.cache_manager import ResponseCache
from jakesky.weather.provider import WeatherProvider
from jakesky.weather.config import WeatherConfig
from jakesky.weather.assembler import ForecastAssembler

__all__ = [
    "CurrentConditions",
    "ForecastAssembler",
    "HourlyRecord",
    "ProviderResponse",
    "ResponseCache",
    "SlotForecast",
    "TimeSlot",
    "Weather",
    "WeatherConfig",
    "WeatherProvider",
]
