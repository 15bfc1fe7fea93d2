"""Shared pytest fixtures and payload builders for JakeSky tests."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest
import requests

from jakesky.config.schema import Location
from jakesky.weather.config import ENV_VARS, WeatherConfig
from jakesky.weather.models import HourlyRecord, ProviderResponse

NEW_YORK = ZoneInfo("America/New_York")

# Friday 2024-06-07
FRIDAY = date(2024, 6, 7)


def local_time(day: date, hour: int, tz: ZoneInfo = NEW_YORK) -> datetime:
    """Return an aware datetime at the top of a local hour."""
    return datetime(day.year, day.month, day.day, hour, tzinfo=tz)


def epoch(day: date, hour: int, tz: ZoneInfo = NEW_YORK) -> int:
    """Return Unix seconds for a local hour."""
    return int(local_time(day, hour, tz).timestamp())


def make_record(
    timestamp: datetime,
    temperature: float = 70.0,
    summary: str = "Sunny",
) -> HourlyRecord:
    """Build an hourly record with sensible defaults."""
    return HourlyRecord(timestamp=timestamp, summary=summary, temperature=temperature)


def hourly_day(
    day: date, hours: range | list[int] = range(24), tz: ZoneInfo = NEW_YORK
) -> list[HourlyRecord]:
    """Build one record per local hour, temperature equal to the hour."""
    return [make_record(local_time(day, h, tz), temperature=float(h)) for h in hours]


# --- AccuWeather payloads ---


def accuweather_location(key: str = "349727", tz_name: str = "America/New_York") -> dict:
    """Geoposition search result as returned by AccuWeather."""
    return {
        "Key": key,
        "LocalizedName": "New York",
        "TimeZone": {"Code": "EDT", "Name": tz_name, "GmtOffset": -4.0},
    }


def accuweather_current(
    day: date = FRIDAY, hour: int = 7, temperature: float = 68.0, tz: ZoneInfo = NEW_YORK
) -> list[dict]:
    """Current conditions array (AccuWeather returns a one-element list)."""
    return [
        {
            "EpochTime": epoch(day, hour, tz),
            "WeatherText": "Mostly sunny w/ t-storms",
            "Temperature": {
                "Metric": {"Value": 20.0, "Unit": "C"},
                "Imperial": {"Value": temperature, "Unit": "F"},
            },
            "RealFeelTemperature": {
                "Metric": {"Value": 21.1, "Unit": "C"},
                "Imperial": {"Value": 70.0, "Unit": "F"},
            },
            "Wind": {
                "Direction": {"Degrees": 225, "English": "SW"},
                "Speed": {
                    "Metric": {"Value": 11.1, "Unit": "km/h"},
                    "Imperial": {"Value": 6.9, "Unit": "mi/h"},
                },
            },
        }
    ]


def accuweather_hourly(
    day: date = FRIDAY, hours: range | list[int] = range(7, 24), tz: ZoneInfo = NEW_YORK
) -> list[dict]:
    """Hourly forecast array, temperature equal to the local hour."""
    return [
        {
            "DateTime": local_time(day, h, tz).isoformat(),
            "EpochDateTime": epoch(day, h, tz),
            "IconPhrase": "Partly sunny",
            "Temperature": {"Value": float(h), "Unit": "F"},
            "RealFeelTemperature": {"Value": float(h) + 1, "Unit": "F"},
            "Wind": {
                "Speed": {"Value": 5.8, "Unit": "mi/h"},
                "Direction": {"Degrees": 180},
            },
            "PrecipitationProbability": 20,
        }
        for h in hours
    ]


def accuweather_response(
    location: Any = None, current: Any = None, hourly: Any = None, units: str = "imperial"
) -> ProviderResponse:
    """Raw AccuWeather ProviderResponse built from the payload helpers."""
    return ProviderResponse(
        provider="accuweather",
        units=units,
        bodies={
            "location": json.dumps(location if location is not None else accuweather_location()),
            "current": json.dumps(current if current is not None else accuweather_current()),
            "hourly": json.dumps(hourly if hourly is not None else accuweather_hourly()),
        },
    )


# --- OpenWeather payloads ---


def openweather_onecall(
    day: date = FRIDAY,
    hours: range | list[int] = range(7, 24),
    tz_name: str = "America/New_York",
) -> dict:
    """One Call 3.0 payload with current and hourly blocks."""
    return {
        "lat": 40.7,
        "lon": -74.0,
        "timezone": tz_name,
        "timezone_offset": -14400,
        "current": {
            "dt": epoch(day, 7),
            "temp": 68.0,
            "feels_like": 70.0,
            "wind_speed": 6.9,
            "wind_deg": 225,
            "weather": [{"id": 800, "main": "Clear", "description": "clear sky"}],
        },
        "hourly": [
            {
                "dt": epoch(day, h),
                "temp": float(h),
                "feels_like": float(h) + 1,
                "wind_speed": 5.8,
                "wind_deg": 180,
                "pop": 0.2,
                "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds"}],
            }
            for h in hours
        ],
    }


def openweather_response(payload: dict | None = None) -> ProviderResponse:
    """Raw OpenWeather ProviderResponse."""
    return ProviderResponse(
        provider="openweather",
        bodies={"onecall": json.dumps(payload if payload is not None else openweather_onecall())},
    )


def mock_http_response(body: Any, status_code: int = 200) -> MagicMock:
    """Build a MagicMock standing in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Client Error"
        )
    else:
        response.raise_for_status = MagicMock()
    return response


# --- Fixtures ---


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove JAKESKY_* variables so tests never read the developer's settings."""
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture()
def new_york() -> Location:
    """Forecast location in Manhattan."""
    return Location(latitude=40.7128, longitude=-74.0060)


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    """Temporary directory for cached responses (not created up front)."""
    return tmp_path / "cache"


@pytest.fixture()
def weather_config(cache_dir: Path) -> WeatherConfig:
    """AccuWeather configuration for New York with a temporary cache."""
    return WeatherConfig(
        provider="accuweather",
        api_key="test-key",
        latitude=40.7128,
        longitude=-74.0060,
        timezone="America/New_York",
        cache_dir=cache_dir,
    )
