"""AccuWeather API client and response normalization."""

from typing import Any
from zoneinfo import ZoneInfo

from jakesky.config.schema import Location
from jakesky.utils.exceptions import BadResponseError
from jakesky.utils.logger import setup_logger
from jakesky.weather.http import http_get
from jakesky.weather.models import (
    CurrentConditions,
    HourlyRecord,
    ProviderResponse,
    Wind,
)
from jakesky.weather.payload import (
    build_record,
    optional_number,
    parse_json,
    require,
    require_epoch,
    require_number,
    resolve_timezone,
)

logger = setup_logger(__name__)

PROVIDER_ID = "accuweather"

ACCUWEATHER_BASE_URL = "https://dataservice.accuweather.com"
LOCATION_URL = f"{ACCUWEATHER_BASE_URL}/locations/v1/cities/geoposition/search"
CURRENT_CONDITIONS_URL = f"{ACCUWEATHER_BASE_URL}/currentconditions/v1/{{location_key}}"
# The 12-hour endpoint stops short of the evening slots for morning requests
HOURLY_FORECAST_URL = f"{ACCUWEATHER_BASE_URL}/forecasts/v1/hourly/24hour/{{location_key}}"

SUMMARY_REPLACEMENTS = [
    ("w/", "with"),
    ("t-storms", "thunderstorms"),
]


class AccuWeatherClient:
    """Client for the AccuWeather location, current conditions and hourly APIs.

    Args:
        api_key: AccuWeather API key.
        units: "imperial" or "metric".
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, api_key: str, units: str = "imperial", timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.units = units
        self.timeout = timeout

    def fetch(self, location: Location) -> ProviderResponse:
        """Fetch location metadata, current conditions and the hourly forecast.

        AccuWeather keys its forecasts by location ID, so the geoposition
        search runs first and its body is kept for the timezone name.

        Args:
            location: Forecast location.

        Returns:
            ProviderResponse with "location", "current" and "hourly" bodies.

        Raises:
            ProviderTimeoutError: If any request times out.
            TransportError: On connection or HTTP errors.
            BadResponseError: If the location search has no location key.
        """
        logger.info(
            f"Fetching AccuWeather forecast for "
            f"({location.latitude}, {location.longitude})"
        )

        location_body = self._get(
            LOCATION_URL, {"q": f"{location.latitude},{location.longitude}"}
        )
        location_key = _location_key(location_body)

        current_body = self._get(
            CURRENT_CONDITIONS_URL.format(location_key=location_key),
            {"details": "true"},
        )
        hourly_body = self._get(
            HOURLY_FORECAST_URL.format(location_key=location_key),
            {"details": "true", "metric": str(self.units == "metric").lower()},
        )

        return ProviderResponse(
            provider=PROVIDER_ID,
            units=self.units,
            bodies={
                "location": location_body,
                "current": current_body,
                "hourly": hourly_body,
            },
        )

    def _get(self, url: str, params: dict[str, str]) -> str:
        return http_get(
            url, {"apikey": self.api_key, **params}, PROVIDER_ID, self.timeout
        )


def _location_key(body: str) -> str:
    data = parse_json(body, PROVIDER_ID, "location")
    key = require(data, "Key", PROVIDER_ID)
    if not isinstance(key, str) or not key:
        raise BadResponseError(
            "AccuWeather location key is empty",
            PROVIDER_ID,
            field="Key",
            stage="fetch",
        )
    return key


def normalize_summary(text: str) -> str:
    """Expand AccuWeather's abbreviations so the summary reads aloud well."""
    for abbreviation, replacement in SUMMARY_REPLACEMENTS:
        text = text.replace(abbreviation, replacement)
    return text


def _summary(item: Any, path: str, prefix: str) -> str:
    text = require(item, path, PROVIDER_ID, prefix)
    if not isinstance(text, str):
        raise BadResponseError(
            f"Field '{prefix}{path}' in accuweather response is not text",
            PROVIDER_ID,
            field=f"{prefix}{path}",
        )
    return normalize_summary(text)


def _wind(item: Any, speed_path: str, prefix: str) -> Wind | None:
    speed = optional_number(item, speed_path, PROVIDER_ID, prefix)
    if speed is None:
        return None
    return build_record(
        Wind,
        PROVIDER_ID,
        f"{prefix}Wind.",
        speed=speed,
        direction_degrees=optional_number(
            item, "Wind.Direction.Degrees", PROVIDER_ID, prefix
        ),
    )


def _current_conditions(item: Any, tz: ZoneInfo, unit_key: str) -> CurrentConditions:
    prefix = "current[0]."
    return build_record(
        CurrentConditions,
        PROVIDER_ID,
        prefix,
        timestamp=require_epoch(item, "EpochTime", tz, PROVIDER_ID, prefix),
        summary=_summary(item, "WeatherText", prefix),
        temperature=require_number(
            item, f"Temperature.{unit_key}.Value", PROVIDER_ID, prefix
        ),
        apparent_temperature=optional_number(
            item, f"RealFeelTemperature.{unit_key}.Value", PROVIDER_ID, prefix
        ),
        wind=_wind(item, f"Wind.Speed.{unit_key}.Value", prefix),
    )


def _hourly_record(item: Any, tz: ZoneInfo, index: int) -> HourlyRecord:
    prefix = f"hourly[{index}]."
    probability = optional_number(item, "PrecipitationProbability", PROVIDER_ID, prefix)
    return build_record(
        HourlyRecord,
        PROVIDER_ID,
        prefix,
        timestamp=require_epoch(item, "EpochDateTime", tz, PROVIDER_ID, prefix),
        summary=_summary(item, "IconPhrase", prefix),
        temperature=require_number(item, "Temperature.Value", PROVIDER_ID, prefix),
        apparent_temperature=optional_number(
            item, "RealFeelTemperature.Value", PROVIDER_ID, prefix
        ),
        precipitation_probability=None if probability is None else round(probability),
        wind=_wind(item, "Wind.Speed.Value", prefix),
    )


def normalize(
    response: ProviderResponse,
) -> tuple[CurrentConditions, list[HourlyRecord]]:
    """Convert raw AccuWeather bodies into the normalized model.

    Args:
        response: ProviderResponse produced by AccuWeatherClient.fetch.

    Returns:
        Current conditions and hourly records sorted by instant, all
        expressed in the location's IANA timezone.

    Raises:
        BadResponseError: If any body is missing, malformed, or lacks a
            required field.
    """
    bodies = response.bodies
    for name in ("location", "current", "hourly"):
        if name not in bodies:
            raise BadResponseError(
                f"AccuWeather response is missing the '{name}' body",
                PROVIDER_ID,
                field=name,
            )

    unit_key = "Metric" if response.units == "metric" else "Imperial"

    location = parse_json(bodies["location"], PROVIDER_ID, "location")
    tz = resolve_timezone(
        require(location, "TimeZone.Name", PROVIDER_ID), PROVIDER_ID, "TimeZone.Name"
    )

    current_items = parse_json(bodies["current"], PROVIDER_ID, "current")
    if not isinstance(current_items, list) or not current_items:
        raise BadResponseError(
            "AccuWeather returned an empty current conditions array",
            PROVIDER_ID,
            field="current",
        )
    current = _current_conditions(current_items[0], tz, unit_key)

    hourly_items = parse_json(bodies["hourly"], PROVIDER_ID, "hourly")
    if not isinstance(hourly_items, list):
        raise BadResponseError(
            "AccuWeather hourly forecast is not an array", PROVIDER_ID, field="hourly"
        )
    hourly = [_hourly_record(item, tz, i) for i, item in enumerate(hourly_items)]
    hourly.sort(key=lambda record: record.utc_timestamp)

    logger.debug(f"Normalized {len(hourly)} AccuWeather hourly records in {tz.key}")
    return current, hourly
