"""OpenWeather One Call API client and response normalization."""

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
    require_list,
    require_number,
    resolve_timezone,
)

logger = setup_logger(__name__)

PROVIDER_ID = "openweather"

ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"

# Only current and hourly data are spoken, so the rest of the payload is excluded
EXCLUDED_BLOCKS = "minutely,daily,alerts"


class OpenWeatherClient:
    """Client for the OpenWeather One Call 3.0 API.

    Args:
        api_key: OpenWeather application ID.
        units: "imperial" or "metric".
        timeout: Request timeout in seconds.
    """

    def __init__(self, api_key: str, units: str = "imperial", timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.units = units
        self.timeout = timeout

    def fetch(self, location: Location) -> ProviderResponse:
        """Fetch current and hourly weather for a location.

        Args:
            location: Forecast location.

        Returns:
            ProviderResponse with a single "onecall" body.

        Raises:
            ProviderTimeoutError: If the request times out.
            TransportError: On connection or HTTP errors.
        """
        logger.info(
            f"Fetching OpenWeather forecast for "
            f"({location.latitude}, {location.longitude})"
        )

        params = {
            "exclude": EXCLUDED_BLOCKS,
            "units": self.units,
            "appid": self.api_key,
            "lat": str(location.latitude),
            "lon": str(location.longitude),
        }
        body = http_get(ONECALL_URL, params, PROVIDER_ID, self.timeout)

        return ProviderResponse(
            provider=PROVIDER_ID, units=self.units, bodies={"onecall": body}
        )


def normalize_condition(main: str) -> str:
    """Map OpenWeather condition groups to spoken words."""
    if main.lower() == "clouds":
        return "Cloudy"
    return main


def summarize(conditions: list[str]) -> str:
    """Join conditions as "Rain", "Rain and Mist" or "Rain, Mist and Snow"."""
    if len(conditions) == 1:
        return conditions[0]
    return ", ".join(conditions[:-1]) + " and " + conditions[-1]


def _summary(item: Any, prefix: str) -> str:
    entries = require_list(item, "weather", PROVIDER_ID, prefix)
    if not entries:
        raise BadResponseError(
            f"No weather conditions in '{prefix}weather'",
            PROVIDER_ID,
            field=f"{prefix}weather",
        )

    conditions = []
    for i, entry in enumerate(entries):
        main = require(entry, "main", PROVIDER_ID, f"{prefix}weather[{i}].")
        if not isinstance(main, str) or not main:
            raise BadResponseError(
                f"Field '{prefix}weather[{i}].main' in openweather response is not text",
                PROVIDER_ID,
                field=f"{prefix}weather[{i}].main",
            )
        conditions.append(normalize_condition(main))
    return summarize(conditions)


def _wind(item: Any, prefix: str) -> Wind | None:
    speed = optional_number(item, "wind_speed", PROVIDER_ID, prefix)
    if speed is None:
        return None
    return build_record(
        Wind,
        PROVIDER_ID,
        f"{prefix}wind.",
        speed=speed,
        direction_degrees=optional_number(item, "wind_deg", PROVIDER_ID, prefix),
    )


def _observation_fields(item: Any, tz: ZoneInfo, prefix: str) -> dict[str, Any]:
    return {
        "timestamp": require_epoch(item, "dt", tz, PROVIDER_ID, prefix),
        "summary": _summary(item, prefix),
        "temperature": require_number(item, "temp", PROVIDER_ID, prefix),
        "apparent_temperature": optional_number(item, "feels_like", PROVIDER_ID, prefix),
        "wind": _wind(item, prefix),
    }


def _hourly_record(item: Any, tz: ZoneInfo, index: int) -> HourlyRecord:
    prefix = f"hourly[{index}]."
    pop = optional_number(item, "pop", PROVIDER_ID, prefix)
    return build_record(
        HourlyRecord,
        PROVIDER_ID,
        prefix,
        precipitation_probability=None if pop is None else round(pop * 100),
        **_observation_fields(item, tz, prefix),
    )


def normalize(
    response: ProviderResponse,
) -> tuple[CurrentConditions, list[HourlyRecord]]:
    """Convert a raw One Call body into the normalized model.

    Args:
        response: ProviderResponse produced by OpenWeatherClient.fetch.

    Returns:
        Current conditions and hourly records sorted by instant, all
        expressed in the location's IANA timezone.

    Raises:
        BadResponseError: If the body is malformed or lacks a required field.
    """
    if "onecall" not in response.bodies:
        raise BadResponseError(
            "OpenWeather response is missing the 'onecall' body",
            PROVIDER_ID,
            field="onecall",
        )

    data = parse_json(response.bodies["onecall"], PROVIDER_ID, "onecall")
    tz = resolve_timezone(require(data, "timezone", PROVIDER_ID), PROVIDER_ID, "timezone")

    current = build_record(
        CurrentConditions,
        PROVIDER_ID,
        "current.",
        **_observation_fields(require(data, "current", PROVIDER_ID), tz, "current."),
    )

    hourly = [
        _hourly_record(item, tz, i)
        for i, item in enumerate(require_list(data, "hourly", PROVIDER_ID))
    ]
    hourly.sort(key=lambda record: record.utc_timestamp)

    logger.debug(f"Normalized {len(hourly)} OpenWeather hourly records in {tz.key}")
    return current, hourly
