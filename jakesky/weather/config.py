"""Forecast-specific configuration settings."""

import os
import tempfile
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from jakesky.config.schema import Location
from jakesky.utils.exceptions import ConfigError
from jakesky.weather.provider import WeatherProvider

# Field name -> environment variable consulted when the caller omits the field
ENV_VARS: dict[str, str] = {
    "provider": "JAKESKY_PROVIDER",
    "api_key": "JAKESKY_API_KEY",
    "latitude": "JAKESKY_LATITUDE",
    "longitude": "JAKESKY_LONGITUDE",
    "units": "JAKESKY_UNITS",
    "timezone": "JAKESKY_TIMEZONE",
    "use_cache": "JAKESKY_USE_CACHE",
    "cache_dir": "JAKESKY_CACHE_DIR",
}


class WeatherConfig(BaseModel):
    """Configuration for one forecast invocation.

    Args:
        provider: Weather provider queried for this run.
        api_key: Provider API key. Filled from JAKESKY_API_KEY when omitted.
        latitude: Forecast latitude. Filled from JAKESKY_LATITUDE when omitted.
        longitude: Forecast longitude. Filled from JAKESKY_LONGITUDE when omitted.
        units: "imperial" or "metric" measurements from the provider.
        timezone: IANA zone used for "now" and the cache date before the
            provider reports the location's own zone.
        use_cache: Whether raw provider responses are cached on disk.
        cache_dir: Directory for cached provider responses.
        cache_ttl_seconds: Maximum age of a cached response.
        request_timeout_s: Per-request HTTP timeout.
    """

    provider: WeatherProvider = WeatherProvider.ACCUWEATHER
    api_key: str | None = Field(default=None, repr=False)
    latitude: float | None = None
    longitude: float | None = None
    units: Literal["imperial", "metric"] = "imperial"
    timezone: str | None = None
    use_cache: bool = True
    cache_dir: Path = Path(tempfile.gettempdir()) / "jakesky"
    cache_ttl_seconds: int = Field(default=86400, gt=0)
    request_timeout_s: float = Field(default=10.0, gt=0)

    @model_validator(mode="before")
    @classmethod
    def load_env_defaults(cls, data: Any) -> Any:
        """Fill omitted fields from JAKESKY_* environment variables."""
        if not isinstance(data, dict):
            return data

        merged = dict(data)
        for field_name, env_var in ENV_VARS.items():
            if merged.get(field_name) is not None:
                continue
            if env_value := os.environ.get(env_var):
                merged[field_name] = env_value
        return merged

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: Any) -> Any:
        """Accept provider names case-insensitively."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Validate the timezone is a known IANA name."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{v}'") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo | None:
        """Return the configured zone, or None when unset."""
        return ZoneInfo(self.timezone) if self.timezone else None

    def location(self) -> Location:
        """Build the validated forecast location.

        Raises:
            ConfigError: If latitude/longitude are missing or out of range.
        """
        if self.latitude is None or self.longitude is None:
            raise ConfigError(
                "Latitude and longitude are required",
                context={"latitude": self.latitude, "longitude": self.longitude},
            )
        try:
            return Location(latitude=self.latitude, longitude=self.longitude)
        except ValidationError as e:
            raise ConfigError(
                "Invalid forecast location",
                context={
                    "latitude": self.latitude,
                    "longitude": self.longitude,
                    "error": str(e),
                },
            ) from e

    def require_api_key(self) -> str:
        """Return the API key, raising ConfigError if it is missing or blank."""
        if not self.api_key or not self.api_key.strip():
            raise ConfigError(
                "Provider API key is required",
                context={"provider": self.provider.value, "env": ENV_VARS["api_key"]},
            )
        return self.api_key
