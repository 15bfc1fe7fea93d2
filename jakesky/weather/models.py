"""Provider-agnostic weather model shared by every adapter."""

from datetime import date, datetime, timedelta, timezone
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from jakesky.config.schema import Location


class TimeSlot(Enum):
    """Times of day read out in the spoken forecast, valued by local hour."""

    MORNING = 8
    NOON = 12
    EVENING = 18
    NIGHT = 22

    @property
    def hour(self) -> int:
        return self.value


class Wind(BaseModel):
    """Wind speed (in the requested units) and optional bearing."""

    model_config = ConfigDict(frozen=True)

    speed: float = Field(ge=0)
    direction_degrees: float | None = Field(default=None, ge=0, le=360)


class Observation(BaseModel):
    """Fields common to current conditions and hourly forecasts.

    Timestamps are always timezone-aware and carry the location's zone, so
    the local calendar date and hour can be read straight off them.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    summary: str = Field(min_length=1)
    temperature: float
    apparent_temperature: float | None = None
    precipitation_probability: int | None = Field(default=None, ge=0, le=100)
    wind: Wind | None = None

    @property
    def utc_timestamp(self) -> datetime:
        return self.timestamp.astimezone(timezone.utc)


class CurrentConditions(Observation):
    """Conditions observed at the provider's "now"."""


class HourlyRecord(Observation):
    """One hour of forecast data."""


class SlotForecast(BaseModel):
    """An hourly record selected to represent a time slot."""

    model_config = ConfigDict(frozen=True)

    slot: TimeSlot
    record: HourlyRecord


class Weather(BaseModel):
    """Final normalized result handed to the speech formatter.

    Args:
        provider: Provider identifier the data came from.
        timezone: IANA zone of the forecast location.
        current: Current conditions.
        forecasts: Selected slots, in time-of-day order, each slot at most once.
    """

    model_config = ConfigDict(frozen=True)

    provider: str
    timezone: str
    current: CurrentConditions
    forecasts: tuple[SlotForecast, ...] = ()

    @model_validator(mode="after")
    def check_slots(self) -> "Weather":
        """Reject duplicate slots and out-of-order forecasts."""
        hours = [f.slot.hour for f in self.forecasts]
        if len(set(hours)) != len(hours):
            raise ValueError(f"Duplicate time slots in forecast: {hours}")
        if hours != sorted(hours):
            raise ValueError(f"Time slots out of order: {hours}")
        return self

    @property
    def slots(self) -> list[TimeSlot]:
        return [f.slot for f in self.forecasts]

    def forecast_for(self, slot: TimeSlot) -> HourlyRecord | None:
        """Return the record selected for a slot, or None if it was omitted."""
        for forecast in self.forecasts:
            if forecast.slot is slot:
                return forecast.record
        return None


class ProviderResponse(BaseModel):
    """Raw provider payload as fetched and cached.

    Bodies are stored verbatim and only interpreted by the provider's own
    normalizer. ``cached_at`` and ``ttl_seconds`` are stamped by the cache.
    """

    model_config = ConfigDict(frozen=True)

    provider: str
    units: str = "imperial"
    bodies: dict[str, str]
    cached_at: AwareDatetime | None = None
    ttl_seconds: int | None = Field(default=None, gt=0)

    def age(self, now: datetime) -> timedelta | None:
        """Return time elapsed since caching, or None if never cached."""
        if self.cached_at is None:
            return None
        return now - self.cached_at

    def is_expired(self, now: datetime) -> bool:
        """Return True if the entry is older than its time-to-live."""
        age = self.age(now)
        if age is None or self.ttl_seconds is None:
            return False
        return age > timedelta(seconds=self.ttl_seconds)


class CacheKey(BaseModel):
    """Cache bucket identity: provider, units, rounded location and date.

    Stored bodies hold values in the units they were requested in.
    """

    model_config = ConfigDict(frozen=True)

    provider: str
    units: str = "imperial"
    latitude: float
    longitude: float
    day: date

    @classmethod
    def for_request(
        cls, provider: str, location: Location, day: date, units: str = "imperial"
    ) -> "CacheKey":
        """Build a key, rounding the location to 0.1 degrees."""
        latitude, longitude = location.rounded(precision=1)
        return cls(
            provider=provider,
            units=units,
            latitude=latitude,
            longitude=longitude,
            day=day,
        )

    @property
    def filename(self) -> str:
        return (
            f"{self.provider}_{self.units}_{self.latitude:.1f}_{self.longitude:.1f}_"
            f"{self.day:%Y%m%d}.json"
        )
