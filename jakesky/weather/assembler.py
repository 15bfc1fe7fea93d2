"""Forecast assembler: cache lookup, provider fetch, normalization and slot selection."""

from datetime import datetime, timezone, tzinfo

from jakesky.config.schema import Location
from jakesky.utils.exceptions import BadResponseError, CacheError, ConfigError
from jakesky.utils.logger import setup_logger
from jakesky.weather import time_filter
from jakesky.weather.cache_manager import ResponseCache
from jakesky.weather.config import WeatherConfig
from jakesky.weather.models import (
    CacheKey,
    CurrentConditions,
    HourlyRecord,
    ProviderResponse,
    Weather,
)
from jakesky.weather.provider import WeatherProvider

logger = setup_logger(__name__)


class ForecastAssembler:
    """Coordinates cache lookups, provider fetches and filtering for one run.

    This is the only component that triggers I/O. Cache failures are logged
    and never fail the forecast; provider and configuration errors propagate.

    Args:
        provider: Provider queried on a cache miss.
        config: Run configuration (units, timeout, TTL, fallback timezone).
        cache: Response cache, or None to always fetch live.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        config: WeatherConfig,
        cache: ResponseCache | None = None,
    ) -> None:
        self.provider = provider
        self.config = config
        self.cache = cache

    def assemble(
        self,
        location: Location,
        api_key: str,
        reference_now: datetime | None = None,
        include_late_slot: bool | None = None,
    ) -> Weather:
        """Produce the curated forecast for a location.

        Args:
            location: Forecast location.
            api_key: Provider credential.
            reference_now: Aware timestamp treated as "now" (defaults to the
                current instant in the configured timezone, or UTC).
            include_late_slot: Force the 22:00 slot on or off. When None it
                is included on Fridays and Saturdays, local time.

        Returns:
            Weather with current conditions and the selected slots.

        Raises:
            ConfigError: If the credential is blank or reference_now is naive.
            ProviderError: If the provider fetch or normalization fails.
        """
        if not api_key or not api_key.strip():
            raise ConfigError(
                "Provider API key is required",
                context={"provider": self.provider.value},
            )

        if reference_now is None:
            reference_now = datetime.now(self.config.tzinfo or timezone.utc)
        elif reference_now.tzinfo is None or reference_now.utcoffset() is None:
            raise ConfigError(
                "Reference time must be timezone-aware",
                context={"reference_now": reference_now.isoformat()},
            )

        current, hourly = self._load(location, api_key, reference_now)

        zone = current.timestamp.tzinfo
        if include_late_slot is None:
            include_late_slot = time_filter.is_late_slot_day(reference_now, zone)

        forecasts = time_filter.select(hourly, reference_now, include_late_slot, tz=zone)

        weather = Weather(
            provider=self.provider.value,
            timezone=str(zone),
            current=current,
            forecasts=tuple(forecasts),
        )
        logger.info(
            f"Forecast for ({location.latitude}, {location.longitude}) from "
            f"{self.provider.value}: {len(hourly)} hourly records, "
            f"slots {[slot.name for slot in weather.slots]}"
        )
        return weather

    def cache_key(self, location: Location, reference_now: datetime) -> CacheKey:
        """Build the cache bucket for a location, units and local date of reference_now.

        Without a configured timezone the date is taken in reference_now's own
        zone; _load then checks freshness in the location's zone.
        """
        local_now = reference_now.astimezone(self.config.tzinfo or reference_now.tzinfo)
        return CacheKey.for_request(
            self.provider.value, location, local_now.date(), units=self.config.units
        )

    def _load(
        self, location: Location, api_key: str, reference_now: datetime
    ) -> tuple[CurrentConditions, list[HourlyRecord]]:
        key = self.cache_key(location, reference_now)

        cached = self._cached_response(key, reference_now)
        if cached is not None:
            try:
                current, hourly = self.provider.normalize(cached)
            except BadResponseError as e:
                logger.warning(f"Discarding unreadable cache entry {key.filename}: {e}")
                self._invalidate(key)
            else:
                if _same_local_day(cached, reference_now, current.timestamp.tzinfo):
                    return current, hourly
                logger.info(
                    f"Cache entry {key.filename} was fetched on an earlier local day, "
                    "fetching live"
                )

        response = self.provider.fetch(location, api_key, self.config)
        result = self.provider.normalize(response)
        self._store(key, response, reference_now)
        return result

    def _cached_response(
        self, key: CacheKey, reference_now: datetime
    ) -> ProviderResponse | None:
        if self.cache is None:
            return None
        try:
            return self.cache.get(key, now=reference_now)
        except CacheError as e:
            logger.warning(f"Cache read failed, fetching live: {e}")
            return None

    def _store(
        self, key: CacheKey, response: ProviderResponse, reference_now: datetime
    ) -> None:
        if self.cache is None:
            return
        try:
            self.cache.put(
                key, response, ttl_seconds=self.config.cache_ttl_seconds, now=reference_now
            )
        except CacheError as e:
            logger.warning(f"Cache write skipped: {e}")

    def _invalidate(self, key: CacheKey) -> None:
        if self.cache is None:
            return
        try:
            self.cache.invalidate(key)
        except CacheError as e:
            logger.warning(f"Cache invalidation failed: {e}")


def _same_local_day(cached: ProviderResponse, reference_now: datetime, zone: tzinfo) -> bool:
    """True when the entry was stored on reference_now's date in the location zone."""
    if cached.cached_at is None:
        return True
    return cached.cached_at.astimezone(zone).date() == reference_now.astimezone(zone).date()
