"""Main pipeline: configuration → forecast assembler → curated Weather."""

from datetime import datetime

from jakesky.utils.logger import setup_logger
from jakesky.weather.assembler import ForecastAssembler
from jakesky.weather.cache_manager import ResponseCache
from jakesky.weather.config import WeatherConfig
from jakesky.weather.models import Weather

logger = setup_logger(__name__)


def build_assembler(config: WeatherConfig) -> ForecastAssembler:
    """Wire the configured provider and cache into an assembler."""
    cache = ResponseCache(cache_dir=config.cache_dir) if config.use_cache else None
    return ForecastAssembler(provider=config.provider, config=config, cache=cache)


def run_forecast(
    config: WeatherConfig,
    reference_now: datetime | None = None,
    include_late_slot: bool | None = None,
) -> Weather:
    """Validate configuration and produce the curated forecast.

    Location and credential are checked before any network or cache access.

    Args:
        config: Run configuration.
        reference_now: Aware timestamp treated as "now" (defaults to the real time).
        include_late_slot: Optional override for the 22:00 slot.

    Returns:
        Curated Weather for the configured location.

    Raises:
        ConfigError: If location or credential are missing or invalid.
        ProviderError: If the provider fetch or normalization fails.
    """
    location = config.location()
    api_key = config.require_api_key()

    logger.info(
        f"Running forecast: provider={config.provider.value}, "
        f"location=({location.latitude}, {location.longitude}), "
        f"cache={'on' if config.use_cache else 'off'}"
    )

    assembler = build_assembler(config)
    return assembler.assemble(
        location,
        api_key,
        reference_now=reference_now,
        include_late_slot=include_late_slot,
    )
