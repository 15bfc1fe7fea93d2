"""Configuration loader for forecast runs."""

from typing import Any

from pydantic import ValidationError

from ..utils.exceptions import ConfigError
from ..utils.logger import setup_logger
from ..weather.config import WeatherConfig

logger = setup_logger(__name__)


def load_config(**overrides: Any) -> WeatherConfig:
    """Load and validate forecast configuration.

    Explicit overrides win over JAKESKY_* environment variables; overrides
    passed as None are ignored so unset CLI flags fall through to the
    environment.

    Args:
        **overrides: WeatherConfig field values supplied by the caller.

    Returns:
        Validated WeatherConfig.

    Raises:
        ConfigError: If any setting fails validation.
    """
    values = {k: v for k, v in overrides.items() if v is not None}

    try:
        config = WeatherConfig(**values)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        logger.error(f"Configuration validation failed for: {fields}")
        raise ConfigError(
            "Invalid forecast configuration",
            context={"fields": fields, "error": str(e)},
        ) from e

    logger.debug(
        f"Loaded config: provider={config.provider.value}, units={config.units}, "
        f"use_cache={config.use_cache}"
    )
    return config
