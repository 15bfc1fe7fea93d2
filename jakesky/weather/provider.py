"""Closed set of supported weather providers."""

from enum import Enum
from typing import TYPE_CHECKING

from jakesky.config.schema import Location
from jakesky.utils.exceptions import BadResponseError
from jakesky.weather import accuweather_client, openweather_client
from jakesky.weather.models import CurrentConditions, HourlyRecord, ProviderResponse

if TYPE_CHECKING:
    from jakesky.weather.config import WeatherConfig


class WeatherProvider(str, Enum):
    """Weather data provider selected once per run.

    Each member dispatches to exactly one client module for fetching and
    normalization.
    """

    ACCUWEATHER = accuweather_client.PROVIDER_ID
    OPENWEATHER = openweather_client.PROVIDER_ID

    def fetch(
        self, location: Location, api_key: str, config: "WeatherConfig"
    ) -> ProviderResponse:
        """Query the provider for raw current and hourly data."""
        if self is WeatherProvider.ACCUWEATHER:
            client = accuweather_client.AccuWeatherClient(
                api_key, units=config.units, timeout=config.request_timeout_s
            )
        else:
            client = openweather_client.OpenWeatherClient(
                api_key, units=config.units, timeout=config.request_timeout_s
            )
        return client.fetch(location)

    def normalize(
        self, response: ProviderResponse
    ) -> tuple[CurrentConditions, list[HourlyRecord]]:
        """Convert a raw response from this provider into the normalized model.

        Raises:
            BadResponseError: If the response belongs to another provider or
                cannot be normalized.
        """
        if response.provider != self.value:
            raise BadResponseError(
                f"Response from '{response.provider}' passed to {self.value}",
                self.value,
                field="provider",
            )
        if self is WeatherProvider.ACCUWEATHER:
            return accuweather_client.normalize(response)
        return openweather_client.normalize(response)
