"""Pydantic validation model for the forecast location."""

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """Validated geographic point a forecast is requested for."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def rounded(self, precision: int = 1) -> tuple[float, float]:
        """Return coordinates rounded for use as a stable cache identity.

        Negative zero is folded into zero so that points straddling the
        equator or prime meridian share one key.
        """
        return (
            round(self.latitude, precision) + 0.0,
            round(self.longitude, precision) + 0.0,
        )
