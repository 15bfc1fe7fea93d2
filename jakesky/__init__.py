"""JakeSky: a curated weather forecast for the hours that matter."""

__version__ = "0.1.0"
