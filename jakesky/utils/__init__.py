from .exceptions import (
    BadResponseError,
    CacheError,
    ConfigError,
    JakeSkyError,
    ProviderError,
    ProviderTimeoutError,
    TransportError,
)
from .logger import setup_logger

__all__ = [
    "setup_logger",
    "JakeSkyError",
    "ConfigError",
    "ProviderError",
    "BadResponseError",
    "ProviderTimeoutError",
    "TransportError",
    "CacheError",
]
