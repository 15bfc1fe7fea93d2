"""Exception hierarchy for the JakeSky forecast core."""

from typing import Any


class JakeSkyError(Exception):
    """Base exception for all forecast errors.

    Attributes:
        message: Human-readable error message.
        context: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} | Context: {context_str}"


class ConfigError(JakeSkyError):
    """Raised when the location, credential or provider settings are invalid.

    Example context:
        - field: Setting that failed validation
        - error: Underlying validation error message
    """


class ProviderError(JakeSkyError):
    """Raised when a weather provider cannot deliver a usable forecast.

    Attributes:
        provider: Provider identifier (e.g. "accuweather").
        stage: Pipeline stage that failed ("fetch" or "normalize").
    """

    def __init__(
        self,
        message: str,
        provider: str,
        stage: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.provider = provider
        self.stage = stage
        super().__init__(
            message,
            context={"provider": provider, "stage": stage, **(context or {})},
        )


class BadResponseError(ProviderError):
    """Raised when a provider payload is malformed or incomplete.

    Attributes:
        field: Dotted path of the missing or invalid field, if known.
    """

    def __init__(
        self,
        message: str,
        provider: str,
        field: str | None = None,
        stage: str = "normalize",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.field = field
        details = dict(context or {})
        if field is not None:
            details["field"] = field
        super().__init__(message, provider, stage, context=details)


class ProviderTimeoutError(ProviderError):
    """Raised when a provider request exceeds its timeout."""

    def __init__(
        self, message: str, provider: str, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, provider, stage="fetch", context=context)


class TransportError(ProviderError):
    """Raised on connection failures and HTTP error statuses.

    Example context:
        - url: Endpoint that failed (never includes the API key)
        - status_code: HTTP status code if applicable
    """

    def __init__(
        self, message: str, provider: str, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message, provider, stage="fetch", context=context)


class CacheError(JakeSkyError):
    """Raised when a cache entry cannot be read, decoded or written.

    Example context:
        - path: Cache file involved
        - error: Underlying OS or decoding error
    """
