"""Helpers for pulling required fields out of provider JSON payloads.

Every helper raises BadResponseError naming the dotted field path, so a
missing temperature or summary is reported instead of silently defaulted.
"""

import json
from datetime import datetime
from typing import Any, TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ValidationError

from jakesky.utils.exceptions import BadResponseError

ModelT = TypeVar("ModelT", bound=BaseModel)

_MISSING = object()


def parse_json(body: str, provider: str, field: str) -> Any:
    """Decode a raw response body.

    Raises:
        BadResponseError: If the body is not valid JSON.
    """
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise BadResponseError(
            f"Invalid JSON in {provider} response",
            provider,
            field=field,
            context={"error": str(e)},
        ) from e


def _lookup(data: Any, path: str) -> Any:
    current = data
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def require(data: Any, path: str, provider: str, prefix: str = "") -> Any:
    """Return the value at a dotted path, which must be present and non-null."""
    value = _lookup(data, path)
    if value is _MISSING or value is None:
        raise BadResponseError(
            f"Missing required field '{prefix}{path}' in {provider} response",
            provider,
            field=f"{prefix}{path}",
        )
    return value


def optional(data: Any, path: str) -> Any | None:
    """Return the value at a dotted path, or None when absent."""
    value = _lookup(data, path)
    return None if value is _MISSING else value


def _as_number(value: Any, path: str, provider: str) -> float:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadResponseError(
            f"Field '{path}' in {provider} response is not a number: {value!r}",
            provider,
            field=path,
        )
    return float(value)


def require_number(data: Any, path: str, provider: str, prefix: str = "") -> float:
    """Return a required numeric field as float."""
    return _as_number(require(data, path, provider, prefix), f"{prefix}{path}", provider)


def optional_number(
    data: Any, path: str, provider: str, prefix: str = ""
) -> float | None:
    """Return an optional numeric field as float; present but non-numeric is an error."""
    value = optional(data, path)
    if value is None:
        return None
    return _as_number(value, f"{prefix}{path}", provider)


def require_list(data: Any, path: str, provider: str, prefix: str = "") -> list[Any]:
    """Return a required field that must be a JSON array."""
    value = require(data, path, provider, prefix)
    if not isinstance(value, list):
        raise BadResponseError(
            f"Field '{prefix}{path}' in {provider} response is not a list",
            provider,
            field=f"{prefix}{path}",
        )
    return value


def resolve_timezone(name: Any, provider: str, field: str) -> ZoneInfo:
    """Resolve an IANA timezone name reported by a provider."""
    if not isinstance(name, str):
        raise BadResponseError(
            f"Timezone in {provider} response is not a string: {name!r}",
            provider,
            field=field,
        )
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise BadResponseError(
            f"Unknown timezone '{name}' in {provider} response",
            provider,
            field=field,
        ) from e


def require_epoch(
    data: Any, path: str, tz: ZoneInfo, provider: str, prefix: str = ""
) -> datetime:
    """Convert a required epoch-seconds field to an aware datetime in ``tz``."""
    seconds = require_number(data, path, provider, prefix)
    try:
        return datetime.fromtimestamp(seconds, tz=tz)
    except (OverflowError, OSError, ValueError) as e:
        raise BadResponseError(
            f"Field '{prefix}{path}' in {provider} response is not a valid timestamp",
            provider,
            field=f"{prefix}{path}",
        ) from e


def build_record(model: type[ModelT], provider: str, field: str, **values: Any) -> ModelT:
    """Instantiate a normalized model, reporting validation failures as bad responses."""
    try:
        return model(**values)
    except ValidationError as e:
        invalid = ".".join(str(p) for p in e.errors()[0]["loc"])
        raise BadResponseError(
            f"Invalid {model.__name__} in {provider} response",
            provider,
            field=f"{field}{invalid}",
            context={"error": str(e)},
        ) from e
