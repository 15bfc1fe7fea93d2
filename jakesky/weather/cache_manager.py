"""On-disk cache of raw provider responses, one entry per cache bucket."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from jakesky.utils.exceptions import CacheError
from jakesky.utils.logger import setup_logger
from jakesky.weather.models import CacheKey, ProviderResponse

logger = setup_logger(__name__)


class ResponseCache:
    """Stores provider responses as JSON files keyed by provider, location and date.

    Entries are replaced atomically (temp file + rename), so a crash during
    a write leaves either the previous entry or the new one, never a
    truncated file. The directory is created on first write.

    Args:
        cache_dir: Directory for cached response files.
    """

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def path_for(self, key: CacheKey) -> Path:
        """Return the file path backing a cache key."""
        return self.cache_dir / key.filename

    def get(self, key: CacheKey, now: datetime | None = None) -> ProviderResponse | None:
        """Return the cached response for a key if present and fresh.

        Args:
            key: Cache bucket to look up.
            now: Reference instant for the TTL check (defaults to current UTC time).

        Returns:
            Stored ProviderResponse, or None on a miss or expired entry.

        Raises:
            CacheError: If the entry exists but cannot be read or decoded.
        """
        path = self.path_for(key)
        if not path.exists():
            logger.debug(f"No cache entry for {key.filename}")
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheError(
                "Failed to read cache entry",
                context={"path": str(path), "error": str(e)},
            ) from e

        try:
            response = ProviderResponse.model_validate_json(raw)
        except ValidationError as e:
            raise CacheError(
                "Corrupt cache entry",
                context={"path": str(path), "error": str(e)},
            ) from e

        if response.provider != key.provider:
            raise CacheError(
                "Cache entry belongs to a different provider",
                context={"path": str(path), "provider": response.provider},
            )
        if response.units != key.units:
            raise CacheError(
                "Cache entry holds different units",
                context={"path": str(path), "units": response.units},
            )

        now = now or datetime.now(timezone.utc)
        if response.is_expired(now):
            logger.debug(
                f"Cache entry {key.filename} is stale "
                f"({response.age(now)} old, ttl {response.ttl_seconds}s)"
            )
            return None

        logger.info(f"Cache hit: {key.filename}")
        return response

    def put(
        self,
        key: CacheKey,
        response: ProviderResponse,
        ttl_seconds: int,
        now: datetime | None = None,
    ) -> ProviderResponse:
        """Store a response under a key, replacing any previous entry.

        Args:
            key: Cache bucket to write.
            response: Raw provider response.
            ttl_seconds: Time-to-live for the entry.
            now: Timestamp recorded as the caching time (defaults to current UTC time).

        Returns:
            The response as stored, stamped with cached_at and ttl_seconds.

        Raises:
            ValueError: If ttl_seconds is not positive.
            CacheError: If the entry cannot be written.
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        stored = response.model_copy(
            update={
                "cached_at": now or datetime.now(timezone.utc),
                "ttl_seconds": ttl_seconds,
            }
        )
        path = self.path_for(key)
        tmp_path: Path | None = None

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.cache_dir,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(stored.model_dump_json())
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise CacheError(
                "Failed to write cache entry",
                context={"path": str(path), "error": str(e)},
            ) from e

        logger.info(f"Saved {key.provider} response to cache: {key.filename}")
        return stored

    def invalidate(self, key: CacheKey) -> bool:
        """Remove the entry for a key.

        Returns:
            True if an entry was removed, False if none existed.

        Raises:
            CacheError: If the entry exists but cannot be removed.
        """
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheError(
                "Failed to remove cache entry",
                context={"path": str(path), "error": str(e)},
            ) from e

        logger.info(f"Invalidated cache entry: {key.filename}")
        return True
