"""File-backed TTL cache for owner-scoped snapshots."""

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable

from household_finance.config import DEFAULT_CACHE_TTL_SECONDS, LOAN_CACHE_TTL_SECONDS, CacheConfig
from household_finance.sinks.serialization import serialize_value, to_dict
from household_finance.store.household import HouseholdDataStore

logger = logging.getLogger(__name__)

LOANS_CACHE_BASE = "household_finance:loans"


def with_cache_key(base: str, owner_id: str | None, version: str = "v1") -> str | None:
    """Build an owner-specific cache key, or None when nobody is signed in."""
    if not owner_id:
        return None
    return f"{base}:{version}:{owner_id}"


class JsonFileCache:
    """Cache entries as JSON files with an expiry timestamp.

    Reads never raise: missing, expired or unreadable entries are
    treated as a miss and removed. Write failures are logged.

    Parameters
    ----------
    directory : str | Path
        Directory holding one file per key.
    default_ttl : float
        Time to live in seconds when ``write`` is called without one.
    version : str
        Key version; bumping it orphans older entries.
    enabled : bool
        When False every read misses and writes are skipped.
    clock : Callable[[], float]
        Source of the current time in seconds.
    """

    def __init__(
        self,
        directory: str | Path,
        default_ttl: float = DEFAULT_CACHE_TTL_SECONDS,
        version: str = "v1",
        enabled: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = default_ttl
        self.version = version
        self.enabled = enabled
        self._clock = clock

    @classmethod
    def from_config(cls, config: CacheConfig) -> "JsonFileCache":
        return cls(
            config.directory,
            default_ttl=config.default_ttl_seconds,
            version=config.version,
            enabled=config.enabled,
        )

    def key_for(self, base: str, owner_id: str | None) -> str | None:
        return with_cache_key(base, owner_id, self.version)

    def _path(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self.directory / f"{digest}.json"

    def read(self, key: str) -> Any | None:
        if not self.enabled:
            return None
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                entry = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read cache key %r: %s", key, exc)
            self.clear(key)
            return None

        if not isinstance(entry, dict) or not isinstance(entry.get("expires_at"), (int, float)):
            self.clear(key)
            return None

        if entry["expires_at"] < self._clock():
            self.clear(key)
            return None

        return entry.get("value")

    def write(self, key: str, value: Any, ttl: float | None = None) -> None:
        if not self.enabled:
            return
        entry = {
            "key": key,
            "value": serialize_value(value),
            "expires_at": self._clock() + (self.default_ttl if ttl is None else ttl),
        }
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(self._path(key), "w", encoding="utf-8") as f:
                json.dump(entry, f, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Failed to write cache key %r: %s", key, exc)

    def clear(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to clear cache key %r: %s", key, exc)


class LoanSnapshotCache:
    """Cached list of an owner's loans with their repayments.

    Loan snapshots expire sooner than other cached data since repayments
    change them often.
    """

    def __init__(self, cache: JsonFileCache, ttl: float = LOAN_CACHE_TTL_SECONDS) -> None:
        self.cache = cache
        self.ttl = ttl

    @classmethod
    def from_config(cls, config: CacheConfig) -> "LoanSnapshotCache":
        return cls(JsonFileCache.from_config(config), ttl=config.loan_ttl_seconds)

    def read(self, owner_id: str | None) -> list[dict] | None:
        key = self.cache.key_for(LOANS_CACHE_BASE, owner_id)
        return self.cache.read(key) if key else None

    def write(self, store: HouseholdDataStore, owner_id: str | None) -> list[dict]:
        """Snapshot the owner's loans, newest first, and cache them."""
        key = self.cache.key_for(LOANS_CACHE_BASE, owner_id)
        if key is None:
            return []
        snapshot = [
            {
                "loan": to_dict(loan),
                "repayments": [to_dict(r) for r in store.get_loan_repayments(loan.loan_id, owner_id)],
            }
            for loan in store.get_loans(owner_id)
        ]
        self.cache.write(key, snapshot, ttl=self.ttl)
        return snapshot

    def clear(self, owner_id: str | None) -> None:
        key = self.cache.key_for(LOANS_CACHE_BASE, owner_id)
        if key:
            self.cache.clear(key)
