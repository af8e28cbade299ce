"""In-memory persistence and caching."""

from household_finance.store.cache import JsonFileCache, LoanSnapshotCache, with_cache_key
from household_finance.store.household import HouseholdDataStore

__all__ = ["HouseholdDataStore", "JsonFileCache", "LoanSnapshotCache", "with_cache_key"]
