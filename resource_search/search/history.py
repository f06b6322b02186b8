"""
Search history and popular-search tallies with pluggable persistence.

Both are host-owned state objects (no module-level singletons): hydrate from
storage at construction, mutate under a lock, persist after every change.
Corrupt or unavailable storage degrades to an empty in-memory list with a
logged warning and never raises past this module.

Caps:
- MAX_SEARCH_HISTORY (50): the persisted per-user history served by the API.
- RECENT_SEARCH_LIMIT (10): the short recent-query list behind suggestions.
- MAX_POPULAR_SEARCHES (20): the popular-search tally.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Generic, List, Optional, Protocol, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..models.search import PopularSearch, SearchHistoryItem, utc_now_iso

logger = logging.getLogger(__name__)

SEARCH_HISTORY_KEY = "resource_search_history"
POPULAR_SEARCHES_KEY = "resource_popular_searches"
MAX_SEARCH_HISTORY = 50
RECENT_SEARCH_LIMIT = 10
MAX_POPULAR_SEARCHES = 20


class HistoryStorage(Protocol):
    """String key/value persistence. Implement for a JSON file or in-memory."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key. May raise OSError."""
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage; used by tests and when no path is configured."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Storage backed by one JSON object file (e.g. cache/search_history.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


T = TypeVar("T", bound=BaseModel)


class _PersistedList(Generic[T]):
    """Lock-guarded, capped list of models mirrored to storage as JSON."""

    item_type: Type[BaseModel]

    def __init__(
        self,
        storage: Optional[HistoryStorage],
        key: str,
        max_items: int,
    ):
        if max_items <= 0:
            raise ValueError(f"max_items must be > 0, got {max_items}")
        self._storage = storage if storage is not None else MemoryStorage()
        self._key = key
        self._max_items = max_items
        self._lock = threading.Lock()
        self._items: List[T] = self._load()

    @property
    def max_items(self) -> int:
        return self._max_items

    def _load(self) -> List[T]:
        try:
            raw = self._storage.get(self._key)
        except OSError as e:
            logger.warning("Storage unavailable for %s, starting empty: %s", self._key, e)
            return []
        if not raw:
            return []
        try:
            items = TypeAdapter(List[self.item_type]).validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Corrupt %s in storage, starting empty: %s", self._key, e.error_count()
            )
            return []
        return items[: self._max_items]

    def _persist(self) -> None:
        payload = json.dumps([item.model_dump() for item in self._items])
        try:
            self._storage.set(self._key, payload)
        except OSError as e:
            logger.warning("Could not persist %s: %s", self._key, e)

    def items(self) -> List[T]:
        with self._lock:
            return [item.model_copy() for item in self._items]

    def clear(self) -> None:
        """Empty the list and persist the empty state."""
        with self._lock:
            self._items = []
            self._persist()

    def __len__(self) -> int:
        return len(self._items)

    def _find(self, query: str) -> int:
        needle = query.lower()
        for i, item in enumerate(self._items):
            if item.query.lower() == needle:
                return i
        return -1


class SearchHistory(_PersistedList[SearchHistoryItem]):
    """
    Most-recent-first search history.

    A repeated query (case-insensitive) moves to the front with count + 1
    and a fresh timestamp instead of adding a duplicate.
    """

    item_type = SearchHistoryItem

    def __init__(
        self,
        storage: Optional[HistoryStorage] = None,
        key: str = SEARCH_HISTORY_KEY,
        max_items: int = MAX_SEARCH_HISTORY,
    ):
        super().__init__(storage, key, max_items)

    def add(self, query: str) -> Optional[SearchHistoryItem]:
        """Record a search; blank or non-string queries are ignored."""
        if not isinstance(query, str) or not query.strip():
            return None
        query = query.strip()
        with self._lock:
            idx = self._find(query)
            if idx >= 0:
                existing = self._items.pop(idx)
                item = SearchHistoryItem(
                    query=query, timestamp=utc_now_iso(), count=existing.count + 1
                )
            else:
                item = SearchHistoryItem(query=query)
            self._items.insert(0, item)
            del self._items[self._max_items:]
            self._persist()
            return item.model_copy()

    def queries(self, limit: Optional[int] = None) -> List[str]:
        with self._lock:
            items = self._items if limit is None else self._items[:limit]
            return [item.query for item in items]


class PopularSearches(_PersistedList[PopularSearch]):
    """Search tally ordered by count, then by most recently searched."""

    item_type = PopularSearch

    def __init__(
        self,
        storage: Optional[HistoryStorage] = None,
        key: str = POPULAR_SEARCHES_KEY,
        max_items: int = MAX_POPULAR_SEARCHES,
    ):
        super().__init__(storage, key, max_items)

    def record(self, query: str) -> Optional[PopularSearch]:
        if not isinstance(query, str) or not query.strip():
            return None
        query = query.strip()
        with self._lock:
            idx = self._find(query)
            count = self._items.pop(idx).count + 1 if idx >= 0 else 1
            entry = PopularSearch(query=query, count=count, last_searched=utc_now_iso())
            # Front insert + stable sort keeps the most recent first among equal counts.
            self._items.insert(0, entry)
            self._items.sort(key=lambda p: p.count, reverse=True)
            del self._items[self._max_items:]
            self._persist()
            return entry.model_copy()

    def top(self, limit: Optional[int] = None) -> List[PopularSearch]:
        with self._lock:
            items = self._items if limit is None else self._items[:limit]
            return [p.model_copy() for p in items]
