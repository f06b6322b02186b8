"""Application state: resource snapshot, memoized index, history stores, recommendation config."""

import logging
import threading
from typing import Iterable, Optional, Tuple

from resource_search.models import RecommendationConfig, Resource, check_unique_ids, ensure_resources
from resource_search.recommendation import RecommendationEngine
from resource_search.search import (
    FuzzyIndex,
    JsonFileStorage,
    PopularSearches,
    SearchHistory,
    SuggestionEngine,
)

from .config import ServerConfig, get_config
from .services import ResourceLoader, load_recommendation_config

logger = logging.getLogger(__name__)


class AppState:
    """
    Global application state.

    The resource snapshot is replaced wholesale, never mutated. The fuzzy
    index, suggestion engine, and recommendation engine are rebuilt lazily
    the first time they are asked for after a snapshot or config change.
    """

    def __init__(
        self,
        config: ServerConfig,
        resources: Optional[Iterable[Resource]] = None,
    ):
        self.config = config
        self._lock = threading.Lock()

        self.resource_loader = ResourceLoader(config.resources_json_path)
        self._resources: Tuple[Resource, ...] = (
            self._load_resources() if resources is None else self._validated(resources)
        )

        storage = JsonFileStorage(config.history_path)
        self.search_history = SearchHistory(storage, max_items=config.max_search_history)
        self.popular_searches = PopularSearches(storage)

        self._recommendation_config = load_recommendation_config(config.recommendation_config_path)

        self._index: Optional[FuzzyIndex] = None
        self._suggestion_engine: Optional[SuggestionEngine] = None
        self._recommendation_engine: Optional[RecommendationEngine] = None

    @staticmethod
    def _validated(resources: Iterable[Resource]) -> Tuple[Resource, ...]:
        snapshot = ensure_resources(resources)
        check_unique_ids(snapshot)
        return snapshot

    def _load_resources(self) -> Tuple[Resource, ...]:
        try:
            return self.resource_loader.load()
        except FileNotFoundError:
            logger.warning("Resources file not found: %s; starting empty", self.resource_loader.path)
            return ()

    @property
    def resources(self) -> Tuple[Resource, ...]:
        return self._resources

    @property
    def recommendation_config(self) -> RecommendationConfig:
        return self._recommendation_config

    def set_resources(self, resources: Iterable[Resource]) -> None:
        """Swap in a new snapshot; derived engines rebuild on next use."""
        snapshot = self._validated(resources)
        with self._lock:
            self._resources = snapshot
            self._index = None
            self._suggestion_engine = None
            self._recommendation_engine = None

    def reload_resources(self) -> int:
        self.set_resources(self.resource_loader.load())
        return len(self._resources)

    def get_index(self) -> FuzzyIndex:
        """Fuzzy index for the current snapshot, built once per snapshot."""
        with self._lock:
            if self._index is None or not self._index.is_built_for(self._resources):
                self._index = FuzzyIndex().build(self._resources)
                self._suggestion_engine = None
            return self._index

    def get_suggestion_engine(self) -> SuggestionEngine:
        index = self.get_index()
        with self._lock:
            if self._suggestion_engine is None or self._suggestion_engine.index is not index:
                self._suggestion_engine = SuggestionEngine(index, popular=self.popular_searches)
            return self._suggestion_engine

    def get_recommendation_engine(self) -> RecommendationEngine:
        with self._lock:
            if self._recommendation_engine is None:
                self._recommendation_engine = RecommendationEngine(
                    self._resources, self._recommendation_config
                )
            return self._recommendation_engine

    def update_recommendation_config(self, **changes) -> RecommendationConfig:
        """Partial update; fields not named keep their current values."""
        with self._lock:
            self._recommendation_config = self._recommendation_config.updated(**changes)
            self._recommendation_engine = None
            return self._recommendation_config

    def record_search(self, query: str) -> None:
        self.search_history.add(query)
        self.popular_searches.record(query)


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Install (or with None, reset) the global state."""
    global _state
    _state = state
