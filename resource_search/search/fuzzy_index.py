"""
Weighted fuzzy index over title, description, benefits, and tags.

Matching is typo-tolerant alignment (rapidfuzz partial ratio, falling back to
full ratio when a field value is shorter than the query) rather than substring
search. Per-field similarities for all values are computed in one numpy
matrix per field. Scores combine like Fuse.js: each matched field contributes
distance ** weight, and relevance is 1 - product, so 1.0 is best.

The index is tied to one resource snapshot. Callers rebuild it wholesale when
the collection changes; there is no incremental update.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from rapidfuzz import fuzz, process, utils

from ..errors import IndexNotBuiltError
from ..models.resource import Resource
from ..validation import require_limit, require_query

logger = logging.getLogger(__name__)

# Relative field weights; title counts 4x tags.
FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.4,
    "description": 0.3,
    "benefits": 0.2,
    "tags": 0.1,
}

# Max normalized distance (0 = identical) for a field to count as a match.
DEFAULT_THRESHOLD = 0.3

# Floor for a perfect-match distance so it still carries its field weight.
_EPSILON = 0.001


@dataclass(frozen=True)
class _FieldColumn:
    """Flattened, pre-processed values of one field and their owning resource."""

    choices: Tuple[str, ...]
    owners: np.ndarray
    lengths: np.ndarray
    weight: float


def _field_values(resource: Resource, field: str) -> List[str]:
    value = getattr(resource, field, None)
    if isinstance(value, str):
        return [value] if value else []
    return [v for v in (value or []) if isinstance(v, str) and v]


class FuzzyIndex:
    """
    Fuzzy index over one resource snapshot.

    Usage:
        index = FuzzyIndex().build(resources)
        hits = index.search("reakt", limit=5)   # [(resource, relevance), ...]
    """

    def __init__(
        self,
        weights: Optional[Dict[str, float]] = None,
        threshold: float = DEFAULT_THRESHOLD,
    ):
        weights = dict(weights or FIELD_WEIGHTS)
        total = sum(weights.values())
        self._weights = {k: v / total for k, v in weights.items()} if total > 0 else weights
        self._threshold = threshold
        self._resources: Optional[Tuple[Resource, ...]] = None
        self._source: Optional[Sequence[Resource]] = None
        self._columns: Dict[str, _FieldColumn] = {}

    @property
    def is_built(self) -> bool:
        return self._resources is not None

    @property
    def resources(self) -> Tuple[Resource, ...]:
        if self._resources is None:
            raise IndexNotBuiltError("Fuzzy index has not been built")
        return self._resources

    def is_built_for(self, resources: Sequence[Resource]) -> bool:
        """True if this index was built from this exact collection object."""
        return self._source is resources

    def build(self, resources: Sequence[Resource]) -> "FuzzyIndex":
        """Index a resource snapshot, replacing anything indexed before."""
        snapshot = tuple(resources)
        columns: Dict[str, _FieldColumn] = {}
        for field, weight in self._weights.items():
            choices: List[str] = []
            owners: List[int] = []
            for idx, resource in enumerate(snapshot):
                for value in _field_values(resource, field):
                    choices.append(utils.default_process(value))
                    owners.append(idx)
            columns[field] = _FieldColumn(
                choices=tuple(choices),
                owners=np.asarray(owners, dtype=np.int64),
                lengths=np.asarray([len(c) for c in choices], dtype=np.int64),
                weight=weight,
            )
        self._columns = columns
        self._resources = snapshot
        self._source = resources
        logger.debug("Built fuzzy index over %d resources", len(snapshot))
        return self

    def _field_distances(self, query: str, column: _FieldColumn, size: int) -> np.ndarray:
        """Best (lowest) distance per resource for one field; 1.0 where absent."""
        distances = np.ones(size, dtype=np.float64)
        if not column.choices:
            return distances
        partial = process.cdist([query], column.choices, scorer=fuzz.partial_ratio)[0]
        full = process.cdist([query], column.choices, scorer=fuzz.ratio)[0]
        # partial_ratio aligns the shorter string inside the longer one; only
        # trust it when the field value is at least as long as the query.
        similarity = np.where(column.lengths >= len(query), partial, full) / 100.0
        np.minimum.at(distances, column.owners, 1.0 - similarity)
        return distances

    def search(self, query: str, limit: Optional[int] = None) -> List[Tuple[Resource, float]]:
        """
        Return (resource, relevance) pairs, best first, relevance in [0, 1].

        Raises IndexNotBuiltError before build(), InvalidArgumentError for a
        non-string query or bad limit. Empty query or limit 0 returns [].
        """
        require_query(query)
        limit = require_limit(limit)
        resources = self.resources
        processed = utils.default_process(query)
        if not processed or limit == 0 or not resources:
            return []

        size = len(resources)
        matched = np.zeros(size, dtype=bool)
        combined = np.ones(size, dtype=np.float64)
        for column in self._columns.values():
            distances = self._field_distances(processed, column, size)
            hit = distances <= self._threshold
            matched |= hit
            combined = np.where(
                hit,
                combined * np.power(np.maximum(distances, _EPSILON), column.weight),
                combined,
            )

        relevance = 1.0 - combined
        candidates = np.flatnonzero(matched)
        # Stable: ties keep collection order.
        order = candidates[np.argsort(-relevance[candidates], kind="stable")]
        if limit is not None:
            order = order[:limit]
        return [(resources[i], float(relevance[i])) for i in order]


def build_index(resources: Sequence[Resource], **kwargs) -> FuzzyIndex:
    """Build and return a FuzzyIndex for this snapshot."""
    return FuzzyIndex(**kwargs).build(resources)
