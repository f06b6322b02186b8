"""
Faceted counts over a query-narrowed resource set.

Narrowing is a plain case-insensitive substring match on title, description,
and tags; it is cheap and exact, unlike the fuzzy index. Counting is a single
pass over the narrowed set.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..errors import InvalidArgumentError
from ..models.resource import Resource
from ..validation import require_query

FacetCounts = Dict[str, int]

# Bucket for a resource with no category, pricing, or difficulty label.
UNSPECIFIED = "Unspecified"


class FacetDimension(str, Enum):
    CATEGORY = "category"
    PRICING = "pricing"
    DIFFICULTY = "difficulty"
    TECHNOLOGY = "technology"
    TAG = "tag"
    BENEFIT = "benefit"

    @property
    def is_multi_valued(self) -> bool:
        return self in (FacetDimension.TECHNOLOGY, FacetDimension.TAG, FacetDimension.BENEFIT)

    @classmethod
    def parse(cls, value) -> "FacetDimension":
        """Accept enum members, names, plurals, and resource field names."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        dimension = _DIMENSION_ALIASES.get(key)
        if dimension is None:
            raise InvalidArgumentError(f"Unknown facet dimension: {value!r}")
        return dimension


_DIMENSION_ALIASES = {
    "category": FacetDimension.CATEGORY,
    "categories": FacetDimension.CATEGORY,
    "pricing": FacetDimension.PRICING,
    "pricingmodel": FacetDimension.PRICING,
    "pricing_model": FacetDimension.PRICING,
    "pricingmodels": FacetDimension.PRICING,
    "difficulty": FacetDimension.DIFFICULTY,
    "difficultylevels": FacetDimension.DIFFICULTY,
    "technology": FacetDimension.TECHNOLOGY,
    "technologies": FacetDimension.TECHNOLOGY,
    "tag": FacetDimension.TAG,
    "tags": FacetDimension.TAG,
    "benefit": FacetDimension.BENEFIT,
    "benefits": FacetDimension.BENEFIT,
}

# Key prefixes for the flattened wire format.
_FLAT_PREFIXES = {
    FacetDimension.CATEGORY: "category",
    FacetDimension.PRICING: "pricing",
    FacetDimension.DIFFICULTY: "difficulty",
    FacetDimension.TECHNOLOGY: "technology",
    FacetDimension.TAG: "tag",
    FacetDimension.BENEFIT: "benefits",
}


def facet_values(resource: Resource, dimension: FacetDimension) -> List[str]:
    """
    Values a resource contributes to a dimension.

    Single-valued dimensions always yield exactly one value (UNSPECIFIED when
    the label is empty); multi-valued ones skip empty strings.
    """
    if dimension is FacetDimension.CATEGORY:
        return [resource.category or UNSPECIFIED]
    if dimension is FacetDimension.PRICING:
        return [resource.pricing_model or UNSPECIFIED]
    if dimension is FacetDimension.DIFFICULTY:
        return [resource.difficulty or UNSPECIFIED]
    if dimension is FacetDimension.TECHNOLOGY:
        values = resource.technology
    elif dimension is FacetDimension.TAG:
        values = resource.tags
    else:
        values = resource.benefits
    return [v for v in values if v]


def narrow_resources(resources: Sequence[Resource], query: Optional[str]) -> List[Resource]:
    """Resources whose title, description, or any tag contains query."""
    if query is None:
        return list(resources)
    require_query(query)
    needle = query.strip().lower()
    if not needle:
        return list(resources)
    return [
        r for r in resources
        if needle in r.title.lower()
        or needle in r.description.lower()
        or any(needle in tag.lower() for tag in r.tags)
    ]


def _tally(resources: Sequence[Resource], dimension: FacetDimension) -> FacetCounts:
    counts: FacetCounts = {}
    for resource in resources:
        for value in facet_values(resource, dimension):
            counts[value] = counts.get(value, 0) + 1
    return counts


def count_facet(
    resources: Sequence[Resource],
    query: Optional[str],
    dimension,
) -> FacetCounts:
    """
    Count values of one dimension across the query-narrowed set.

    For category, pricing, and difficulty the counts sum to the narrowed-set
    size, with unlabelled resources counted under UNSPECIFIED. Multi-valued
    dimensions may count one resource in several buckets.
    """
    dimension = FacetDimension.parse(dimension)
    return _tally(narrow_resources(resources, query), dimension)


def count_all_facets(resources: Sequence[Resource], query: Optional[str]) -> Dict[str, object]:
    """All six dimensions in one pass, plus total_results."""
    narrowed = narrow_resources(resources, query)
    counts: Dict[FacetDimension, FacetCounts] = {d: {} for d in FacetDimension}
    for resource in narrowed:
        for dimension, bucket in counts.items():
            for value in facet_values(resource, dimension):
                bucket[value] = bucket.get(value, 0) + 1
    result: Dict[str, object] = {d.value: c for d, c in counts.items()}
    result["total_results"] = len(narrowed)
    return result


def flatten_facet_counts(all_counts: Dict[str, object]) -> FacetCounts:
    """Flatten count_all_facets output into prefix_value keys for the API."""
    flat: FacetCounts = {}
    for dimension in FacetDimension:
        prefix = _FLAT_PREFIXES[dimension]
        for value, count in all_counts.get(dimension.value, {}).items():
            flat[f"{prefix}_{value}"] = count
    return flat
