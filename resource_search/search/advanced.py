"""
Boolean search execution and faceted filtering over a fuzzy index.

advanced_search evaluates a parsed query left to right: AND intersects,
OR unions (first-seen order), NOT subtracts. Without explicit operators the
per-term hits are unioned.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from ..models.resource import Resource
from ..validation import require_query
from .facets import FacetDimension, facet_values
from .fuzzy_index import FuzzyIndex
from .query_parser import parse_query


def _union(
    left: List[Tuple[Resource, float]],
    right: Iterable[Tuple[Resource, float]],
) -> List[Tuple[Resource, float]]:
    positions: Dict[str, int] = {r.id: i for i, (r, _) in enumerate(left)}
    merged = list(left)
    for resource, score in right:
        pos = positions.get(resource.id)
        if pos is None:
            positions[resource.id] = len(merged)
            merged.append((resource, score))
        elif score > merged[pos][1]:
            merged[pos] = (resource, score)
    return merged


def advanced_search(index: FuzzyIndex, raw_query: str) -> List[Tuple[Resource, float]]:
    """
    Run a boolean query against the index.

    Returns (resource, relevance) pairs. A query with no terms returns the
    whole snapshot with relevance 1.0.
    """
    require_query(raw_query)
    parsed = parse_query(raw_query)
    if parsed.is_empty:
        return [(r, 1.0) for r in index.resources]

    if not parsed.operators:
        results: List[Tuple[Resource, float]] = []
        for term in parsed.terms:
            results = _union(results, index.search(term))
        return results

    results = index.search(parsed.terms[0])
    for operator, term in zip(parsed.operators, parsed.terms[1:]):
        term_hits = index.search(term)
        term_ids = {r.id for r, _ in term_hits}
        if operator == "AND":
            results = [(r, s) for r, s in results if r.id in term_ids]
        elif operator == "OR":
            results = _union(results, term_hits)
        elif operator == "NOT":
            results = [(r, s) for r, s in results if r.id not in term_ids]
    return results


def filter_resources(
    resources: Sequence[Resource],
    filters: Mapping[str, Iterable[str]],
) -> List[Resource]:
    """
    Keep resources matching every non-empty facet filter.

    Matching within one filter is OR: a multi-valued resource passes when any
    of its values is allowed. Comparison is case-insensitive.
    """
    parsed = []
    for key, values in filters.items():
        allowed = {v.lower() for v in values if v}
        if allowed:
            parsed.append((FacetDimension.parse(key), allowed))

    results = []
    for resource in resources:
        if all(
            any(v.lower() in allowed for v in facet_values(resource, dimension))
            for dimension, allowed in parsed
        ):
            results.append(resource)
    return results
