"""
Diversity Re-ranker Tests

First three admitted unconditionally; afterwards only a new category, an
unseen technology, or a relaxation draw below diversity_factor.
"""

import random

import pytest

from resource_search.models import RecommendationResult
from resource_search.recommendation.diversity import apply_diversity


@pytest.fixture
def recs(make_resource):
    layout = [
        ("a", "Frontend", ["JavaScript"]),
        ("b", "Frontend", ["JavaScript"]),
        ("c", "Frontend", ["JavaScript"]),
        ("d", "Frontend", ["JavaScript"]),
        ("e", "Backend", ["Python"]),
        ("f", "Frontend", ["TypeScript"]),
        ("g", "Frontend", ["JavaScript"]),
    ]
    return [
        RecommendationResult(
            resource=make_resource(rid, category=category, technology=tech),
            score=1.0 - i * 0.1,
            reason="content-based",
        )
        for i, (rid, category, tech) in enumerate(layout)
    ]


def _ids(results):
    return [r.resource.id for r in results]


class TestApplyDiversity:
    def test_zero_factor_drops_repeats(self, recs):
        assert _ids(apply_diversity(recs, 0, 10)) == ["a", "b", "c", "e", "f"]

    def test_zero_factor_is_deterministic(self, recs):
        first = apply_diversity(recs, 0, 10)
        for _ in range(5):
            assert _ids(apply_diversity(recs, 0, 10)) == _ids(first)

    def test_full_factor_admits_everything(self, recs):
        assert _ids(apply_diversity(recs, 1.0, 10, random.Random(0))) == _ids(recs)

    def test_seeded_rng_is_reproducible(self, recs):
        one = apply_diversity(recs, 0.5, 10, random.Random(42))
        two = apply_diversity(recs, 0.5, 10, random.Random(42))
        assert _ids(one) == _ids(two)

    def test_max_results(self, recs):
        assert _ids(apply_diversity(recs, 0, 2)) == ["a", "b"]

    @pytest.mark.parametrize("max_results", [0, -1])
    def test_non_positive_max(self, recs, max_results):
        assert apply_diversity(recs, 0.5, max_results) == []

    def test_input_not_mutated(self, recs):
        before = _ids(recs)
        apply_diversity(recs, 0, 3)
        assert _ids(recs) == before

    def test_empty(self):
        assert apply_diversity([], 0.3, 5) == []
