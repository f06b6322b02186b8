"""Shared resource fixtures for the core and server test suites."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from resource_search.models import Resource, ensure_resources

SAMPLE_DATA = Path(__file__).parent / "data" / "resources.json"

_DEFAULT_RESOURCE: Dict[str, Any] = {
    "title": "Test Resource",
    "description": "Test Description",
    "benefits": ["Test Benefit"],
    "url": "https://example.com",
    "category": "Test Category",
    "pricingModel": "Free",
    "difficulty": "Beginner",
    "tags": ["test", "example"],
    "technology": ["Test Tech"],
    "dateAdded": "2023-01-01",
    "popularity": 5,
}


@pytest.fixture
def make_resource():
    """Factory: make_resource(id, **overrides) -> Resource with test defaults."""

    def _make(resource_id: str, **overrides) -> Resource:
        data = dict(_DEFAULT_RESOURCE, id=resource_id)
        data.update(overrides)
        return Resource.model_validate(data)

    return _make


@pytest.fixture
def sample_resource_dicts() -> List[Dict[str, Any]]:
    with open(SAMPLE_DATA) as f:
        return json.load(f)


@pytest.fixture
def sample_resources(sample_resource_dicts):
    """The twelve catalogue entries shipped in data/resources.json."""
    return ensure_resources(sample_resource_dicts)


@pytest.fixture
def scenario_resources(make_resource):
    """Three resources: two AI tools sharing a tag, one hosting service."""
    return (
        make_resource("1", title="AI Writer", category="AI Tools", tags=["ai", "ml"], technology=[]),
        make_resource("2", title="AI Chat", category="AI Tools", tags=["ai", "nlp"], technology=[]),
        make_resource("3", title="Edge CDN", category="Hosting", tags=["cdn"], technology=[]),
    )
