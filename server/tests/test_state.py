"""
App State Tests

Scenarios:
- index is built once per snapshot and rebuilt after set_resources
- recommendation engine picks up partial config updates
- history file shared by recent and popular searches, corrupt file ignored
- missing resources file starts empty; config file loaded from sections
"""

import json

import pytest

from resource_search.errors import InvalidArgumentError
from server.config import ServerConfig
from server.services import ResourceLoader, load_recommendation_config
from server.state import AppState


@pytest.fixture
def config(tmp_path):
    return ServerConfig(
        resources_json_path=tmp_path / "resources.json",
        history_path=tmp_path / "history.json",
    )


@pytest.fixture
def state(config, sample_resources):
    return AppState(config, resources=sample_resources)


class TestSnapshot:
    def test_index_memoized(self, state):
        assert state.get_index() is state.get_index()
        assert state.get_suggestion_engine() is state.get_suggestion_engine()

    def test_set_resources_rebuilds(self, state, make_resource):
        index = state.get_index()
        state.set_resources([make_resource("only")])
        assert state.get_index() is not index
        assert [r.id for r in state.get_index().resources] == ["only"]
        assert state.get_suggestion_engine().index is state.get_index()

    def test_duplicate_ids_rejected(self, state, make_resource):
        with pytest.raises(InvalidArgumentError):
            state.set_resources([make_resource("a"), make_resource("a")])
        assert len(state.resources) == 12

    def test_reload_from_file(self, state, config, sample_resource_dicts):
        config.resources_json_path.write_text(json.dumps({"resources": sample_resource_dicts[:2]}))
        assert state.reload_resources() == 2
        assert [r.id for r in state.resources] == ["vercel", "netlify"]

    def test_missing_file_starts_empty(self, config):
        assert AppState(config).resources == ()


class TestRecommendationConfig:
    def test_update_resets_engine(self, state):
        engine = state.get_recommendation_engine()
        state.update_recommendation_config(maxRecommendations=2)
        assert state.get_recommendation_engine() is not engine
        assert len(state.get_recommendation_engine().get_popular_recommendations()) == 2

    def test_invalid_update_keeps_config(self, state):
        with pytest.raises(InvalidArgumentError):
            state.update_recommendation_config(diversity_factor=2)
        assert state.recommendation_config.diversity_factor == 0.3

    def test_load_from_sections(self, tmp_path):
        path = tmp_path / "rec.json"
        path.write_text(json.dumps({
            "weights": {"popularity_weight": 0.5},
            "limits": {"max_recommendations": 4},
            "diversity": {"diversity_factor": 0.0, "seed": 7},
        }))
        config = load_recommendation_config(path)
        assert config.popularity_weight == 0.5
        assert config.max_recommendations == 4
        assert config.random_seed == 7

    def test_defaults_without_path(self):
        assert load_recommendation_config(None).max_recommendations == 10


class TestHistoryPersistence:
    def test_shared_file(self, state, config):
        state.record_search("react")
        reopened = AppState(config, resources=state.resources)
        assert reopened.search_history.queries() == ["react"]
        assert reopened.popular_searches.top()[0].query == "react"

    def test_corrupt_file_ignored(self, config, sample_resources):
        config.history_path.write_text("{not json")
        state = AppState(config, resources=sample_resources)
        assert len(state.search_history) == 0
        state.record_search("vue")
        assert state.search_history.queries() == ["vue"]


class TestResourceLoader:
    def test_rejects_wrong_shape(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"resources": {"vercel": {}}}))
        with pytest.raises(InvalidArgumentError):
            ResourceLoader(path).load()
