"""
API Tests

End-to-end checks of the HTTP surface over data/resources.json using
FastAPI's TestClient. Search history is written to a temporary file.

Envelope:
---------
- success: {"success": true, "data": ..., "query"?, "validQuery"?, "limit"?, "timestamp"}
- failure: {"success": false, "message": ..., "error": ...}
  400 bad parameters, 404 unknown resource, 500 anything else
"""

import json
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from server.app import create_app
from server.config import ServerConfig
from server.state import AppState, set_state

DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "resources.json"


@pytest.fixture
def server_config(tmp_path):
    return ServerConfig(
        resources_json_path=DATA_FILE,
        history_path=tmp_path / "cache" / "search_history.json",
        log_level="WARNING",
    )


@pytest.fixture
def client(server_config):
    state = AppState(server_config)
    app = create_app(state)
    with TestClient(app) as test_client:
        yield test_client
    set_state(None)


def _assert_error(response, status, error):
    assert response.status_code == status
    body = response.json()
    assert body["success"] is False
    assert body["error"] == error
    assert body["message"]


class TestRoot:
    def test_root(self, client):
        body = client.get("/").json()
        assert body["status"] == "loaded"
        assert body["resources"] == 12

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "healthy"
        assert body["index_built"] is True

    def test_unknown_route_uses_envelope(self, client):
        _assert_error(client.get("/api/nope"), 404, "Not Found")

    def test_lifespan_warms_index(self, server_config, caplog):
        caplog.set_level(logging.INFO, logger="server.app")
        state = AppState(server_config)
        with TestClient(create_app(state)):
            assert state._index is not None
        set_state(None)
        assert "Resource Search API starting..." in caplog.text
        assert "Resource Search API stopped" in caplog.text


class TestSearch:
    def test_envelope_and_top_hit(self, client):
        body = client.get("/api/search", params={"q": "supabase"}).json()
        assert body["success"] is True
        assert body["query"] == "supabase"
        assert body["limit"] == 20
        assert "timestamp" in body
        top = body["data"][0]
        assert top["resource"]["id"] == "supabase"
        assert top["resource"]["pricingModel"] == "Freemium"
        assert top["highlightedTitle"] == '<mark class="highlight">Supabase</mark>'
        assert 0 < top["score"] <= 1

    def test_empty_query_returns_everything(self, client):
        body = client.get("/api/search").json()
        assert len(body["data"]) == 12
        assert all(item["score"] == 1.0 for item in body["data"])

    def test_facet_filters_apply(self, client):
        body = client.get("/api/search", params={"q": "hosting", "category": "Database"}).json()
        assert body["data"]
        assert all(item["resource"]["category"] == "Database" for item in body["data"])

    def test_quote_balance_flag(self, client):
        assert client.get("/api/search", params={"q": '"postgres database"'}).json()["validQuery"] is True
        body = client.get("/api/search", params={"q": '"postgres database'}).json()
        assert body["validQuery"] is False
        assert body["success"] is True
        assert "validQuery" not in client.get("/api/search/suggestions", params={"q": "ver"}).json()

    def test_limit_is_capped(self, client):
        assert client.get("/api/search", params={"limit": 500}).json()["limit"] == 100

    @pytest.mark.parametrize("limit", ["-1", "-3", "abc", "1.5"])
    def test_bad_limit(self, client, limit):
        _assert_error(client.get("/api/search", params={"limit": limit}), 400, "Bad Request")

    def test_search_records_history(self, client):
        client.get("/api/search", params={"q": "figma"})
        client.get("/api/search", params={"q": "Figma"})
        history = client.get("/api/search/history").json()["data"]
        assert history[0]["query"] == "Figma"
        assert history[0]["count"] == 2

    def test_empty_search_not_recorded(self, client):
        client.get("/api/search", params={"q": "  "})
        assert client.get("/api/search/history").json()["data"] == []


class TestSuggestions:
    def test_default_limit(self, client):
        body = client.get("/api/search/suggestions", params={"q": "data"}).json()
        assert body["limit"] == 5
        assert 0 < len(body["data"]) <= 5
        scores = [s["score"] for s in body["data"]]
        assert scores == sorted(scores, reverse=True)

    def test_limit_capped_at_ten(self, client):
        body = client.get("/api/search/suggestions", params={"q": "a", "limit": 50}).json()
        assert body["limit"] == 10
        assert len(body["data"]) <= 10

    def test_resource_suggestion_uses_camel_case(self, client):
        data = client.get("/api/search/suggestions", params={"q": "vercel"}).json()["data"]
        assert data[0]["resourceId"] == "vercel"

    def test_empty_query_without_history(self, client):
        assert client.get("/api/search/suggestions").json()["data"] == []

    def test_empty_query_lists_recent_searches(self, client):
        client.get("/api/search", params={"q": "react"})
        client.get("/api/search", params={"q": "vue"})
        data = client.get("/api/search/suggestions").json()["data"]
        assert [s["text"] for s in data] == ["vue", "react"]
        assert data[0]["metadata"]["recent"] is True

    def test_popular_searches_feed_short_queries(self, client):
        client.get("/api/search", params={"q": "zq"})
        data = client.get("/api/search/suggestions", params={"q": "zq"}).json()["data"]
        assert data == [
            {"text": "zq", "type": "popular", "score": 0.9, "metadata": {"count": 1, "popularity": 1}}
        ]


class TestFacets:
    def test_all_resources(self, client):
        data = client.get("/api/search/facets").json()["data"]
        assert data["totalResults"] == 12
        assert data["facetCounts"]["category_Hosting"] == 3
        assert data["facetCounts"]["tag_database"] == 3
        assert data["facetCounts"]["technology_Python"] == 4

    def test_filters_then_query(self, client):
        data = client.get("/api/search/facets", params={"category": "design"}).json()["data"]
        assert data["totalResults"] == 2
        data = client.get("/api/search/facets", params={"q": "postgres"}).json()["data"]
        assert data["totalResults"] == 2
        assert data["facetCounts"]["category_Database"] == 1
        assert data["facetCounts"]["category_Hosting"] == 1

    def test_tags_filter(self, client):
        data = client.get("/api/search/facets", params={"tags": "mysql, realtime"}).json()["data"]
        assert data["totalResults"] == 2


class TestZeroLimit:
    @pytest.mark.parametrize("path, params", [
        ("/api/search", {"q": "vercel"}),
        ("/api/search/suggestions", {"q": "ver"}),
        ("/api/search/history", {}),
        ("/api/recommendations", {"type": "trending"}),
        ("/api/resources/vercel/alternatives", {}),
    ])
    def test_zero_limit_is_empty_not_an_error(self, client, path, params):
        client.post("/api/search/history", json={"query": "react"})
        response = client.get(path, params={**params, "limit": 0})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == []
        assert body["limit"] == 0

    @pytest.mark.parametrize("path", [
        "/api/search/suggestions",
        "/api/search/history",
        "/api/recommendations",
        "/api/resources/vercel/alternatives",
    ])
    def test_negative_limit_rejected(self, client, path):
        _assert_error(client.get(path, params={"limit": -1}), 400, "Bad Request")


class TestHistory:
    def test_record_and_list(self, client):
        body = client.post("/api/search/history", json={"query": "react"}).json()
        assert body["data"][0]["query"] == "react"
        assert client.get("/api/search/history", params={"limit": 1}).json()["limit"] == 1

    def test_persisted_to_file(self, client, server_config):
        client.post("/api/search/history", json={"query": "react"})
        stored = json.loads(server_config.history_path.read_text())
        assert "react" in next(iter(stored.values()))

    def test_clear(self, client, server_config):
        client.post("/api/search/history", json={"query": "react"})
        assert client.delete("/api/search/history").json()["data"] == {"cleared": True}
        assert client.get("/api/search/history").json()["data"] == []

    @pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": 5}])
    def test_invalid_body(self, client, payload):
        _assert_error(client.post("/api/search/history", json=payload), 400, "Bad Request")


class TestRecommendations:
    def test_trending(self, client):
        body = client.get("/api/recommendations", params={"type": "trending"}).json()
        ids = [r["resource"]["id"] for r in body["data"]]
        assert ids[:3] == ["github-copilot", "vercel", "figma"]
        assert len(ids) == 10
        assert all(r["reason"] == "trending" for r in body["data"])

    def test_related_excludes_target(self, client):
        data = client.get(
            "/api/recommendations", params={"type": "related", "resourceId": "vercel"}
        ).json()["data"]
        ids = [r["resource"]["id"] for r in data]
        assert ids[0] == "netlify"
        assert "vercel" not in ids
        assert all(r["reason"] == "content-based" for r in data)

    def test_related_requires_resource(self, client):
        _assert_error(client.get("/api/recommendations", params={"type": "related"}), 400, "Bad Request")

    def test_unknown_type(self, client):
        _assert_error(client.get("/api/recommendations", params={"type": "random"}), 400, "Bad Request")

    def test_unknown_resource(self, client):
        response = client.get("/api/recommendations", params={"resourceId": "missing"})
        _assert_error(response, 404, "Not Found")

    def test_personalized_with_interests(self, client):
        data = client.get(
            "/api/recommendations", params={"type": "personalized", "interests": "Design,ui"}
        ).json()["data"]
        assert data
        assert data[0]["resource"]["category"] == "Design"

    @pytest.mark.parametrize("rec_type", ["personalized", "popular", "diverse"])
    def test_limit(self, client, rec_type):
        body = client.get("/api/recommendations", params={"type": rec_type, "limit": 2}).json()
        assert len(body["data"]) <= 2


class TestResources:
    def test_get_resource(self, client):
        assert client.get("/api/resources/figma").json()["data"]["title"] == "Figma"

    def test_alternatives(self, client):
        data = client.get("/api/resources/vercel/alternatives").json()["data"]
        assert data[0]["resource"]["id"] == "netlify"
        assert data[0]["score"] == 1.0
        assert data[0]["reason"] == "Marked as alternative"
        assert data[0]["is_explicit"] is True

    def test_reverse_explicit_alternative(self, client):
        data = client.get("/api/resources/figma/alternatives").json()["data"]
        assert data[0]["resource"]["id"] == "penpot"
        assert data[0]["reason"] == "Marked as alternative"

    def test_unknown_resource(self, client):
        _assert_error(client.get("/api/resources/nope/alternatives"), 404, "Not Found")


class TestRecommendationConfig:
    def test_get(self, client):
        data = client.get("/api/config/recommendation").json()["data"]
        assert data["maxRecommendations"] == 10
        assert data["diversityFactor"] == 0.3

    def test_partial_update(self, client):
        data = client.patch("/api/config/recommendation", json={"maxRecommendations": 3}).json()["data"]
        assert data["maxRecommendations"] == 3
        assert data["diversityFactor"] == 0.3
        trending = client.get("/api/recommendations", params={"type": "trending"}).json()["data"]
        assert len(trending) == 3

    @pytest.mark.parametrize("payload", [{"bogus": 1}, {"diversityFactor": 5}, [1, 2]])
    def test_invalid_update(self, client, payload):
        _assert_error(client.patch("/api/config/recommendation", json=payload), 400, "Bad Request")
